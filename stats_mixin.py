import math
import tkinter as tk
from decimal import Decimal
from tkinter import ttk

from analytics import category_chart_data, monthly_chart_data
from utils import format_money

EMPTY_STATS_TEXT = "Add some expenses to see statistics!"


class StatsMixin:
    def build_stats_tab(self):
        f = self.tab_stats
        f.columnconfigure(0, weight=1)
        f.rowconfigure(1, weight=1)
        f.rowconfigure(3, weight=1)

        ttk.Label(f, text="Spending by Category", font=("Segoe UI", 11, "bold")).grid(
            row=0, column=0, sticky="w", padx=6, pady=(6, 2)
        )
        self.pie_canvas = tk.Canvas(f, height=220, bg="#ffffff", highlightthickness=1, highlightbackground="#d0d0d0")
        self.pie_canvas.grid(row=1, column=0, sticky="nsew", padx=6)

        ttk.Label(f, text="Monthly Spending Trend", font=("Segoe UI", 11, "bold")).grid(
            row=2, column=0, sticky="w", padx=6, pady=(10, 2)
        )
        self.chart_canvas = tk.Canvas(f, height=220, bg="#ffffff", highlightthickness=1, highlightbackground="#d0d0d0")
        self.chart_canvas.grid(row=3, column=0, sticky="nsew", padx=6, pady=(0, 6))

        self.pie_canvas.bind("<Configure>", lambda _: self.update_analytics())
        self.pie_canvas.bind("<Button-1>", self.on_pie_click)
        self.chart_canvas.bind("<Configure>", lambda _: self.update_analytics())

        self.selected_pie_label = None
        self.pie_slices = []
        self.pie_geometry = None

    def update_analytics(self):
        records = self.store.list()
        pie_data = category_chart_data(records)
        if self.selected_pie_label and self.selected_pie_label not in {d["name"] for d in pie_data}:
            self.selected_pie_label = None
        self.render_pie_chart(pie_data)
        self.render_bar_chart(monthly_chart_data(records))

    def render_bar_chart(self, monthly):
        canvas = self.chart_canvas
        canvas.delete("all")
        width = max(canvas.winfo_width(), 600)
        height = max(canvas.winfo_height(), 220)

        if not monthly:
            canvas.create_text(width // 2, height // 2, text=EMPTY_STATS_TEXT, fill="#666")
            return

        totals = [row["total"] for row in monthly]
        max_val = max(totals)
        if max_val <= 0:
            max_val = Decimal("1")

        left, right, bottom, top = 40, 20, 28, 20
        chart_w = width - left - right
        chart_h = height - top - bottom
        step = chart_w / len(monthly)
        bar_w = max(20, int(step * 0.6))

        canvas.create_line(left, height - bottom, width - right, height - bottom, fill="#bbbbbb")
        for idx, row in enumerate(monthly):
            value = row["total"]
            bar_h = max(0, int(chart_h * float(value / max_val)))
            x_center = left + int(step * idx + step / 2)
            x1, x2 = x_center - bar_w // 2, x_center + bar_w // 2
            y1, y2 = height - bottom - bar_h, height - bottom
            canvas.create_rectangle(x1, y1, x2, y2, fill="#8884d8", outline="")
            canvas.create_text(
                x_center, y1 - 8, text=format_money(value, self.currency_symbol), font=("Segoe UI", 8), fill="#333"
            )
            canvas.create_text(x_center, height - 12, text=row["month"], font=("Segoe UI", 8), fill="#444")

    def render_pie_chart(self, pie_data):
        canvas = self.pie_canvas
        canvas.delete("all")
        width = max(canvas.winfo_width(), 240)
        height = max(canvas.winfo_height(), 220)
        self.pie_slices = []
        self.pie_geometry = None

        total = sum((d["value"] for d in pie_data), Decimal("0"))
        if not pie_data or total <= 0:
            canvas.create_text(width // 2, height // 2, text=EMPTY_STATS_TEXT, fill="#666")
            return

        pie_width = int(width * 0.5)
        radius = max(20, min(pie_width // 2 - 8, height // 2 - 10, 100))
        cx, cy = pie_width // 2, height // 2
        legend_x = pie_width + 10
        legend_y = 12

        start = 0
        for idx, entry in enumerate(pie_data):
            extent = float(entry["value"] / total) * 360
            is_selected = entry["name"] == self.selected_pie_label
            canvas.create_arc(
                cx - radius,
                cy - radius,
                cx + radius,
                cy + radius,
                start=start,
                extent=extent,
                fill=entry["color"],
                outline="#222" if is_selected else "white",
                width=2 if is_selected else 1,
            )
            self.pie_slices.append({"start": start, "extent": extent, "label": entry["name"], "value": entry["value"]})

            y = legend_y + (idx * 18)
            canvas.create_rectangle(legend_x, y, legend_x + 10, y + 10, fill=entry["color"], outline="")
            canvas.create_text(
                legend_x + 16,
                y + 5,
                anchor="w",
                text=f"{entry['name']}: {entry['percent']:.0f}%",
                font=("Segoe UI", 8),
                fill="#333",
            )
            start += extent

        self.pie_geometry = {"cx": cx, "cy": cy, "radius": radius}
        self._draw_pie_selection_text(canvas, width, height)

    def _draw_pie_selection_text(self, canvas, width, height):
        if not self.selected_pie_label:
            return
        for seg in self.pie_slices:
            if seg["label"] == self.selected_pie_label:
                canvas.create_text(
                    width - 8,
                    height - 8,
                    anchor="se",
                    text=f"{seg['label']}: {format_money(seg['value'], self.currency_symbol)}",
                    font=("Segoe UI", 8, "bold"),
                    fill="#222",
                )
                return

    def on_pie_click(self, event):
        if not self.pie_geometry or not self.pie_slices:
            return

        cx = self.pie_geometry["cx"]
        cy = self.pie_geometry["cy"]
        radius = self.pie_geometry["radius"]
        dx = event.x - cx
        dy = event.y - cy
        self.selected_pie_label = None
        if (dx * dx + dy * dy) <= (radius * radius):
            angle = math.degrees(math.atan2(-dy, dx))
            if angle < 0:
                angle += 360
            for seg in self.pie_slices:
                if seg["start"] <= angle < seg["start"] + seg["extent"]:
                    self.selected_pie_label = seg["label"]
                    break
        self.update_analytics()

from tkinter import filedialog, messagebox, ttk

from data_store import CATEGORY_COLORS, export_filename, write_csv
from utils import format_money

EMPTY_LIST_TEXT = "No expenses yet. Add your first expense!"


class HistoryMixin:
    def build_history_tab(self):
        f = self.tab_history
        f.columnconfigure(0, weight=1)
        f.rowconfigure(1, weight=1)

        top = ttk.Frame(f)
        top.grid(row=0, column=0, sticky="ew", padx=6, pady=6)
        top.columnconfigure(0, weight=1)
        ttk.Label(top, text="All Expenses", font=("Segoe UI", 11, "bold")).grid(row=0, column=0, sticky="w")
        self.export_btn = ttk.Button(top, text="Export CSV", command=self.export_history)
        self.export_btn.grid(row=0, column=1, sticky="e")

        cols = ("category", "date", "description", "amount")
        self.history_tree = ttk.Treeview(f, columns=cols, show="headings", height=14)
        self.history_tree.grid(row=1, column=0, sticky="nsew", padx=6)
        self.history_tree.heading("category", text="Category")
        self.history_tree.heading("date", text="Date")
        self.history_tree.heading("description", text="Description")
        self.history_tree.heading("amount", text="Amount")
        self.history_tree.column("amount", anchor="e", width=100)

        scrollbar = ttk.Scrollbar(f, orient="vertical", command=self.history_tree.yview)
        self.history_tree.configure(yscrollcommand=scrollbar.set)
        scrollbar.grid(row=1, column=1, sticky="ns")

        self.history_empty = ttk.Label(f, text=EMPTY_LIST_TEXT, foreground="#666")
        self.history_empty.grid(row=2, column=0, pady=6)

        lower = ttk.Frame(f)
        lower.grid(row=3, column=0, sticky="e", padx=6, pady=6)
        ttk.Button(lower, text="Delete selected", command=self.delete_selected_expense).pack(side="left", padx=4)

        for category, color in CATEGORY_COLORS.items():
            self.history_tree.tag_configure(category, foreground=color)

    def get_selected_expense_ids(self):
        return [int(item) for item in self.history_tree.selection()]

    def refresh_history(self):
        for item in self.history_tree.get_children():
            self.history_tree.delete(item)

        for record in self.store.sorted_by_date():
            self.history_tree.insert(
                "",
                "end",
                iid=str(record.id),
                values=(record.category, record.date, record.description, format_money(record.amount, self.currency_symbol)),
                tags=(record.category,),
            )

        if len(self.store):
            self.history_empty.grid_remove()
            self.export_btn.state(["!disabled"])
        else:
            self.history_empty.grid()
            self.export_btn.state(["disabled"])

    def delete_selected_expense(self):
        ids = self.get_selected_expense_ids()
        if not ids:
            return
        for expense_id in ids:
            self.store.remove(expense_id)
        self.set_status(f"Deleted {len(ids)} expense(s).")
        self.refresh_all()

    def export_history(self):
        if not len(self.store):
            return

        file_path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            initialfile=export_filename(),
            filetypes=[("CSV files", "*.csv")],
            title="Export expenses",
        )
        if not file_path:
            return

        try:
            count = write_csv(file_path, self.store.list(), quote=self.settings.get("quote_csv", False))
        except OSError as exc:
            self.logger.error("Export to %s failed: %s", file_path, exc)
            messagebox.showerror("Export", f"Could not write {file_path}:\n{exc}")
            return

        self.set_status(f"Exported {count} rows to {file_path}")

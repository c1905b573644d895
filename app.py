import argparse
import os
import tkinter as tk
from tkinter import ttk

from analytics import summary
from data_store import ExpenseStore, load_settings
from expenses_mixin import ExpensesMixin
from history_mixin import HistoryMixin
from logging_setup import LEVEL_ENV, configure_logging, get_logger
from stats_mixin import StatsMixin
from utils import format_money


class ExpenseTracker(ExpensesMixin, HistoryMixin, StatsMixin, tk.Tk):
    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings or load_settings()
        self.currency_symbol = self.settings.get("currency_symbol", "$")
        self.logger = get_logger("expense_tracker.app")

        self.title("Personal Expense Tracker")
        self.geometry("960x720")
        self.minsize(720, 560)

        self.store = ExpenseStore(reject_negative=self.settings.get("reject_negative", False))

        self.status_var = tk.StringVar(value="Ready")
        ttk.Label(self, textvariable=self.status_var, anchor="w", relief="sunken").pack(side="bottom", fill="x")

        self.create_header()
        self.create_cards()
        self.create_tabs()

        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.refresh_all()

    def create_header(self):
        header = ttk.Frame(self, padding=(12, 10))
        header.pack(fill="x")
        ttk.Label(header, text="Personal Expense Tracker", font=("Segoe UI", 16, "bold")).pack(anchor="w")
        ttk.Label(header, text="Manage your finances with ease", foreground="#666").pack(anchor="w")

    def create_cards(self):
        cards = ttk.Frame(self, padding=(12, 0))
        cards.pack(fill="x")
        for i in range(3):
            cards.columnconfigure(i, weight=1)

        self.card_total = tk.StringVar()
        self.card_month = tk.StringVar()
        self.card_count = tk.StringVar()
        for col, (title, var) in enumerate(
            [
                ("Total Expenses", self.card_total),
                ("This Month", self.card_month),
                ("Total Entries", self.card_count),
            ]
        ):
            card = ttk.LabelFrame(cards, text=title, padding=10)
            card.grid(row=0, column=col, sticky="ew", padx=4, pady=6)
            ttk.Label(card, textvariable=var, font=("Segoe UI", 14, "bold")).pack(anchor="w")

    def create_tabs(self):
        self.notebook = ttk.Notebook(self)
        self.notebook.pack(fill="both", expand=True, padx=12, pady=6)

        self.tab_expense = ttk.Frame(self.notebook, padding=10)
        self.tab_history = ttk.Frame(self.notebook, padding=10)
        self.tab_stats = ttk.Frame(self.notebook, padding=10)

        self.notebook.add(self.tab_expense, text="Add Expense")
        self.notebook.add(self.tab_history, text="View Expenses")
        self.notebook.add(self.tab_stats, text="Statistics")

        self.build_expense_tab()
        self.build_history_tab()
        self.build_stats_tab()

    def set_status(self, text):
        self.status_var.set(text)

    def refresh_cards(self):
        stats = summary(self.store)
        self.card_total.set(format_money(stats["total"], self.currency_symbol))
        self.card_month.set(format_money(stats["month_total"], self.currency_symbol))
        self.card_count.set(str(stats["count"]))

    def refresh_all(self):
        self.refresh_cards()
        self.refresh_history()
        self.update_analytics()

    def on_close(self):
        self.store.clear()
        self.destroy()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Personal expense tracker")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG or INFO")
    parser.add_argument("--settings", default=None, help="Path to a settings JSON file")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.settings)
    configure_logging(args.log_level or os.getenv(LEVEL_ENV) or settings.get("log_level"))
    get_logger("expense_tracker.app").info("Starting expense tracker")
    app = ExpenseTracker(settings)
    app.mainloop()


if __name__ == "__main__":
    main()

from datetime import date

import tkinter as tk
from tkinter import ttk
from tkcalendar import DateEntry

from data_store import CATEGORIES, DEFAULT_CATEGORY


class ExpensesMixin:
    def build_expense_tab(self):
        f = self.tab_expense
        f.columnconfigure(1, weight=1)

        ttk.Label(f, text=f"Amount ({self.currency_symbol})").grid(row=0, column=0, sticky="w", padx=6, pady=6)
        self.amount_var = tk.StringVar()
        self.amount_entry = ttk.Entry(f, textvariable=self.amount_var)
        self.amount_entry.grid(row=0, column=1, sticky="ew", padx=6, pady=6)

        ttk.Label(f, text="Category").grid(row=1, column=0, sticky="w", padx=6, pady=6)
        self.category_var = tk.StringVar(value=DEFAULT_CATEGORY)
        self.cat_cb = ttk.Combobox(f, textvariable=self.category_var, values=CATEGORIES, state="readonly")
        self.cat_cb.grid(row=1, column=1, sticky="ew", padx=6, pady=6)

        ttk.Label(f, text="Description").grid(row=2, column=0, sticky="w", padx=6, pady=6)
        self.description_var = tk.StringVar()
        self.description_entry = ttk.Entry(f, textvariable=self.description_var)
        self.description_entry.grid(row=2, column=1, sticky="ew", padx=6, pady=6)

        ttk.Label(f, text="Date").grid(row=3, column=0, sticky="w", padx=6, pady=6)
        self.date_entry = DateEntry(f, date_pattern="yyyy-mm-dd")
        self.date_entry.grid(row=3, column=1, sticky="ew", padx=6, pady=6)

        ttk.Button(f, text="Add Expense", command=self.save_expense).grid(
            row=4, column=0, columnspan=2, sticky="ew", padx=6, pady=(12, 6)
        )
        self.description_entry.bind("<Return>", lambda _e: self.save_expense())

    def clear_expense_form(self):
        self.amount_var.set("")
        self.category_var.set(DEFAULT_CATEGORY)
        self.description_var.set("")
        self.date_entry.set_date(date.today())

    def save_expense(self):
        expense_id = self.store.add(
            self.amount_var.get(),
            self.category_var.get(),
            self.description_var.get(),
            self.date_entry.get(),
        )
        if expense_id is None:
            return

        self.clear_expense_form()
        self.amount_entry.focus_set()
        self.set_status(f"Added expense: {self.store.get(expense_id).description}")
        self.refresh_all()

"""Expense Tracker: клиент учёта доходов, расходов и склада с несколькими аккаунтами."""

__version__ = "1.0.0"

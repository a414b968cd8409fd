"""
Finance Tracker - a personal ledger of income and expenses.
"""
__version__ = "0.1.0"

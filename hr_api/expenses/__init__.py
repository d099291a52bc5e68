"""Expenses module: expense categories, claims and reimbursement."""

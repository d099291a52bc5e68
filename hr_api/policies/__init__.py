"""Policies module: company policy documents."""

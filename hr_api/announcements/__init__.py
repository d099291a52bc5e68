"""Announcements module: company-wide announcements."""

"""Time-tracking module: daily clock records and their approval."""

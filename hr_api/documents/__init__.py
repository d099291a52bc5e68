"""Documents module: employee files and their verification."""

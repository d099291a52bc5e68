"""Performance module: review cycles and performance reviews."""

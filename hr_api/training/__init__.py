"""Training module: courses and employee enrollments."""

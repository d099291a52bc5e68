"""Benefits module: benefit plans and employee enrollments."""

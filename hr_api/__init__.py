"""HR System API: companies, employees and the HR records around them."""

"""Goals module: employee objectives and progress tracking."""

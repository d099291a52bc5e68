"""Projects module: projects, teams, team assignments and budget items."""

"""Skills module: the skill catalogue and per-employee skill records."""

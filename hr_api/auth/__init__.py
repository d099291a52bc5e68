"""Auth module: users, sessions, JWT issuance and role checks."""

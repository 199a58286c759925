"""Contact-form HTTP endpoint."""

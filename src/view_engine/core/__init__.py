"""Core template evaluation for the view engine."""

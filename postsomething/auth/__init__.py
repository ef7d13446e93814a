"""Authentication module: user directory, tokens and account endpoints."""

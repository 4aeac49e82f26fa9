"""HTTP API for notenamer."""

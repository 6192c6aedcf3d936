"""HTTP API for the employee editor."""

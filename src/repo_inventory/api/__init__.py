"""HTTP API for repo-inventory."""

"""HTTP API for Feedguard."""

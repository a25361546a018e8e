"""Core configuration for Feedguard."""

"""Feedguard: content redaction and paginated feed delivery."""

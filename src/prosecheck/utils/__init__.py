"""Shared helpers: range arithmetic, typed errors and logging."""

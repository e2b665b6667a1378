"""Shared utilities (errors, logging)."""

"""Shared helpers for synutil."""

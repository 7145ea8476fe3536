"""Structured routing-file loaders."""

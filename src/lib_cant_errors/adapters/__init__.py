"""Adapters for sinks and routing files."""

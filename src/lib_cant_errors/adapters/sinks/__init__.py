"""Sink recognition and writing."""

"""Packaged data files: default settings and JSON schemas."""

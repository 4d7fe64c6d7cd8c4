"""Embedded model files, looked up by name before the filesystem."""

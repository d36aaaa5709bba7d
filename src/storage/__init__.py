"""Storage backends.

This module persists the final wire representation of a vault to a
medium: local files, process memory, or S3 objects.
"""

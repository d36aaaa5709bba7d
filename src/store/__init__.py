"""Typed table engine.

This module keeps per-type tables in memory and synchronizes them
with a storage backend through the serialization pipeline.
"""

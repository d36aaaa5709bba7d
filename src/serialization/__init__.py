"""Serialization providers.

This module turns a full table set into text or bytes and back.
Providers are pluggable and chosen by the engine at construction.
"""

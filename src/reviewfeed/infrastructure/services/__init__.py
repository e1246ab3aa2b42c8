"""Caching and avatar services."""

"""Payload decoding and review providers."""

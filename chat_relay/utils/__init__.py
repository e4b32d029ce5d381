"""Relay utilities."""

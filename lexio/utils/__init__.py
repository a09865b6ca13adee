"""Lexio utilities."""

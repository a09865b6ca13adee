"""Lexio prompt templates."""

"""Shared infrastructure: LLM client, API health, app exceptions."""

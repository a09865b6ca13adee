"""Lexio: German vocabulary tutoring agent."""

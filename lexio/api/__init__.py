"""Lexio API routers."""

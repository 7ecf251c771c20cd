"""Textual application."""

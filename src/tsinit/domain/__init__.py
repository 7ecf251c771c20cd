"""Domain models, events and exceptions."""

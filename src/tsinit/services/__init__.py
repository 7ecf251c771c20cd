"""Wizard services: state machine, rendering and tasks."""

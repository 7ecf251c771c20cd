"""Interactive TypeScript project setup wizard."""

__version__ = "1.0.0"

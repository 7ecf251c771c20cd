"""Allow running as ``python -m tsinit``."""

from tsinit.cli import main

main()

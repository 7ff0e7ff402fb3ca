"""Main entry point for the read-aloud assessment application."""
from __future__ import annotations

import sys

from app.startup import run_application


def main() -> None:
    """Application entry point."""
    sys.exit(run_application())


__all__ = ["main"]

if __name__ == "__main__":
    main()

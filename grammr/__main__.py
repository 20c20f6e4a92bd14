"""Entry point for ``python -m grammr``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())

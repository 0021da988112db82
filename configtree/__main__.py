"""Module entrypoint for running configtree as ``python -m configtree``."""

from __future__ import annotations

from configtree.cli import main


if __name__ == "__main__":
    main()

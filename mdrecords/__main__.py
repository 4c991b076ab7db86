"""Module entrypoint for running mdrecords as ``python -m mdrecords``."""

from __future__ import annotations

from mdrecords.cli import main


if __name__ == "__main__":
    main()

"""Module execution entrypoint for `python -m artemis.cli`."""

from __future__ import annotations

import sys

from artemis.cli import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

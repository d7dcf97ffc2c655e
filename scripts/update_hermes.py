#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

sys.dont_write_bytecode = True

# <repo>/scripts/update_hermes.py -> <repo>/src
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
from hermes_update_cli.cli import main  # noqa: E402


if __name__ == "__main__":
    main()

from __future__ import annotations

import os
import sqlite3
import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

# Rich falls back to 80 columns when not attached to a TTY, which wraps long
# tmp paths in CLI messages; use a wide virtual terminal for CLI output.
os.environ["COLUMNS"] = "200"

from sqliteops.core.adapters.sqlite import SQLiteAdapter  # noqa: E402


@pytest.fixture
def adapter():
    connection = sqlite3.connect(":memory:")
    yield SQLiteAdapter(connection)
    connection.close()

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the scripts importable when running tests from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def write_jsonl(tmp_path: Path):
    """Write records (dicts or raw strings) as one line each and return the path."""

    def _write(records, name: str = "dump.json") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            for rec in records:
                f.write(rec if isinstance(rec, str) else json.dumps(rec))
                f.write("\n")
        return path

    return _write

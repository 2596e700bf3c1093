#!/usr/bin/env python3
"""
Look up words in a defs.json built by build_word_definitions.py.

Usage:
  python lookup_word_definitions.py --defs defs.json cat run
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict, Iterator, List, Optional, Tuple

Meanings = List[Dict[str, Any]]


def iter_definitions(path: str) -> Iterator[Tuple[str, Meanings]]:
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            word, meanings = json.loads(line)
            yield word, meanings


def load_definitions(path: str) -> Dict[str, Meanings]:
    return dict(iter_definitions(path))


def render_meanings(meanings: Meanings) -> str:
    if not meanings:
        return "Valid word with no definition found"
    lines = []
    for meaning in meanings:
        lines.append(f"{meaning['pos']}:")
        for d in meaning["defs"]:
            lines.append(f"  • {d}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--defs", default="defs.json", help="Path to defs.json (default: defs.json)")
    ap.add_argument("--json", action="store_true", help="Print stored entries as JSON")
    ap.add_argument("words", nargs="+")
    args = ap.parse_args(argv)

    if not os.path.isfile(args.defs):
        raise SystemExit(f"No definitions file at {args.defs}; run build_word_definitions.py first")

    mapping = load_definitions(args.defs)
    print(f"Loaded {len(mapping):,} words from {args.defs}", file=sys.stderr)

    missing = 0
    for word in args.words:
        meanings = mapping.get(word)
        if meanings is None:
            missing += 1
            print(f"{word}: Invalid word")
            continue
        if args.json:
            print(json.dumps([word, meanings], ensure_ascii=False, separators=(",", ":")))
        else:
            print(word)
            print(render_meanings(meanings))

    return 1 if missing else 0


if __name__ == "__main__":
    raise SystemExit(main())

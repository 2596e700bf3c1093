#!/usr/bin/env python3
"""
Build the word definitions file from the kaikki.org English Wiktionary extract.

Input:
  - kaikki.org-dictionary-English.json   (JSON Lines, one object per word sense entry)
    Download from https://kaikki.org/dictionary/English/index.html

Output (default ./defs.json):
  - JSON Lines, one line per word, sorted by word:
      ["cat",[{"pos":"noun","defs":["a small domesticated feline"]}]]

Only words made entirely of lowercase a-z are kept; everything else
(capitalised words, phrases, hyphenated or accented words) is skipped.

Usage:
  python build_word_definitions.py \
    --input kaikki.org-dictionary-English.json \
    --output defs.json
"""

from __future__ import annotations

import argparse
import json
import os
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO


# -----------------------------
# Defaults
# -----------------------------

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_INPUT = os.path.join(SCRIPT_DIR, "kaikki.org-dictionary-English.json")
DEFAULT_OUTPUT = "defs.json"
SOURCE_URL = "https://kaikki.org/dictionary/English/index.html"

PROGRESS_EVERY = 5000
NO_DEFINITION = "No definition found"

# Used with fullmatch; "$" would accept a trailing newline.
WORD_RE = re.compile(r"[a-z]+")


# -----------------------------
# Errors
# -----------------------------

class BuildError(Exception):
    """Fatal build failure; exit_code is what the process exits with."""

    exit_code = 1


class InputNotFound(BuildError):
    exit_code = 2

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "Need to build word definitions from a dictionary reference.\n"
            f"Download the English JSON data from {SOURCE_URL}\n"
            f"And place the file at {path}"
        )


class EmptyDefinition(BuildError):
    exit_code = 3

    def __init__(self, word: str, entry: Dict[str, Any], record: Dict[str, Any]):
        self.word = word
        self.entry = entry
        self.record = record
        super().__init__(
            f"Bad def for {word}:\n"
            f"{json.dumps(entry, ensure_ascii=False)}\n"
            f"{json.dumps(record, ensure_ascii=False)}"
        )


class CountMismatch(BuildError):
    exit_code = 4

    def __init__(self, ingested: int, processed: int, skipped: int):
        self.ingested = ingested
        self.processed = processed
        self.skipped = skipped
        super().__init__(
            f"ERR: Didn't process all words "
            f"({processed:,} processed + {skipped:,} skipped != {ingested:,} ingested)"
        )


# -----------------------------
# Reading
# -----------------------------

def iter_lines(path: str) -> Iterator[str]:
    """
    Yield raw lines of the input file in order.

    Raises InputNotFound before yielding anything if the file is missing.
    """
    if not os.path.isfile(path):
        raise InputNotFound(path)
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            yield line


class RecordParser:
    """
    Parse JSON Lines one line at a time.

    Blank lines, malformed JSON and non-object values are dropped with a
    warning. They still count as ingested, so the end-of-run accounting
    check notices them.
    """

    def __init__(self) -> None:
        self.ingested = 0
        self.emitted = 0
        self.dropped = 0

    def parse(self, lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
        for line in lines:
            self.ingested += 1
            text = line.strip()
            if not text:
                self._drop("blank line")
                continue
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                self._drop(f"invalid JSON ({e})")
                continue
            if not isinstance(value, dict):
                self._drop(f"expected an object, got {type(value).__name__}")
                continue
            self.emitted += 1
            yield value

    def _drop(self, reason: str) -> None:
        self.dropped += 1
        print(f"WARNING: line {self.ingested:,}: {reason}; dropped", file=sys.stderr)


# -----------------------------
# Aggregation
# -----------------------------

def is_valid_word(word: Any) -> bool:
    return isinstance(word, str) and WORD_RE.fullmatch(word) is not None


def collect_defs(record: Dict[str, Any]) -> List[str]:
    """Flatten raw_glosses (or glosses) across senses, with the fallback text."""
    defs: List[str] = []
    for sense in record.get("senses") or []:
        defs.extend(sense.get("raw_glosses") or sense.get("glosses") or [])
    if not defs:
        defs.append(record.get("etymology_text") or NO_DEFINITION)
    return defs


@dataclass
class DefinitionAggregator:
    """Folds parsed records into word -> [{"pos", "defs"}, ...]."""

    progress_every: int = PROGRESS_EVERY
    words: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict, init=False)
    processed: int = field(default=0, init=False)
    skipped: int = field(default=0, init=False)

    def add(self, record: Dict[str, Any]) -> None:
        word = record.get("word")
        if not is_valid_word(word):
            self.skipped += 1
            return

        entry = {
            "pos": record.get("pos") or "",
            "defs": collect_defs(record),
        }
        if not all(entry["defs"]):
            raise EmptyDefinition(word, entry, record)

        self.words.setdefault(word, []).append(entry)

        self.processed += 1
        if self.progress_every and self.processed % self.progress_every == 0:
            print(f"• Processed: {self.processed:,}, Skipped: {self.skipped:,}", file=sys.stderr)

    def add_all(self, records: Iterable[Dict[str, Any]]) -> None:
        for record in records:
            self.add(record)


# -----------------------------
# Writing
# -----------------------------

def format_line(word: str, entries: List[Dict[str, Any]]) -> str:
    return json.dumps([word, entries], ensure_ascii=False, separators=(",", ":")) + "\n"


def write_defs(words: Dict[str, List[Dict[str, Any]]], out: TextIO) -> int:
    """Write one line per word in sorted order. Returns the number of lines."""
    keys = sorted(words)
    for key in keys:
        out.write(format_line(key, words[key]))
    return len(keys)


def write_defs_file(words: Dict[str, List[Dict[str, Any]]], path: str) -> int:
    """
    Write to a sibling temp file, then rename it over path.

    An interrupted or failed write leaves any previous output untouched.
    """
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as out:
            written = write_defs(words, out)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return written


# -----------------------------
# Main build
# -----------------------------

@dataclass
class RunSummary:
    ingested: int
    processed: int
    skipped: int
    output_words: int

    @property
    def total(self) -> int:
        return self.processed + self.skipped

    @property
    def consistent(self) -> bool:
        return self.total == self.ingested

    def report(self) -> None:
        print(f"• Ingested {self.ingested:,} words")
        print(f"• Processed {self.processed:,} words")
        print(f"• Skipped {self.skipped:,} words")
        print(f"• Total processed {self.total:,} words")
        print(f"• Total output {self.output_words:,} words")


def build(input_path: str, output_path: str, progress_every: int = PROGRESS_EVERY) -> RunSummary:
    """
    Run the whole pipeline.

    Raises InputNotFound / EmptyDefinition before anything is written, and
    CountMismatch after the output file is already in place.
    """
    parser = RecordParser()
    aggregator = DefinitionAggregator(progress_every=progress_every)
    aggregator.add_all(parser.parse(iter_lines(input_path)))

    print("\n-------------\n")
    print("• Sorting words")
    print("• Writing JSON lines")
    output_words = write_defs_file(aggregator.words, output_path)
    print("\n-------------\n")

    summary = RunSummary(
        ingested=parser.ingested,
        processed=aggregator.processed,
        skipped=aggregator.skipped,
        output_words=output_words,
    )
    summary.report()
    if not summary.consistent:
        raise CountMismatch(summary.ingested, summary.processed, summary.skipped)
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Build defs.json from the kaikki.org English dictionary.")
    ap.add_argument("--input", default=DEFAULT_INPUT,
                    help=f"Path to the kaikki.org JSON Lines dump (default: {DEFAULT_INPUT})")
    ap.add_argument("--output", default=DEFAULT_OUTPUT,
                    help=f"Output JSON Lines file (default: {DEFAULT_OUTPUT})")
    ap.add_argument("--progress-every", type=int, default=PROGRESS_EVERY,
                    help=f"Report progress every N processed records, 0 to disable (default: {PROGRESS_EVERY})")
    args = ap.parse_args(argv)

    try:
        build(args.input, args.output, progress_every=args.progress_every)
    except BuildError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations
import csv
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

QUOTE = '"'

def read_csv_rows(path: Path) -> Iterator[Dict[str, str]]:
    """
    Plain header + one-row-per-line CSV (books and verses tables).
    Read and decode errors propagate to the caller.
    """
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        for row in csv.DictReader(f):
            yield row

def reassemble_records(lines: Iterable[str]) -> Iterator[str]:
    """
    Join physical lines into logical records for the Strong's dialect, where a
    quoted gloss may carry raw newlines. The header line is skipped.

    A line with an odd number of quotes opens a multi-line record; the next
    line with an odd number of quotes closes it. Lines are joined with "\\n".
    """
    current: List[str] = []
    in_quotes = False
    first = True

    for line in lines:
        if first:
            first = False
            continue

        odd = line.count(QUOTE) % 2 != 0

        if not in_quotes:
            if odd:
                current = [line]
                in_quotes = True
            else:
                yield line
        else:
            current.append(line)
            if odd:
                in_quotes = False
                yield "\n".join(current)
                current = []
    # an unterminated record at EOF is dropped

def split_record(record: str) -> List[str]:
    """Split one logical record into stripped fields; "" inside quotes is a literal quote."""
    if not record.strip():
        return []

    parts: List[str] = []
    buf: List[str] = []
    in_quotes = False
    i = 0
    n = len(record)

    while i < n:
        ch = record[i]
        if ch == QUOTE and not in_quotes:
            in_quotes = True
        elif ch == QUOTE and in_quotes:
            if i + 1 < n and record[i + 1] == QUOTE:
                buf.append(QUOTE)
                i += 1
            else:
                in_quotes = False
        elif ch == "," and not in_quotes:
            parts.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
        i += 1

    parts.append("".join(buf).strip())
    return parts

def iter_strongs_records(text: str) -> Iterator[List[str]]:
    for record in reassemble_records(text.split("\n")):
        fields = split_record(record)
        if fields:
            yield fields

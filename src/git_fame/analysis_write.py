from __future__ import annotations

import csv
import json
from typing import TextIO

from .errors import SerializationError
from .models import FORMATS, RankedEntry


def write_tabular(out: TextIO, entries: list[RankedEntry]) -> None:
    out.write("%-23s%-5s %-8s%s\n" % ("Name", "Lines", "Commits", "Files"))
    for e in entries:
        out.write("%-23s%-5d %-8d%d\n" % (e.name, e.lines, e.commits, e.files))


def write_csv(out: TextIO, entries: list[RankedEntry]) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(["Name", "Lines", "Commits", "Files"])
    for e in entries:
        writer.writerow([e.name, e.lines, e.commits, e.files])


def write_json(out: TextIO, entries: list[RankedEntry]) -> None:
    out.write(json.dumps([e.as_dict() for e in entries], indent=2, ensure_ascii=False) + "\n")


def write_json_lines(out: TextIO, entries: list[RankedEntry]) -> None:
    for e in entries:
        out.write(json.dumps(e.as_dict(), ensure_ascii=False) + "\n")


_WRITERS = {
    "tabular": write_tabular,
    "csv": write_csv,
    "json": write_json,
    "json-lines": write_json_lines,
}


def write_entries(out: TextIO, entries: list[RankedEntry], fmt: str) -> None:
    if fmt not in FORMATS:
        raise SerializationError(f"unknown output format {fmt!r}; expected one of {', '.join(FORMATS)}")
    try:
        _WRITERS[fmt](out, entries)
        out.flush()
    except (OSError, ValueError, csv.Error) as e:
        raise SerializationError(f"failed to write {fmt} output: {e}") from e

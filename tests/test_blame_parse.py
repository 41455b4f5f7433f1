from __future__ import annotations

import pytest

from git_fame.analysis_blame import iter_blame_records, parse_blame_porcelain
from git_fame.errors import AttributionError

C1 = "1" * 40
C2 = "2" * 40


def _meta(sha: str, orig: int, final: int, group: int, *, author: str, committer: str, summary: str) -> list[str]:
    return [
        f"{sha} {orig} {final} {group}",
        f"author {author}",
        f"author-mail <{author.lower().replace(' ', '.')}@example.com>",
        "author-time 1735732800",
        "author-tz +0000",
        f"committer {committer}",
        f"committer-mail <{committer.lower().replace(' ', '.')}@example.com>",
        "committer-time 1735732800",
        "committer-tz +0000",
        f"summary {summary}",
        "filename a.txt",
    ]


def _porcelain() -> str:
    lines: list[str] = []
    lines += _meta(C1, 1, 1, 2, author="Alice", committer="Carol Admin", summary="init")
    lines += ["\tfirst"]
    lines += [f"{C1} 2 2", "\tsecond"]
    lines += _meta(C2, 3, 3, 1, author="Bob", committer="Carol Admin", summary="more")
    lines += [f"previous {C1} a.txt", "\tthird"]
    # C1 again, metadata omitted because it was already described.
    lines += [f"{C1} 3 4 1", "\t"]
    return "\n".join(lines) + "\n"


def test_one_record_per_content_line() -> None:
    records = list(iter_blame_records(_porcelain(), "a.txt", use_committer=False))
    assert [(r.name, r.commit) for r in records] == [
        ("Alice", C1),
        ("Alice", C1),
        ("Bob", C2),
        ("Alice", C1),
    ]
    assert all(r.path == "a.txt" and r.counts_line for r in records)


def test_parse_aggregates_per_author() -> None:
    stats = parse_blame_porcelain(_porcelain(), "a.txt", use_committer=False)
    assert set(stats) == {"Alice", "Bob"}
    assert stats["Alice"].lines == 3
    assert stats["Alice"].commits == {C1}
    assert stats["Alice"].files == {"a.txt"}
    assert stats["Bob"].lines == 1
    assert stats["Bob"].commits == {C2}


def test_parse_committer_mode_keeps_full_name() -> None:
    stats = parse_blame_porcelain(_porcelain(), "a.txt", use_committer=True)
    assert list(stats) == ["Carol Admin"]
    assert stats["Carol Admin"].lines == 4
    assert stats["Carol Admin"].commits == {C1, C2}


def test_scenario_a_three_lines_one_commit() -> None:
    raw = "\n".join(
        _meta(C1, 1, 1, 3, author="Alice", committer="Alice", summary="init")
        + ["\ta", f"{C1} 2 2", "\tb", f"{C1} 3 3", "\tc"]
    )
    stats = parse_blame_porcelain(raw, "f.py", use_committer=False)
    assert stats["Alice"].lines == 3
    assert len(stats["Alice"].commits) == 1
    assert len(stats["Alice"].files) == 1


def test_empty_output_yields_nothing() -> None:
    assert parse_blame_porcelain("", "empty.txt", use_committer=False) == {}


def test_names_are_not_normalized() -> None:
    raw = "\n".join(
        _meta(C1, 1, 1, 1, author="alice", committer="x", summary="a")
        + ["\tone"]
        + _meta(C2, 2, 2, 1, author="Alice", committer="x", summary="b")
        + ["\ttwo"]
    )
    stats = parse_blame_porcelain(raw, "f", use_committer=False)
    assert set(stats) == {"alice", "Alice"}


def test_unknown_commit_without_metadata_is_an_error() -> None:
    raw = f"{C2} 1 1 1\n\torphan\n"
    with pytest.raises(AttributionError):
        parse_blame_porcelain(raw, "f", use_committer=False)


def test_non_ascii_names_and_content() -> None:
    raw = "\n".join(
        _meta(C1, 1, 1, 2, author="José Müller", committer="Zoë", summary="ñ")
        + ["\tcafé", f"{C1} 2 2", "\tcaf�"]
    )
    assert parse_blame_porcelain(raw, "f.txt", use_committer=False)["José Müller"].lines == 2
    assert list(parse_blame_porcelain(raw, "f.txt", use_committer=True)) == ["Zoë"]


def test_carriage_return_stays_inside_the_content_line() -> None:
    raw = "\n".join(
        _meta(C1, 1, 1, 2, author="Alice", committer="Alice", summary="cr")
        + ["\tone\rtwo", f"{C1} 2 2", "\tthree\r"]
    )
    records = list(iter_blame_records(raw, "cr.txt", use_committer=False))
    assert [(r.name, r.commit) for r in records] == [("Alice", C1), ("Alice", C1)]

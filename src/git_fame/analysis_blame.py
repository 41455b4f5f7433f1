from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import AttributionError
from .git import last_commit_info, raw_attribution
from .models import AttributionRecord, ContributorStats


def _name_from_block(block: list[str], use_committer: bool) -> str:
    prefix = "committer " if use_committer else "author "
    for line in block[1:]:
        if line.startswith(prefix):
            return line[len(prefix) :].strip()
    return ""


def iter_blame_records(raw: str, file_path: str, use_committer: bool) -> Iterator[AttributionRecord]:
    """
    Yield one record per content line of `git blame --porcelain` output.

    Each block is a header (`<sha> <orig-line> <final-line> [<group-size>]`), zero or
    more metadata lines, then one TAB-prefixed content line. Metadata is only printed
    the first time a commit appears, so names are remembered per commit for the rest
    of this stream.
    """
    names_by_commit: dict[str, str] = {}
    block: list[str] = []
    for line in raw.split("\n"):
        if not line:
            continue
        if not line.startswith("\t"):
            block.append(line)
            continue
        if not block:
            continue

        header = block[0].split()
        commit = header[0] if header else ""
        if not commit:
            raise AttributionError(f"malformed blame header in {file_path}: {block[0]!r}")

        name = _name_from_block(block, use_committer)
        if name:
            names_by_commit[commit] = name
        elif commit in names_by_commit:
            name = names_by_commit[commit]
        else:
            raise AttributionError(f"blame output for {file_path} names commit {commit} without metadata")

        yield AttributionRecord(name=name, commit=commit, path=file_path)
        block = []


def stats_from_records(records: Iterable[AttributionRecord]) -> dict[str, ContributorStats]:
    stats: dict[str, ContributorStats] = {}
    for rec in records:
        s = stats.get(rec.name)
        if s is None:
            s = ContributorStats(name=rec.name)
            stats[rec.name] = s
        s.add_record(rec)
    return stats


def parse_blame_porcelain(raw: str, file_path: str, use_committer: bool) -> dict[str, ContributorStats]:
    return stats_from_records(iter_blame_records(raw, file_path, use_committer))


def blame_file(
    repo: Path, revision: str, file_path: str, use_committer: bool, timeout_s: float = 300
) -> dict[str, ContributorStats]:
    raw = raw_attribution(repo, revision, file_path, timeout_s=timeout_s)
    return parse_blame_porcelain(raw, file_path, use_committer)


def blame_empty_file(
    repo: Path, revision: str, file_path: str, use_committer: bool, timeout_s: float = 300
) -> dict[str, ContributorStats]:
    info = last_commit_info(repo, revision, file_path, timeout_s=timeout_s)
    rec = AttributionRecord(name=info.contributor(use_committer), commit=info.sha, path=file_path, counts_line=False)
    return stats_from_records([rec])


def attribute_file(
    repo: Path,
    revision: str,
    file_path: str,
    size: int | None,
    use_committer: bool,
    timeout_s: float = 300,
) -> dict[str, ContributorStats]:
    if size == 0:
        return blame_empty_file(repo, revision, file_path, use_committer, timeout_s=timeout_s)
    stats = blame_file(repo, revision, file_path, use_committer, timeout_s=timeout_s)
    if not stats:
        # Heuristic: a non-empty blob that blames to nothing is owned like an empty file.
        return blame_empty_file(repo, revision, file_path, use_committer, timeout_s=timeout_s)
    return stats

from __future__ import annotations

import subprocess
from pathlib import Path

from .errors import AttributionError, HistoryLookupError, InvalidRevision, RepositoryError
from .models import CommitInfo, TreeEntry


def run_git(args: list[str], cwd: Path, timeout_s: float = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def run_git_bytes(args: list[str], cwd: Path, timeout_s: float = 300) -> tuple[int, bytes, bytes]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def _short(stderr: str) -> str:
    return stderr.strip()[:500]


def verify_revision(repo: Path, revision: str) -> str:
    try:
        code, out, err = run_git(["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"], cwd=repo)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise RepositoryError(f"could not run git in {repo}: {e}") from e
    if code != 0 or not out.strip():
        detail = _short(err)
        raise InvalidRevision(f"invalid revision {revision!r}" + (f": {detail}" if detail else ""))
    return out.strip()


def list_tree_entries(repo: Path, revision: str) -> list[TreeEntry]:
    verify_revision(repo, revision)
    try:
        code, out, err = run_git(["ls-tree", "-r", "-l", "-z", revision], cwd=repo)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise RepositoryError(f"git ls-tree failed: {e}") from e
    if code != 0:
        raise RepositoryError(f"git ls-tree exited {code}: {_short(err)}")

    entries: list[TreeEntry] = []
    for line in out.split("\x00"):
        # <mode> SP <type> SP <object> SP+ <size> TAB <path>
        meta, sep, path = line.partition("\t")
        if not sep or not path.strip():
            continue
        parts = meta.split()
        if len(parts) < 4 or parts[1] != "blob":
            continue
        try:
            size = int(parts[3])
        except ValueError:
            continue
        entries.append(TreeEntry(path=path, size=size))
    return entries


def list_tracked_files(repo: Path, revision: str) -> list[str]:
    return [e.path for e in list_tree_entries(repo, revision)]


def raw_attribution(repo: Path, revision: str, file_path: str, timeout_s: float = 300) -> str:
    """
    Return `git blame --porcelain` output for one file.

    Blamed content is arbitrary bytes (Latin-1 text, binaries, lone CR), so the
    stream is decoded here without newline translation; lines end only at LF.
    """
    try:
        code, raw, raw_err = run_git_bytes(["blame", "--porcelain", "-l", revision, "--", file_path], cwd=repo, timeout_s=timeout_s)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise AttributionError(f"git blame failed: {e}") from e
    if code != 0:
        err = raw_err.decode("utf-8", errors="replace")
        raise AttributionError(f"git blame exited {code}: {_short(err)}")
    try:
        return raw.decode("utf-8", errors="replace")
    except UnicodeError as e:
        raise AttributionError(f"cannot decode git blame output: {e}") from e


def last_commit_info(repo: Path, revision: str, file_path: str, timeout_s: float = 300) -> CommitInfo:
    try:
        code, out, err = run_git(
            ["log", revision, "-1", "--format=%H%x00%an%x00%cn", "--", file_path],
            cwd=repo,
            timeout_s=timeout_s,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise HistoryLookupError(f"git log failed: {e}") from e
    if code != 0:
        raise HistoryLookupError(f"git log exited {code}: {_short(err)}")
    line = out.strip("\n")
    parts = line.split("\x00")
    if len(parts) != 3 or not parts[0].strip():
        raise HistoryLookupError(f"no commit touches {file_path} at {revision}")
    return CommitInfo(sha=parts[0].strip(), author_name=parts[1].strip(), committer_name=parts[2].strip())

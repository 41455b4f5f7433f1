from __future__ import annotations

import fnmatch
import posixpath


def normalize_extension(ext: str) -> str:
    e = ext.strip().lower()
    if e and not e.startswith("."):
        e = "." + e
    return e


def filter_by_extension(files: list[str], extensions: list[str]) -> list[str]:
    allowed = {normalize_extension(e) for e in extensions if e.strip()}
    out: list[str] = []
    for f in files:
        ext = posixpath.splitext(f.replace("\\", "/"))[1].lower()
        if ext and ext in allowed:
            out.append(f)
    return out


def matches_any_glob(path: str, patterns: list[str]) -> bool:
    p = path.replace("\\", "/")
    for pat in patterns:
        if pat and fnmatch.fnmatch(p, pat):
            return True
    return False


def filter_by_glob(files: list[str], patterns: list[str], include: bool) -> list[str]:
    return [f for f in files if matches_any_glob(f, patterns) == include]


def select_files(
    files: list[str],
    *,
    extensions: list[str],
    exclude: list[str],
    restrict_to: list[str],
) -> list[str]:
    """Apply the extension allow-list, then exclude globs, then restrict-to globs. Empty lists disable a filter."""
    out = list(files)
    if extensions:
        out = filter_by_extension(out, extensions)
    if exclude:
        out = filter_by_glob(out, exclude, include=False)
    if restrict_to:
        out = filter_by_glob(out, restrict_to, include=True)
    return out

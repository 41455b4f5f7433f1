from __future__ import annotations

import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from pathlib import Path

from .analysis_aggregate import merge_file_stats
from .analysis_blame import attribute_file
from .analysis_paths import select_files
from .analysis_rank import rank_contributors
from .errors import AnalysisTimeout, AttributionError, HistoryLookupError
from .git import list_tree_entries
from .models import ORDER_KEYS, ContributorStats, FameResult

GIT_TIMEOUT_S = 300.0


def default_jobs() -> int:
    return max(1, min(8, (os.cpu_count() or 4)))


def run_fame(
    *,
    repo: Path,
    revision: str = "HEAD",
    order_by: str = "lines",
    use_committer: bool = False,
    extensions: list[str] | None = None,
    exclude: list[str] | None = None,
    restrict_to: list[str] | None = None,
    jobs: int | None = None,
    deadline_s: float | None = None,
    progress: bool = False,
) -> FameResult:
    """
    List the files tracked at `revision`, blame the selected ones in a thread pool and
    rank contributors.

    Per-file failures (`AttributionError`, `HistoryLookupError`) are reported on stderr
    and collected in `FameResult.errors`; every other error propagates.
    """
    if order_by not in ORDER_KEYS:
        raise ValueError(f"order_by must be one of {', '.join(ORDER_KEYS)}, got: {order_by!r}")

    tree = list_tree_entries(repo, revision)
    sizes = {e.path: e.size for e in tree}
    files = select_files(
        [e.path for e in tree],
        extensions=list(extensions or []),
        exclude=list(exclude or []),
        restrict_to=list(restrict_to or []),
    )

    total: dict[str, ContributorStats] = {}
    errors: list[str] = []
    workers = jobs if jobs and jobs > 0 else default_jobs()

    started = time.monotonic()

    def attribute(path: str) -> dict[str, ContributorStats]:
        # git calls started late only get what is left of the deadline.
        timeout_s = GIT_TIMEOUT_S
        if deadline_s is not None:
            timeout_s = max(0.01, min(timeout_s, deadline_s - (time.monotonic() - started)))
        return attribute_file(repo, revision, path, sizes.get(path), use_committer, timeout_s=timeout_s)

    timed_out = False
    ex = ThreadPoolExecutor(max_workers=workers)
    try:
        futs = {ex.submit(attribute, path): path for path in files}
        try:
            for i, fut in enumerate(as_completed(futs, timeout=deadline_s), start=1):
                path = futs[fut]
                try:
                    file_stats = fut.result()
                except (AttributionError, HistoryLookupError) as e:
                    msg = f"{path}: {e}"
                    errors.append(msg)
                    print(f"Warning: skipping {msg}", file=sys.stderr)
                else:
                    merge_file_stats(total, file_stats)
                if progress and (i % 50 == 0 or i == len(futs)):
                    print(f"Analyzed {i}/{len(futs)} files...", file=sys.stderr)
        except FuturesTimeout as e:
            timed_out = True
            raise AnalysisTimeout(f"analysis did not finish within {deadline_s}s ({len(files)} files selected)") from e
    finally:
        # After a timeout, running blames are left to their own git timeout.
        ex.shutdown(wait=not timed_out, cancel_futures=True)

    return FameResult(
        entries=rank_contributors(total, order_by),
        files_analyzed=len(files) - len(errors),
        errors=errors,
    )

from __future__ import annotations

from collections.abc import Iterable

from .models import ContributorStats


def merge_file_stats(total: dict[str, ContributorStats], file_stats: dict[str, ContributorStats]) -> None:
    """Fold one file's per-contributor stats into `total` in place. `file_stats` is never aliased."""
    for name, fs in file_stats.items():
        acc = total.get(name)
        if acc is None:
            total[name] = fs.copy()
        else:
            acc.merge(fs)


def aggregate(per_file: Iterable[dict[str, ContributorStats]]) -> dict[str, ContributorStats]:
    total: dict[str, ContributorStats] = {}
    for file_stats in per_file:
        merge_file_stats(total, file_stats)
    return total

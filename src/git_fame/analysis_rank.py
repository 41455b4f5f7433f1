from __future__ import annotations

from collections.abc import Iterable

from .models import ORDER_KEYS, ContributorStats, RankedEntry


def _check_order_by(order_by: str) -> None:
    if order_by not in ORDER_KEYS:
        raise ValueError(f"order_by must be one of {', '.join(ORDER_KEYS)}, got: {order_by!r}")


def rank_key(entry: RankedEntry, order_by: str) -> tuple[int, int, int]:
    _check_order_by(order_by)
    values = {"lines": entry.lines, "commits": entry.commits, "files": entry.files}
    rest = [values[k] for k in ORDER_KEYS if k != order_by]
    return values[order_by], rest[0], rest[1]


def _sort_key(entry: RankedEntry, order_by: str) -> tuple[int, int, int, str, str]:
    a, b, c = rank_key(entry, order_by)
    # Numbers descend, names ascend case-insensitively; the exact name keeps the order total.
    return -a, -b, -c, entry.name.lower(), entry.name


def rank_entries(entries: Iterable[RankedEntry], order_by: str) -> list[RankedEntry]:
    _check_order_by(order_by)
    return sorted(entries, key=lambda e: _sort_key(e, order_by))


def rank_contributors(total: dict[str, ContributorStats], order_by: str) -> list[RankedEntry]:
    return rank_entries((RankedEntry.from_stats(s) for s in total.values()), order_by)

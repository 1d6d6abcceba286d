"""Period grouping and filtering.

Periods are identified by their PeriodKey (``"<start_date> to <end_date>"``)
and compared by exact string equality; dates are never parsed or normalised.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pandas as pd

from .loader import StrategyRecord


def period_key(record: StrategyRecord) -> str:
    return record.test_period.key


def list_periods(records: Iterable[StrategyRecord]) -> list[str]:
    """Distinct period keys in order of first appearance (not sorted)."""
    seen: dict[str, None] = {}
    for record in records:
        seen.setdefault(period_key(record), None)
    return list(seen)


def filter_by_period(records: Iterable[StrategyRecord], key: Optional[str]) -> list[StrategyRecord]:
    """Records whose period key equals ``key``, in input order.

    An unset key selects nothing.
    """
    if not key:
        return []
    return [r for r in records if period_key(r) == key]


def default_period(records: Sequence[StrategyRecord]) -> Optional[str]:
    """Period selected right after a load: the first record's, not the first sorted."""
    if not records:
        return None
    return period_key(records[0])


def group_by_period(records: Iterable[StrategyRecord]) -> dict[str, list[StrategyRecord]]:
    groups: dict[str, list[StrategyRecord]] = {}
    for record in records:
        groups.setdefault(period_key(record), []).append(record)
    return groups


def period_counts(records: Iterable[StrategyRecord]) -> pd.Series:
    """Number of strategies per period, indexed by period key in first-seen order."""
    groups = group_by_period(records)
    counts = pd.Series(
        {key: len(members) for key, members in groups.items()},
        name="strategies",
        dtype="int64",
    )
    counts.index.name = "period"
    return counts

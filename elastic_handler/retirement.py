"""Plans for retiring aged time-series indices.

Both planners are pure: they look at a catalog and describe the requests to
make, they never talk to the cluster.  An empty result means "skip the
request entirely"; an ``_aliases`` call with no actions is rejected by some
clusters.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .aliases import IndexCatalog


@dataclass(frozen=True)
class RetirementPlan:
    """Ordered ``(index, alias)`` pairs to detach."""

    removals: tuple[tuple[str, str], ...] = ()

    def __bool__(self) -> bool:
        return bool(self.removals)

    def __len__(self) -> int:
        return len(self.removals)

    def to_body(self) -> Optional[dict[str, Any]]:
        """Return the ``POST /_aliases`` body, or ``None`` when there is nothing to remove."""
        if not self.removals:
            return None
        return {
            "actions": [
                {"remove": {"index": index, "alias": alias}}
                for index, alias in self.removals
            ]
        }

    def to_json(self) -> Optional[bytes]:
        body = self.to_body()
        if body is None:
            return None
        return json.dumps(body, separators=(",", ":")).encode("utf-8")


def plan_alias_removal(catalog: IndexCatalog, alias: str) -> Optional[RetirementPlan]:
    """Detach *alias* from every index in *catalog*.

    Returns ``None`` for an empty catalog so callers can skip the request.
    """
    if not catalog:
        return None
    return RetirementPlan(tuple((name, alias) for name in sorted(catalog.names())))


def plan_index_deletion(catalog: IndexCatalog) -> list[str]:
    """Index names to delete, sorted; join with ``,`` for a single request."""
    return sorted(catalog.names())


def remove_older_than(
    catalog: IndexCatalog,
    layout: str,
    alias: str,
    days: int,
    now: datetime,
) -> Optional[bytes]:
    """JSON body detaching *alias* from indices older than *days*, or ``None``."""
    plan = plan_alias_removal(catalog.matching_older_than(layout, days, now), alias)
    if plan is None:
        return None
    return plan.to_json()

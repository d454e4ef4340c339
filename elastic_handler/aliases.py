"""Point-in-time view of a cluster's indices and their aliases.

Time-series indices embed their date in the name, e.g. ``logs-16-04-01``.
A *layout* is the :func:`~datetime.datetime.strptime` format describing that
name (``"logs-%y-%m-%d"``).  Names that do not parse under a layout are simply
not candidates for age-based selection, so unrelated indices such as
``.kibana`` can live in the same cluster.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    name: str
    aliases: frozenset[str] = field(default_factory=frozenset)


def parse_date(layout: str, name: str) -> Optional[datetime]:
    """Return the date embedded in *name*, or ``None`` if it does not match.

    The name must be exactly what *layout* would format, so unpadded
    fields such as ``checks-16-4-1`` do not match ``checks-%y-%m-%d``.
    """
    try:
        parsed = datetime.strptime(name, layout)
    except ValueError:
        return None
    if parsed.strftime(layout) != name:
        return None
    return parsed


def _as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


class IndexCatalog(Mapping):
    """Index name -> :class:`IndexEntry`.

    Filters never mutate the catalog; they return a new one.  Iteration order
    carries no meaning, sort names before comparing them.
    """

    def __init__(self, entries: Optional[dict[str, IndexEntry]] = None):
        self._entries: dict[str, IndexEntry] = dict(entries or {})

    @classmethod
    def from_raw_listing(cls, raw: Optional[Mapping[str, Any]]) -> "IndexCatalog":
        """Build a catalog from a ``GET /_aliases`` response body.

        The expected shape is ``{index: {"aliases": {alias: {...}}}}``.
        Extra fields are ignored.
        """
        entries: dict[str, IndexEntry] = {}
        for name, info in (raw or {}).items():
            aliases = (info or {}).get("aliases") or {}
            entries[name] = IndexEntry(name=name, aliases=frozenset(aliases))
        return cls(entries)

    def __getitem__(self, name: str) -> IndexEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"IndexCatalog({sorted(self._entries)!r})"

    def names(self) -> set[str]:
        return set(self._entries)

    def with_alias(self, alias: str) -> "IndexCatalog":
        """Entries currently carrying *alias*."""
        return IndexCatalog(
            {name: entry for name, entry in self._entries.items() if alias in entry.aliases}
        )

    def matching(self, layout: str) -> "IndexCatalog":
        """Entries whose name parses under *layout*."""
        out: dict[str, IndexEntry] = {}
        for name, entry in self._entries.items():
            if parse_date(layout, name) is None:
                logger.debug("Skipping %s: does not match %r", name, layout)
                continue
            out[name] = entry
        return IndexCatalog(out)

    def matching_older_than(
        self, layout: str, days: int, now: datetime
    ) -> "IndexCatalog":
        """Entries matching *layout* dated strictly before ``now - days``.

        An index dated exactly on the cutoff is kept, so with ``now`` at
        ``2016-04-09 01:00`` and ``days=7`` the cutoff is ``2016-04-02 01:00``
        and ``2016-04-02`` (midnight) is the newest index selected.
        """
        cutoff = _as_naive_utc(now) - timedelta(days=days)
        out: dict[str, IndexEntry] = {}
        for name, entry in self._entries.items():
            dated = parse_date(layout, name)
            if dated is None:
                continue
            if not dated < cutoff:
                continue
            out[name] = entry
        return IndexCatalog(out)

"""High-level client: bulk writes, searches, and time-series retention."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from string import Template
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .aliases import IndexCatalog
from .batch import BatchBuffer
from .config import ConnectionConfig, load_config
from .errors import TransportError
from .models import BulkResponse
from .retirement import plan_alias_removal, plan_index_deletion
from .transport import OpenSearchTransport, Transport

logger = logging.getLogger(__name__)

Body = Union[bytes, str, None]


def _as_bytes(body: Body) -> Optional[bytes]:
    if body is None:
        return None
    if isinstance(body, str):
        return body.encode("utf-8")
    return body


class Client:
    """Thin request layer over a :class:`~elastic_handler.transport.Transport`."""

    def __init__(self, transport: Transport, flush_threshold: int = 0):
        self.transport = transport
        self.flush_threshold = flush_threshold

    @classmethod
    def from_config(
        cls, config: Optional[ConnectionConfig] = None, **overrides
    ) -> "Client":
        """Build a client on an opensearch-py transport.

        Args:
            config: An explicit :class:`ConnectionConfig`.  When ``None``,
                one is built from env vars + *overrides*.
        """
        if config is None:
            config = load_config(**overrides)
        transport = OpenSearchTransport.from_config(config)
        return cls(transport, flush_threshold=config.flush_threshold)

    # ---------- raw requests ----------

    def _execute(self, method: str, path: str, body: Body) -> tuple[int, bytes]:
        status, raw = self.transport.execute(method, path, _as_bytes(body))
        if status >= 300:
            raise TransportError(status, raw.decode("utf-8", "replace"))
        return status, raw

    @staticmethod
    def _decode(status: int, raw: bytes) -> Any:
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise TransportError(status, raw.decode("utf-8", "replace")) from exc

    def request(
        self, method: str, path: str, body: Body = None, decode: bool = True
    ) -> Any:
        """Perform a request and return the response.

        With ``decode=False`` the body is returned as text, for endpoints
        such as ``_cat/*`` that do not answer in JSON.

        Raises:
            TransportError: on connection failure, a status >= 300, or a
                2xx body that is not valid JSON when decoding.
        """
        status, raw = self._execute(method, path, body)
        if not decode:
            return raw.decode("utf-8", "replace")
        return self._decode(status, raw)

    # ---------- writes ----------

    def bulk(self, body: Body) -> None:
        self._execute("POST", "/_bulk", body)

    def bulk_response(self, body: Body) -> BulkResponse:
        status, raw = self._execute("POST", "/_bulk", body)
        try:
            return BulkResponse.model_validate(self._decode(status, raw) or {})
        except ValidationError as exc:
            raise TransportError(status, raw.decode("utf-8", "replace")) from exc

    def batch(
        self,
        index: str,
        doc_type: Optional[str] = None,
        flush_threshold: Optional[int] = None,
    ) -> BatchBuffer:
        """Return a new :class:`BatchBuffer` writing through this client."""
        if flush_threshold is None:
            flush_threshold = self.flush_threshold
        return BatchBuffer(self, index, doc_type, flush_threshold=flush_threshold)

    # ---------- index management ----------

    def delete_index(self, index: str) -> None:
        self._execute("DELETE", f"/{index}", None)

    def delete_all(self) -> None:
        self._execute("DELETE", "/_all", None)

    def refresh_index(self, index: str) -> None:
        self._execute("POST", f"/{index}/_refresh", None)

    def refresh_all(self) -> None:
        self._execute("POST", "/_refresh", None)

    def aliases(self) -> IndexCatalog:
        """Return every index and its aliases."""
        return IndexCatalog.from_raw_listing(self.request("GET", "/_aliases"))

    # ---------- retention ----------

    def remove_old_aliases(
        self, layout: str, alias: str, days: int, now: datetime
    ) -> int:
        """Detach *alias* from indices matching *layout* older than *days*.

        To keep the past week inclusive you might use
        ``remove_old_aliases("logs-%y-%m-%d", "last_week", 8, datetime.now(timezone.utc))``.
        Returns the number of indices detached; no request is made when that
        is zero.
        """
        catalog = self.aliases().with_alias(alias).matching_older_than(layout, days, now)
        plan = plan_alias_removal(catalog, alias)
        if not plan:
            return 0

        self._execute("POST", "/_aliases", plan.to_json())
        logger.info("Removed alias %s from %d indices", alias, len(plan))
        return len(plan)

    def remove_old_indexes(self, layout: str, days: int, now: datetime) -> list[str]:
        """Delete indices matching *layout* older than *days*.

        All selected indices go in a single ``DELETE``.  Returns the deleted
        names.
        """
        catalog = self.aliases()
        if not catalog:
            return []

        names = plan_index_deletion(catalog.matching_older_than(layout, days, now))
        if not names:
            return []

        self.delete_index(",".join(names))
        logger.info("Deleted %d indices: %s", len(names), ", ".join(names))
        return names

    # ---------- search ----------

    def search_index(self, index: str, query: Any) -> Any:
        """Run *query* (any JSON-serializable object) against *index*."""
        return self.search_index_string(index, json.dumps(query))

    def search_index_string(self, index: str, query: str) -> Any:
        return self.request("POST", f"/{index}/_search", query)

    def search_index_template(
        self, index: str, template: str, data: Mapping[str, Any]
    ) -> Any:
        """Fill ``$name`` placeholders in *template* from *data*, then search.

        Missing keys raise ``KeyError``.
        """
        return self.search_index_string(index, Template(template).substitute(data))

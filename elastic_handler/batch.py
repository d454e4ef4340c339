from __future__ import annotations

import logging
from typing import Any, Optional

from .bulk import BulkRecord, encode
from .errors import TransportError
from .models import BulkResponse

logger = logging.getLogger(__name__)


class BatchBuffer:
    """
    Buffered writer for a single index/type, flushed through ``_bulk``.

    ``add`` never does I/O unless a ``flush_threshold`` is configured, in
    which case reaching it flushes inline and any failure is raised from
    ``add``.  A failed flush keeps every pending record, so calling
    ``flush()`` again retries the same batch.

    Not safe to share between threads; use one buffer per writer.

    Usage:
        client = Client.from_config(load_config())
        with client.batch("pets", "pet") as batch:
            for pet in pets:
                batch.add(pet)
    """

    def __init__(
        self,
        client: Any,
        index: str,
        doc_type: Optional[str] = None,
        flush_threshold: int = 0,
    ):
        if flush_threshold < 0:
            raise ValueError("flush_threshold must be >= 0")
        self._client = client
        self.index = index
        self.doc_type = doc_type
        self.flush_threshold = flush_threshold
        self._pending: list[Any] = []

    def __len__(self) -> int:
        return len(self._pending)

    def __enter__(self) -> "BatchBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()

    # --------------------------- public API

    def add(self, record: Any) -> None:
        self._pending.append(record)
        if self.flush_threshold and len(self._pending) >= self.flush_threshold:
            self.flush()

    def size(self) -> int:
        return len(self._pending)

    def flush(self) -> Optional[BulkResponse]:
        """Write all pending records in one bulk request.

        Returns ``None`` without touching the network when nothing is pending.
        Any 2xx status counts as written: the buffer is cleared even when the
        response body cannot be read, and the ``TransportError`` still
        propagates so the caller knows the outcome is unconfirmed.
        """
        if not self._pending:
            return None

        pending = self._pending
        body = encode(BulkRecord(self.index, self.doc_type, record) for record in pending)
        try:
            response = self._client.bulk_response(body)
        except TransportError as exc:
            # A 2xx status means the cluster took the write; only the body was unreadable.
            if exc.status is not None and 200 <= exc.status < 300:
                self._pending = []
                logger.error(
                    "Bulk write of %d records to %s accepted with unreadable response",
                    len(pending),
                    self.index,
                )
            raise

        self._pending = []
        logger.info("Flushed %d records to %s", len(pending), self.index)

        if response.errors:
            failed = response.failed_items()
            logger.warning(
                "Bulk write to %s reported %d failed items", self.index, len(failed)
            )
        return response

    def close(self) -> Optional[BulkResponse]:
        """Flush remaining records; safe to call multiple times."""
        return self.flush()

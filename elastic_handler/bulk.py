"""Encoding for the newline-delimited ``_bulk`` write protocol."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Iterable, NamedTuple, Optional

from .errors import EncodingError


class BulkRecord(NamedTuple):
    index: str
    doc_type: Optional[str]
    body: Any


def _to_jsonable(body: Any) -> Any:
    if hasattr(body, "model_dump"):
        return body.model_dump(mode="json")
    if dataclasses.is_dataclass(body) and not isinstance(body, type):
        return dataclasses.asdict(body)
    return body


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), allow_nan=False)


def action_line(index: str, doc_type: Optional[str] = None) -> str:
    meta: dict[str, Any] = {"_index": index}
    if doc_type is not None:
        meta["_type"] = doc_type
    return _dumps({"index": meta})


def encode(records: Iterable[BulkRecord]) -> bytes:
    """Encode *records* as a ``_bulk`` request body.

    Each record becomes an action line followed by its source line.  Every
    line is newline-terminated, so the stream always ends with ``\\n``; the
    server rejects bulk bodies without it.

    The whole body is built before returning, so a record that fails to
    serialize means nothing is sent.

    Raises:
        EncodingError: a record body has no JSON representation.
    """
    lines: list[str] = []
    for position, record in enumerate(records):
        try:
            source = _dumps(_to_jsonable(record.body))
        except (TypeError, ValueError) as exc:
            raise EncodingError(
                f"record {position} for index {record.index!r} is not serializable: {exc}"
            ) from exc
        lines.append(action_line(record.index, record.doc_type))
        lines.append(source)

    if not lines:
        return b""
    return ("\n".join(lines) + "\n").encode("utf-8")

"""Exception hierarchy for elastic_handler.

Callers can catch :class:`ElasticHandlerError` for everything raised by this
package, or discriminate encoding problems (nothing was sent) from transport
problems (the request was attempted).
"""

from __future__ import annotations

from typing import Optional


class ElasticHandlerError(Exception):
    """Base class for all elastic_handler exceptions."""


class EncodingError(ElasticHandlerError):
    """Raised when a record body cannot be serialized to JSON."""


class TransportError(ElasticHandlerError):
    """Raised for connection failures and non-2xx responses.

    ``status`` is ``None`` when no HTTP response was received at all.
    ``body`` holds the raw response text for diagnosis.
    """

    def __init__(self, status: Optional[int], body: str = "") -> None:
        self.status = status
        self.body = body
        label = status if status is not None else "N/A"
        super().__init__(f"{label}: {body}")

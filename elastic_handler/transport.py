"""HTTP transport for Elasticsearch / OpenSearch clusters.

The rest of the package only needs one operation from the wire:
``execute(method, path, body) -> (status, raw_bytes)``.  Anything that
provides it satisfies :class:`Transport`; :class:`OpenSearchTransport` is the
production implementation on top of opensearch-py.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol

from opensearchpy import OpenSearch
from opensearchpy.exceptions import TransportError as OpenSearchTransportError

from .config import ConnectionConfig, load_config
from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"content-type": "application/json"}


class Transport(Protocol):
    def execute(
        self, method: str, path: str, body: Optional[bytes] = None
    ) -> tuple[int, bytes]:
        """Perform one request and return ``(status, raw_body)``."""


def create_client(
    config: Optional[ConnectionConfig] = None,
    **overrides,
) -> OpenSearch:
    """Create and return an opensearch-py client.

    Args:
        config: An explicit :class:`ConnectionConfig`.  When ``None``,
            one is built via :func:`load_config` (env vars + *overrides*).
        **overrides: Passed to :func:`load_config` when *config* is ``None``.

    Returns:
        A configured OpenSearch client instance.
    """
    if config is None:
        config = load_config(**overrides)

    kwargs: dict = {
        "hosts": config.hosts,
        "use_ssl": config.use_ssl,
        "verify_certs": config.verify_certs,
        "ssl_show_warn": config.ssl_show_warn,
        "timeout": config.timeout,
        "http_compress": config.http_compress,
    }

    http_auth = config.auth.http_auth()
    if http_auth:
        kwargs["http_auth"] = http_auth

    if config.ca_certs:
        kwargs["ca_certs"] = config.ca_certs

    return OpenSearch(**kwargs)


class OpenSearchTransport:
    """:class:`Transport` backed by an opensearch-py connection.

    Requests go straight to a pooled connection so the caller sees the raw
    status and body.  Nothing is retried here.
    """

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def from_config(
        cls, config: Optional[ConnectionConfig] = None, **overrides
    ) -> "OpenSearchTransport":
        return cls(create_client(config, **overrides))

    def execute(
        self, method: str, path: str, body: Optional[bytes] = None
    ) -> tuple[int, bytes]:
        logger.debug("%s %s (%d bytes)", method, path, len(body) if body else 0)
        connection = self._client.transport.get_connection()
        try:
            status, _headers, raw = connection.perform_request(
                method, path, body=body, headers=DEFAULT_HEADERS
            )
        except OpenSearchTransportError as exc:
            raise _translate_error(exc) from exc

        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        return status, raw or b""


def _translate_error(exc: OpenSearchTransportError) -> TransportError:
    """Map an opensearch-py error onto :class:`TransportError`.

    Connection-level failures report ``status_code == "N/A"``.
    """
    status = exc.status_code if isinstance(exc.status_code, int) else None
    info = exc.info
    if status is None:
        return TransportError(None, str(exc.error))
    if isinstance(info, (bytes, str)):
        text = info.decode("utf-8", "replace") if isinstance(info, bytes) else info
    else:
        text = json.dumps(info)
    return TransportError(status, text)

"""Connection settings for an Elasticsearch / OpenSearch cluster.

Credential pattern:
  - Separate host / port (not combined URL)
  - AWS keys win over user/password when both are set
  - opensearch-py is used as the transport (compatible with ES 7.x)

All settings can be overridden via environment variables or by passing
values directly to ``ConnectionConfig``.  Nothing here is module-level
state: build a config and hand it to the client.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .auth import AuthStrategy, AwsSigned, BasicAuth, NoAuth


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass
class ConnectionConfig:
    """Connection and batching configuration for a cluster."""

    host: str = "localhost"
    port: int = 9200
    use_ssl: bool = False
    verify_certs: bool = True
    ssl_show_warn: bool = False
    ca_certs: Optional[str] = None
    timeout: int = 30
    http_compress: bool = False
    user: Optional[str] = None
    password: Optional[str] = None
    aws_access_key: Optional[str] = None
    aws_secret_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_region: Optional[str] = None
    aws_service: str = "es"
    flush_threshold: int = 0

    @property
    def hosts(self) -> list[dict]:
        """Return hosts list in the format expected by opensearch-py."""
        scheme = "https" if self.use_ssl else "http"
        return [{"host": self.host, "port": self.port, "scheme": scheme}]

    @property
    def auth(self) -> AuthStrategy:
        if self.aws_access_key and self.aws_secret_key:
            if not self.aws_region:
                raise ValueError("aws_region is required for AWS signed requests")
            return AwsSigned(
                access_key=self.aws_access_key,
                secret_key=self.aws_secret_key,
                region=self.aws_region,
                session_token=self.aws_session_token,
                service=self.aws_service,
            )
        if self.user and self.password:
            return BasicAuth(self.user, self.password)
        return NoAuth()


def load_config(**overrides) -> ConnectionConfig:
    """Build a ConnectionConfig with env-var and keyword overrides.

    Resolution order (later wins):
      1. Dataclass defaults
      2. Environment variables (``ELASTIC_HOST``, etc.)
      3. Explicit keyword arguments

    Supported env vars:
      - ELASTIC_HOST / ELASTIC_PORT
      - ELASTIC_USER / ELASTIC_PASSWORD
      - ELASTIC_USE_SSL  ("true"/"false")
      - ELASTIC_VERIFY_CERTS  ("true"/"false")
      - ELASTIC_CA_CERTS
      - ELASTIC_TIMEOUT
      - ELASTIC_HTTP_COMPRESS ("true"/"false")
      - ELASTIC_AWS_ACCESS_KEY / ELASTIC_AWS_SECRET_KEY
      - ELASTIC_AWS_SESSION_TOKEN / ELASTIC_AWS_REGION
      - ELASTIC_FLUSH_THRESHOLD
    """
    cfg = ConnectionConfig()

    # Env-var layer
    host = os.getenv("ELASTIC_HOST")
    if host:
        cfg.host = host

    port = os.getenv("ELASTIC_PORT")
    if port:
        cfg.port = int(port)

    user = os.getenv("ELASTIC_USER")
    if user:
        cfg.user = user

    password = os.getenv("ELASTIC_PASSWORD")
    if password:
        cfg.password = password

    ssl_env = os.getenv("ELASTIC_USE_SSL")
    if ssl_env is not None:
        cfg.use_ssl = _parse_bool(ssl_env)

    verify_env = os.getenv("ELASTIC_VERIFY_CERTS")
    if verify_env is not None:
        cfg.verify_certs = _parse_bool(verify_env)

    ca_certs = os.getenv("ELASTIC_CA_CERTS")
    if ca_certs:
        cfg.ca_certs = ca_certs

    timeout = os.getenv("ELASTIC_TIMEOUT")
    if timeout:
        cfg.timeout = int(timeout)

    http_compress = os.getenv("ELASTIC_HTTP_COMPRESS")
    if http_compress is not None:
        cfg.http_compress = _parse_bool(http_compress)

    access_key = os.getenv("ELASTIC_AWS_ACCESS_KEY")
    if access_key:
        cfg.aws_access_key = access_key

    secret_key = os.getenv("ELASTIC_AWS_SECRET_KEY")
    if secret_key:
        cfg.aws_secret_key = secret_key

    session_token = os.getenv("ELASTIC_AWS_SESSION_TOKEN")
    if session_token:
        cfg.aws_session_token = session_token

    region = os.getenv("ELASTIC_AWS_REGION")
    if region:
        cfg.aws_region = region

    flush_threshold = os.getenv("ELASTIC_FLUSH_THRESHOLD")
    if flush_threshold:
        cfg.flush_threshold = int(flush_threshold)

    # Explicit overrides layer
    for key, value in overrides.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
        else:
            raise TypeError(f"Unknown config key: {key!r}")

    return cfg

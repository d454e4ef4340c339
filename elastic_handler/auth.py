"""Request authentication strategies.

One strategy is chosen per client and applied to every outgoing request:

  - :class:`NoAuth` sends requests unauthenticated
  - :class:`BasicAuth` sends an ``Authorization: Basic`` header
  - :class:`AwsSigned` signs each request with AWS SigV4 (managed domains)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class NoAuth:
    def http_auth(self) -> None:
        return None


@dataclass(frozen=True)
class BasicAuth:
    user: str
    password: str

    def http_auth(self) -> tuple[str, str]:
        return (self.user, self.password)


@dataclass(frozen=True)
class AwsSigned:
    access_key: str
    secret_key: str
    region: str
    session_token: Optional[str] = None
    service: str = "es"

    def http_auth(self) -> Any:
        """Return a SigV4 signer usable as opensearch-py ``http_auth``.

        botocore is only needed when this strategy is selected.
        """
        from botocore.credentials import Credentials
        from opensearchpy import Urllib3AWSV4SignerAuth

        credentials = Credentials(self.access_key, self.secret_key, self.session_token)
        return Urllib3AWSV4SignerAuth(credentials, self.region, self.service)


AuthStrategy = Union[NoAuth, BasicAuth, AwsSigned]

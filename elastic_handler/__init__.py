"""Elasticsearch / OpenSearch client with batched writes and time-series retention."""

from .aliases import IndexCatalog, IndexEntry, parse_date
from .auth import AuthStrategy, AwsSigned, BasicAuth, NoAuth
from .batch import BatchBuffer
from .bulk import BulkRecord, encode
from .client import Client
from .config import ConnectionConfig, load_config
from .errors import ElasticHandlerError, EncodingError, TransportError
from .models import BulkResponse, BulkResponseItem, BulkResponseItemResult
from .retirement import (
    RetirementPlan,
    plan_alias_removal,
    plan_index_deletion,
    remove_older_than,
)
from .transport import OpenSearchTransport, Transport, create_client

__all__ = [
    # client
    "Client",
    "create_client",
    "OpenSearchTransport",
    "Transport",
    # config
    "ConnectionConfig",
    "load_config",
    # auth
    "AuthStrategy",
    "NoAuth",
    "BasicAuth",
    "AwsSigned",
    # bulk
    "BulkRecord",
    "encode",
    "BatchBuffer",
    "BulkResponse",
    "BulkResponseItem",
    "BulkResponseItemResult",
    # aliases
    "IndexCatalog",
    "IndexEntry",
    "parse_date",
    # retirement
    "RetirementPlan",
    "plan_alias_removal",
    "plan_index_deletion",
    "remove_older_than",
    # errors
    "ElasticHandlerError",
    "EncodingError",
    "TransportError",
]

from .client import Client
from .index import IndexClient
from .exceptions import (
    PineconeError,
    PineconeConfigError,
    PineconeTransportError,
    PineconeAPIError,
    PineconeAuthenticationError,
    PineconeNotFoundError,
    PineconeDecodeError,
    PineconeUseAfterDeleteError,
)
from .models import (
    ClientInfo,
    ConfigureIndexRequest,
    CreateIndexRequest,
    Credentials,
    FetchRequest,
    FetchResponse,
    IndexDatabase,
    IndexDescription,
    IndexStats,
    IndexStatus,
    Metric,
    NamespaceStats,
    QueryRequest,
    QueryResponse,
    ScoredVector,
    SparseValues,
    UpdateRequest,
    UpsertRequest,
    UpsertResponse,
    Vector,
)
from .ingest import to_vectors

__version__ = "0.1.5"

__all__ = [
    "Client",
    "IndexClient",
    "PineconeError",
    "PineconeConfigError",
    "PineconeTransportError",
    "PineconeAPIError",
    "PineconeAuthenticationError",
    "PineconeNotFoundError",
    "PineconeDecodeError",
    "PineconeUseAfterDeleteError",
    "ClientInfo",
    "ConfigureIndexRequest",
    "CreateIndexRequest",
    "Credentials",
    "FetchRequest",
    "FetchResponse",
    "IndexDatabase",
    "IndexDescription",
    "IndexStats",
    "IndexStatus",
    "Metric",
    "NamespaceStats",
    "QueryRequest",
    "QueryResponse",
    "ScoredVector",
    "SparseValues",
    "UpdateRequest",
    "UpsertRequest",
    "UpsertResponse",
    "Vector",
    "to_vectors",
]

import math
import os
from enum import Enum
from typing import List, Dict, Optional, Any

import httpx
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import PineconeConfigError


class PineconeModel(BaseModel):
    """Base for wire types: accepts attribute names or wire aliases, ignores unknown fields."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names, with unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _as_float_list(value: Any) -> Any:
    # numpy arrays and similar sequences
    if hasattr(value, "tolist"):
        return value.tolist()
    return value


def _check_finite(values: List[float]) -> List[float]:
    for i, v in enumerate(values):
        if not math.isfinite(v):
            raise ValueError(f"Vector contains invalid value (NaN or Inf) at index {i}")
    return values


class Credentials(PineconeModel):
    """API key plus the environment (region) that selects the endpoints."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    environment: str

    @classmethod
    def from_env(cls) -> "Credentials":
        """Read PINECONE_API_KEY and PINECONE_ENV."""
        api_key = os.environ.get("PINECONE_API_KEY")
        environment = os.environ.get("PINECONE_ENV")
        missing = [name for name, val in (("PINECONE_API_KEY", api_key), ("PINECONE_ENV", environment)) if not val]
        if missing:
            raise PineconeConfigError(f"Missing environment variable(s): {', '.join(missing)}")
        return cls(api_key=api_key, environment=environment)


class ClientInfo(PineconeModel):
    """Caller metadata returned by whoami; project_name is part of every index URL."""
    model_config = ConfigDict(frozen=True)

    project_name: str
    user_label: Optional[str] = None
    user_name: Optional[str] = None


class Metric(str, Enum):
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOTPRODUCT = "dotproduct"

    def __str__(self) -> str:
        return self.value


class SparseValues(PineconeModel):
    """Sparse component of a record: parallel index and value lists."""
    indices: List[int]
    values: List[float]

    @field_validator("indices", "values", mode="before")
    @classmethod
    def _coerce_arrays(cls, v: Any) -> Any:
        return _as_float_list(v)

    @model_validator(mode="after")
    def _same_length(self) -> "SparseValues":
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"Sparse indices and values differ in length ({len(self.indices)} != {len(self.values)})"
            )
        return self


class Vector(PineconeModel):
    """Represents a single vector record."""
    id: str
    values: List[float]
    sparse_values: Optional[SparseValues] = Field(default=None, alias="sparseValues")
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, v: Any) -> Any:
        return _as_float_list(v)

    @field_validator("values")
    @classmethod
    def _finite_values(cls, v: List[float]) -> List[float]:
        return _check_finite(v)

    @property
    def dimension(self) -> int:
        return len(self.values)


class UpsertRequest(PineconeModel):
    namespace: str
    vectors: List[Vector]


class UpsertResponse(PineconeModel):
    # zero counts are omitted from the response body
    upserted_count: int = Field(default=0, alias="upsertedCount")


class IndexDatabase(PineconeModel):
    """Configuration block of an index description."""
    name: str
    metric: Metric = Metric.COSINE
    dimension: int
    replicas: int = 1
    shards: int = 1
    pods: int = 1
    pod_type: str = "p1.x1"
    metadata_config: Optional[Dict[str, Any]] = None
    source_collection: Optional[str] = None


class IndexStatus(PineconeModel):
    ready: bool = False
    state: str = "Unknown"
    host: Optional[str] = None
    port: Optional[int] = None


class IndexDescription(PineconeModel):
    """Result of describing an index on the control plane."""
    database: IndexDatabase
    status: IndexStatus = Field(default_factory=IndexStatus)


class NamespaceStats(PineconeModel):
    vector_count: int = Field(default=0, alias="vectorCount")


class IndexStats(PineconeModel):
    """Statistics about a specific index."""
    namespaces: Dict[str, NamespaceStats] = Field(default_factory=dict)
    dimension: int = 0
    index_fullness: float = Field(default=0.0, alias="indexFullness")
    total_vector_count: int = Field(default=0, alias="totalVectorCount")


class ConfigureIndexRequest(PineconeModel):
    replicas: int = Field(ge=1)
    pod_type: str


class CreateIndexRequest(PineconeModel):
    """Body for creating an index on the control plane."""
    name: str
    dimension: int = Field(ge=1)
    metric: Metric = Metric.COSINE
    pods: int = 1
    replicas: int = 1
    pod_type: str = "p1.x1"
    metadata_config: Optional[Dict[str, Any]] = None
    source_collection: Optional[str] = None


class UpdateRequest(PineconeModel):
    """Partial update of one record; only the fields that are set are sent."""
    id: str
    values: Optional[List[float]] = None
    sparse_values: Optional[SparseValues] = Field(default=None, alias="sparseValues")
    set_metadata: Optional[Dict[str, Any]] = Field(default=None, alias="setMetadata")
    namespace: Optional[str] = None

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, v: Any) -> Any:
        return _as_float_list(v)

    @field_validator("values")
    @classmethod
    def _finite_values(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        return None if v is None else _check_finite(v)


class FetchRequest(PineconeModel):
    ids: List[str]
    namespace: Optional[str] = None

    def url(self, base: str) -> str:
        """Fetch URL for this request: ids (first occurrence wins) and namespace as query parameters."""
        params = [("ids", i) for i in dict.fromkeys(self.ids)]
        if self.namespace is not None:
            params.append(("namespace", self.namespace))
        url = f"{base}/vectors/fetch"
        # left unparsed so a malformed host surfaces when the request is sent
        return f"{url}?{httpx.QueryParams(params)}" if params else url


class FetchResponse(PineconeModel):
    vectors: Dict[str, Vector] = Field(default_factory=dict)
    namespace: str = ""


class QueryRequest(PineconeModel):
    """Similarity search by vector, sparse vector, or stored record id."""
    namespace: Optional[str] = None
    top_k: int = Field(default=10, ge=1, alias="topK")
    filter: Optional[Dict[str, Any]] = None
    include_values: bool = Field(default=False, alias="includeValues")
    include_metadata: bool = Field(default=False, alias="includeMetadata")
    vector: Optional[List[float]] = None
    sparse_vector: Optional[SparseValues] = Field(default=None, alias="sparseVector")
    id: Optional[str] = None

    @field_validator("vector", mode="before")
    @classmethod
    def _coerce_vector(cls, v: Any) -> Any:
        return _as_float_list(v)

    @field_validator("vector")
    @classmethod
    def _finite_vector(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        return None if v is None else _check_finite(v)


class ScoredVector(PineconeModel):
    """Represents a single query match."""
    id: str
    score: float = 0.0
    values: List[float] = Field(default_factory=list)
    sparse_values: Optional[SparseValues] = Field(default=None, alias="sparseValues")
    metadata: Optional[Dict[str, Any]] = None


class QueryResponse(PineconeModel):
    matches: List[ScoredVector] = Field(default_factory=list)
    namespace: str = ""

    def to_pandas(self):
        """Matches as a DataFrame: id, score, values, then one column per metadata key."""
        rows = []
        for match in self.matches:
            row = {"id": match.id, "score": match.score, "values": match.values}
            for key, val in (match.metadata or {}).items():
                # keep the match columns; colliding metadata keys get a prefix
                row[f"metadata.{key}" if key in ("id", "score", "values") else key] = val
            rows.append(row)
        return pd.DataFrame(rows, columns=None if rows else ["id", "score", "values"])

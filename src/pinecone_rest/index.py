import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Union

import httpx

from ._http import request_json, request_text
from .exceptions import PineconeUseAfterDeleteError
from .models import (
    ClientInfo,
    ConfigureIndexRequest,
    Credentials,
    FetchRequest,
    FetchResponse,
    IndexDescription,
    IndexStats,
    QueryRequest,
    QueryResponse,
    UpdateRequest,
    UpsertRequest,
    UpsertResponse,
    Vector,
)

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


class IndexClient:
    """Handle to one named index. All index specific operations live here.

    Credentials and client info are copied in at construction and never change
    afterwards, so one handle can be shared by concurrent tasks. The only state
    change is ``delete()``, which consumes the handle.
    """

    def __init__(self, connection: "Client", name: str, client_info: Optional[ClientInfo] = None):
        """
        Args:
            connection: Session supplying the HTTP client and credentials.
            name: Index name.
            client_info: Project metadata; defaults to the connection's.
        """
        info = client_info if client_info is not None else connection.client_info
        self._http = connection.http
        self._name = name
        self._creds = connection.credentials.model_copy()
        self._client_info = info.model_copy()
        self._deleted = False

    def __repr__(self) -> str:
        state = " deleted" if self._deleted else ""
        return f"<IndexClient {self._name!r} project={self._client_info.project_name!r}{state}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def credentials(self) -> Credentials:
        return self._creds

    @property
    def client_info(self) -> ClientInfo:
        return self._client_info

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    @property
    def deleted(self) -> bool:
        return self._deleted

    def _ensure_live(self):
        if self._deleted:
            raise PineconeUseAfterDeleteError(f"Index {self._name!r} was deleted; this handle can no longer be used")

    def url(self) -> str:
        """Data plane base URL of this index, derived from name, project and environment."""
        self._ensure_live()
        return (
            f"https://{self._name}-{self._client_info.project_name}"
            f".svc.{self._creds.environment}.pinecone.io"
        )

    async def describe(self) -> IndexDescription:
        """Fetch a fresh IndexDescription from the control plane.

        Doubles as a check of the credentials and the index: a PineconeAPIError
        (usually PineconeNotFoundError) means the index does not exist.
        """
        self._ensure_live()
        return await request_json(
            self, "GET", 200, None, f"/databases/{self._name}",
            response_model=IndexDescription,
        )

    async def describe_stats(self) -> IndexStats:
        """Grab the latest IndexStats (per-namespace counts, fullness)."""
        return await request_json(
            self, "GET", 200, self.url(), "/describe_index_stats",
            response_model=IndexStats,
        )

    async def upsert(self, namespace: str, vectors: Iterable[Union[Vector, Mapping[str, Any]]]) -> UpsertResponse:
        """
        Insert or overwrite records in a namespace.

        Args:
            namespace: Target namespace ("" is the default namespace).
            vectors: Vector records, or mappings validated into Vector.

        Returns:
            UpsertResponse with the number of records written.
        """
        self._ensure_live()
        request = UpsertRequest(namespace=namespace, vectors=list(vectors))
        logger.debug(f"Upserting {len(request.vectors)} vectors into {self._name}/{namespace!r}")
        return await request_json(
            self, "POST", 200, self.url(), "/vectors/upsert", request,
            response_model=UpsertResponse,
        )

    async def delete(self) -> str:
        """Delete the index and return the service's message.

        The handle is consumed as soon as this is called, whether or not the
        request succeeds; any later call raises PineconeUseAfterDeleteError.
        Raises PineconeAPIError if the index does not exist.
        """
        self._ensure_live()
        self._deleted = True
        logger.info(f"Deleting index {self._name}")
        return await request_text(self, "DELETE", 202, None, f"/databases/{self._name}")

    async def configure(self, replicas: int, pod_type: str) -> str:
        """Change replicas and pod_type of a pod-based index; returns the service's message."""
        self._ensure_live()
        request = ConfigureIndexRequest(replicas=replicas, pod_type=pod_type)
        return await request_text(self, "PATCH", 202, None, f"/databases/{self._name}", request)

    async def update(self, request: UpdateRequest) -> Any:
        """Update one record's values, sparse values or metadata.

        The service answers with an empty JSON object; callers should ignore
        the returned value.
        """
        return await request_json(self, "POST", 200, self.url(), "/vectors/update", request)

    async def fetch(self, request: FetchRequest) -> FetchResponse:
        """Look up records by id in one namespace, with values and metadata."""
        return await request_json(
            self, "GET", 200, request.url(self.url()), "",
            response_model=FetchResponse,
        )

    async def query(self, request: QueryRequest) -> QueryResponse:
        """Search a namespace for the records most similar to a vector or stored id."""
        return await request_json(
            self, "POST", 200, self.url(), "/query", request,
            response_model=QueryResponse,
        )

import logging
from typing import List, Optional

import httpx

from ._http import request_json, request_text
from .exceptions import PineconeDecodeError
from .index import IndexClient
from .models import ClientInfo, CreateIndexRequest, Credentials

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Client:
    """Session with the Pinecone control plane. Hands out IndexClient handles."""

    def __init__(
        self,
        credentials: Credentials,
        client_info: ClientInfo,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the session. Most callers want ``Client.connect`` instead,
        which looks the project up with whoami first.

        Args:
            credentials: API key and environment.
            client_info: Project metadata used to build index URLs.
            http: Optional externally managed httpx.AsyncClient; not closed by close().
            timeout: Per-request timeout in seconds for the owned HTTP client.
        """
        self._creds = credentials
        self._client_info = client_info
        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient(timeout=timeout)

    @classmethod
    async def connect(
        cls,
        api_key: str,
        environment: str,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "Client":
        """Build a session for the given key and environment, resolving the project via whoami."""
        creds = Credentials(api_key=api_key, environment=environment)
        owned = http is None
        http = http if http is not None else httpx.AsyncClient(timeout=timeout)
        try:
            info = await request_json(
                _Bootstrap(http, creds), "GET", 200, None, "/actions/whoami",
                response_model=ClientInfo,
            )
        except Exception:
            if owned:
                await http.aclose()
            raise
        logger.debug(f"Connected to project {info.project_name} in {environment}")
        client = cls(creds, info, http=http)
        client._owns_http = owned
        return client

    @classmethod
    async def from_env(cls, http: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT) -> "Client":
        """Like connect(), with credentials from PINECONE_API_KEY and PINECONE_ENV."""
        creds = Credentials.from_env()
        return await cls.connect(creds.api_key, creds.environment, http=http, timeout=timeout)

    async def close(self):
        """Close the HTTP client if this session created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    @property
    def credentials(self) -> Credentials:
        return self._creds

    @property
    def client_info(self) -> ClientInfo:
        return self._client_info

    def index(self, name: str) -> IndexClient:
        """Handle to the named index. No request is made."""
        return IndexClient(self, name)

    async def whoami(self) -> ClientInfo:
        """Project and user the API key belongs to."""
        return await request_json(self, "GET", 200, None, "/actions/whoami", response_model=ClientInfo)

    async def list_indexes(self) -> List[str]:
        """Names of all indexes in the project."""
        names = await request_json(self, "GET", 200, None, "/databases")
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise PineconeDecodeError(f"Expected a list of index names, got: {names!r}")
        return names

    async def create_index(self, request: CreateIndexRequest) -> str:
        """Create an index; returns the service's message. The index is not ready immediately."""
        logger.info(f"Creating index {request.name} (dimension={request.dimension}, metric={request.metric})")
        return await request_text(self, "POST", 201, None, "/databases", request)


class _Bootstrap:
    """Minimal connection used before the project is known."""

    def __init__(self, http: httpx.AsyncClient, credentials: Credentials):
        self.http = http
        self.credentials = credentials

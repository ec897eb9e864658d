"""Request/response plumbing shared by the session and index handles.

Every public operation is one call to ``request_json`` or ``request_text``:
build the URL, attach the API key, send, compare the status with the single
status the endpoint documents, then decode.
"""
import json
import logging
from typing import Any, Optional, Protocol, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from .exceptions import PineconeDecodeError, PineconeTransportError, api_error_for
from .models import Credentials

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

Body = Union[BaseModel, dict, list, None]


class Connection(Protocol):
    """Anything that can issue authenticated requests: the session or an index handle."""

    @property
    def http(self) -> httpx.AsyncClient: ...

    @property
    def credentials(self) -> Credentials: ...


def controller_url(environment: str) -> str:
    return f"https://controller.{environment}.pinecone.io"


def _headers(creds: Credentials) -> dict:
    return {"Api-Key": creds.api_key, "Accept": "application/json"}


def _encode(body: Body) -> Optional[bytes]:
    if body is None:
        return None
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(body).encode("utf-8")


def _api_error(response: httpx.Response, expected: int):
    content_type = response.headers.get("content-type", "")
    type_tag = content_type.split(";")[0].strip() or "unknown"
    message = response.text.strip() or response.reason_phrase

    if "json" in content_type:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            # data plane: {"code", "message"}; newer control plane: {"error": {"code", "message"}}
            err = payload["error"] if isinstance(payload.get("error"), dict) else payload
            if err.get("code") is not None:
                type_tag = str(err["code"])
            if err.get("message"):
                message = str(err["message"])

    return api_error_for(response.status_code, type_tag, message, expected)


async def _send(
    conn: Connection,
    method: str,
    expected_status: int,
    base_url: Optional[str],
    path: str,
    body: Body,
) -> httpx.Response:
    creds = conn.credentials
    url = (base_url if base_url is not None else controller_url(creds.environment)) + path
    headers = _headers(creds)
    content = _encode(body)
    if content is not None:
        headers["Content-Type"] = "application/json"

    logger.debug(f"{method} {url}")
    if conn.http.is_closed:
        raise PineconeTransportError(f"{method} {url} failed: the HTTP client has been closed")
    try:
        response = await conn.http.request(method, url, content=content, headers=headers)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise PineconeTransportError(f"{method} {url} failed: {e}") from e
    logger.debug(f"{method} {url} -> {response.status_code}")

    if response.status_code != expected_status:
        raise _api_error(response, expected_status)
    return response


async def request_json(
    conn: Connection,
    method: str,
    expected_status: int,
    base_url: Optional[str],
    path: str,
    body: Body = None,
    response_model: Optional[Type[M]] = None,
) -> Any:
    """Send a request and decode its JSON body, into ``response_model`` when given."""
    response = await _send(conn, method, expected_status, base_url, path, body)
    try:
        payload = response.json()
    except ValueError as e:
        raise PineconeDecodeError(f"Response from {response.url} is not valid JSON: {e}") from e
    if response_model is None:
        return payload
    try:
        return response_model.model_validate(payload)
    except ValidationError as e:
        raise PineconeDecodeError(
            f"Response from {response.url} does not match {response_model.__name__}: {e}"
        ) from e


async def request_text(
    conn: Connection,
    method: str,
    expected_status: int,
    base_url: Optional[str],
    path: str,
    body: Body = None,
) -> str:
    """Send a request and return the body as text."""
    response = await _send(conn, method, expected_status, base_url, path, body)
    return response.text

"""Pytest configuration and fixtures for pinecone_rest tests."""
import json

import httpx
import numpy as np
import pytest

from pinecone_rest import Client, ClientInfo, Credentials


class StubService:
    """Stands in for Pinecone: canned responses keyed by (method, path), records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status=200, json_body=None, text=None, headers=None):
        self.routes[(method, path)] = (status, json_body, text, headers)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, text=f"no route for {key}", headers={"content-type": "text/plain"})
        status, json_body, text, headers = self.routes[key]
        if json_body is not None:
            return httpx.Response(status, json=json_body, headers=headers)
        return httpx.Response(status, text=text or "", headers=headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def credentials():
    return Credentials(api_key="test-key", environment="us-west1-gcp")


@pytest.fixture
def client_info():
    return ClientInfo(project_name="abc123", user_label="default", user_name="tester")


@pytest.fixture
def stub():
    return StubService()


@pytest.fixture
def client(stub, credentials, client_info):
    http = httpx.AsyncClient(transport=httpx.MockTransport(stub.handler))
    return Client(credentials, client_info, http=http)


@pytest.fixture
def index(client):
    return client.index("halfbaked")


@pytest.fixture
def data_url():
    return "https://halfbaked-abc123.svc.us-west1-gcp.pinecone.io"


@pytest.fixture
def sample_embeddings():
    """Sample 8-dimensional embeddings."""
    np.random.seed(42)
    return [np.random.randn(8).tolist() for _ in range(3)]

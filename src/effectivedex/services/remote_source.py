"""PokeAPI client: the single-fetch remote source behind the cache.

Provides both the real HTTP implementation and an in-memory source for
testing/development.
"""

import logging
from typing import Optional, Protocol
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ValidationError

from effectivedex.errors import (
    RemoteMalformed,
    RemoteNotFound,
    RemoteSourceError,
    RemoteUnreachable,
)
from effectivedex.models.payloads import RESOURCE_MODELS, ResourceListPayload

logger = logging.getLogger(__name__)


class RemoteSource(Protocol):
    """Fetches one resource and returns a validated payload record."""

    async def fetch(self, resource_id: str) -> BaseModel: ...


def pokemon_path(id_or_name: int | str) -> str:
    return f"/pokemon/{id_or_name}"


def species_path(id_or_name: int | str) -> str:
    return f"/pokemon-species/{id_or_name}"


def type_path(type_tag: str) -> str:
    return f"/type/{type_tag}"


def list_path(limit: int, offset: int = 0) -> str:
    return f"/pokemon?limit={limit}&offset={offset}"


def payload_model_for(resource_id: str) -> type[BaseModel]:
    """Pick the payload model from the resource path.

    ``/pokemon?limit=..`` is a listing; ``/pokemon/25`` is an entity.

    Raises:
        RemoteMalformed: If the path names no known resource type
    """
    parts = urlsplit(resource_id)
    segments = [s for s in parts.path.split("/") if s]
    if len(segments) == 1 and segments[0] == "pokemon":
        return ResourceListPayload
    if len(segments) == 2 and segments[0] in RESOURCE_MODELS:
        return RESOURCE_MODELS[segments[0]]
    raise RemoteMalformed(resource_id, "unknown resource type")


def parse_payload(resource_id: str, data: object) -> BaseModel:
    """Validate raw JSON into the tagged record for ``resource_id``."""
    model = payload_model_for(resource_id)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RemoteMalformed(resource_id, f"invalid {model.__name__}: {e}") from e


class PokeApiClient:
    """Read-only PokeAPI client.

    No retries: a fetch either succeeds or raises a ``RemoteSourceError``.
    """

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize the client.

        Args:
            base_url: API root, e.g. https://pokeapi.co/api/v2
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def fetch(self, resource_id: str) -> BaseModel:
        """Fetch and validate a single resource.

        Args:
            resource_id: API path, e.g. "/pokemon/25" or "/type/fire"

        Raises:
            RemoteNotFound: HTTP 404
            RemoteUnreachable: Transport error or other non-2xx status
            RemoteMalformed: Undecodable JSON or failed validation
        """
        client = await self._get_client()
        try:
            response = await client.get(resource_id)
        except httpx.HTTPError as e:
            raise RemoteUnreachable(resource_id, f"request failed: {e}") from e

        if response.status_code == 404:
            raise RemoteNotFound(resource_id, "not found")
        if response.is_error:
            raise RemoteUnreachable(resource_id, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteMalformed(resource_id, f"invalid JSON: {e}") from e

        logger.debug(f"Fetched {resource_id}")
        return parse_payload(resource_id, data)


class StaticRemoteSource:
    """Remote source serving canned JSON documents keyed by path.

    Use this for testing and development without network access. Values
    may be raw JSON dicts or ``RemoteSourceError`` instances to raise.
    """

    def __init__(self, documents: Optional[dict[str, object]] = None):
        self.documents: dict[str, object] = dict(documents or {})
        self.calls: list[str] = []

    async def fetch(self, resource_id: str) -> BaseModel:
        self.calls.append(resource_id)
        document = self.documents.get(resource_id)
        if isinstance(document, RemoteSourceError):
            raise document
        if document is None:
            raise RemoteNotFound(resource_id, "not found")
        return parse_payload(resource_id, document)

    def call_count(self, resource_id: str) -> int:
        return self.calls.count(resource_id)

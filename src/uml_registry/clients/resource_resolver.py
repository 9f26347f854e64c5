#!/usr/bin/env python3
"""
Resource Resolvers

Fetch the raw bytes of documents referenced by URI. Resolvers are pure
infrastructure: they know nothing about XMI and raise
ResourceResolutionError for any failure so callers handle a single error type.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx
from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError as URLLib3HTTPError

from ..core.exceptions import ResourceResolutionError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ResourceResolver(ABC):
    """Resolves a URI to the bytes of the document it identifies."""

    @abstractmethod
    def resolve(self, uri: str) -> Optional[bytes]:
        """Fetch a document.

        Args:
            uri: Absolute URI or filesystem path, without fragment

        Returns:
            Document content, or None if the resolver has nothing for the URI

        Raises:
            ResourceResolutionError: If fetching fails
        """


class URLResourceResolver(ResourceResolver):
    """Fetches http(s) URIs with httpx and file URIs or plain paths from disk."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = DEFAULT_TIMEOUT):
        self._client = client
        self._timeout = timeout

    def _http_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def resolve(self, uri: str) -> Optional[bytes]:
        parsed = urlparse(uri)
        scheme = parsed.scheme.lower()

        if scheme in ("http", "https"):
            return self._fetch_http(uri)
        if scheme == "file":
            return self._read_file(Path(unquote(parsed.path)))
        # single letter schemes are Windows drive letters
        if scheme == "" or len(scheme) == 1:
            return self._read_file(Path(uri))

        raise ResourceResolutionError(f"Unsupported URI scheme '{scheme}': {uri}")

    def _fetch_http(self, uri: str) -> bytes:
        try:
            response = self._http_client().get(uri)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ResourceResolutionError(f"HTTP {e.response.status_code} fetching {uri}") from e
        except httpx.HTTPError as e:
            raise ResourceResolutionError(f"Failed to fetch {uri}: {e}") from e
        logger.debug(f"Fetched {len(response.content)} bytes from {uri}")
        return response.content

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ResourceResolutionError(f"Failed to read {path}: {e}") from e


class S3ResourceResolver(ResourceResolver):
    """Fetches ``s3://bucket/object`` URIs from MinIO object storage."""

    def __init__(self, client: Minio):
        self._client = client

    def resolve(self, uri: str) -> Optional[bytes]:
        parsed = urlparse(uri)
        if parsed.scheme.lower() != "s3":
            raise ResourceResolutionError(f"Not an s3 URI: {uri}")

        bucket = parsed.netloc
        object_name = parsed.path.lstrip("/")
        if not bucket or not object_name:
            raise ResourceResolutionError(f"s3 URI needs a bucket and an object name: {uri}")

        response = None
        try:
            response = self._client.get_object(bucket, object_name)
            return response.read()
        except S3Error as e:
            logger.error(f"Failed to download {object_name} from {bucket}: {e}")
            raise ResourceResolutionError(f"Failed to download {uri}: {e.code}") from e
        except (URLLib3HTTPError, OSError) as e:
            logger.error(f"Failed to download {object_name} from {bucket}: {e}")
            raise ResourceResolutionError(f"Failed to download {uri}: {e}") from e
        finally:
            if response is not None:
                response.close()
                response.release_conn()


class CompositeResourceResolver(ResourceResolver):
    """Dispatches to a resolver per URI scheme, with a fallback for the rest."""

    def __init__(self, resolvers: dict[str, ResourceResolver], fallback: Optional[ResourceResolver] = None):
        self._resolvers = {scheme.lower(): resolver for scheme, resolver in resolvers.items()}
        self._fallback = fallback

    def resolve(self, uri: str) -> Optional[bytes]:
        scheme = urlparse(uri).scheme.lower()
        resolver = self._resolvers.get(scheme, self._fallback)
        if resolver is None:
            raise ResourceResolutionError(f"No resolver registered for scheme '{scheme}': {uri}")
        return resolver.resolve(uri)

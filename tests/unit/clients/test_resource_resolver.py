#!/usr/bin/env python3
"""Tests for the resource resolvers."""

from unittest.mock import Mock

import httpx
import pytest
from minio import Minio
from urllib3.exceptions import MaxRetryError, ProtocolError

from uml_registry.clients.resource_resolver import (
    CompositeResourceResolver,
    ResourceResolver,
    S3ResourceResolver,
    URLResourceResolver,
)
from uml_registry.core.exceptions import ResourceResolutionError


def create_http_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestURLResourceResolver:
    """Test suite for URLResourceResolver."""

    def test_http_fetch(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, content=b"<XMI/>")

        resolver = URLResourceResolver(client=create_http_client(handler))

        assert resolver.resolve("https://example.com/profiles/core.xmi") == b"<XMI/>"
        assert requested == ["https://example.com/profiles/core.xmi"]

    def test_http_error_status(self):
        resolver = URLResourceResolver(client=create_http_client(lambda request: httpx.Response(404)))

        with pytest.raises(ResourceResolutionError, match="HTTP 404"):
            resolver.resolve("http://example.com/missing.xmi")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        resolver = URLResourceResolver(client=create_http_client(handler))

        with pytest.raises(ResourceResolutionError, match="Failed to fetch"):
            resolver.resolve("http://example.com/core.xmi")

    def test_file_uri_and_plain_path(self, tmp_path):
        path = tmp_path / "core model.xmi"
        path.write_bytes(b"<XMI/>")
        resolver = URLResourceResolver()

        assert resolver.resolve(path.as_uri()) == b"<XMI/>"
        assert resolver.resolve(str(path)) == b"<XMI/>"

    def test_missing_file(self, tmp_path):
        resolver = URLResourceResolver()

        with pytest.raises(ResourceResolutionError, match="Failed to read"):
            resolver.resolve((tmp_path / "missing.xmi").as_uri())

    def test_unsupported_scheme(self):
        with pytest.raises(ResourceResolutionError, match="Unsupported URI scheme 'ftp'"):
            URLResourceResolver().resolve("ftp://example.com/core.xmi")

    def test_close(self):
        client = Mock(spec=httpx.Client)
        resolver = URLResourceResolver(client=client)

        resolver.close()
        resolver.close()

        client.close.assert_called_once()


@pytest.mark.unit
class TestS3ResourceResolver:
    """Test suite for S3ResourceResolver."""

    def test_get_object(self):
        client = Mock(spec=Minio)
        response = Mock()
        response.read.return_value = b"<XMI/>"
        client.get_object.return_value = response
        resolver = S3ResourceResolver(client)

        assert resolver.resolve("s3://models/shared/core.xmi") == b"<XMI/>"

        client.get_object.assert_called_once_with("models", "shared/core.xmi")
        response.close.assert_called_once()
        response.release_conn.assert_called_once()

    def test_connection_released_on_read_failure(self):
        client = Mock(spec=Minio)
        response = Mock()
        response.read.side_effect = ProtocolError("Connection broken: stream reset")
        client.get_object.return_value = response

        with pytest.raises(ResourceResolutionError, match="Failed to download s3://models/core.xmi"):
            S3ResourceResolver(client).resolve("s3://models/core.xmi")

        response.release_conn.assert_called_once()

    def test_connection_failure(self):
        client = Mock(spec=Minio)
        client.get_object.side_effect = MaxRetryError(None, "/models/core.xmi", reason="connection refused")

        with pytest.raises(ResourceResolutionError):
            S3ResourceResolver(client).resolve("s3://models/core.xmi")

    @pytest.mark.parametrize("uri", ["http://models/core.xmi", "s3://models", "s3:///core.xmi"])
    def test_invalid_uris(self, uri):
        client = Mock(spec=Minio)

        with pytest.raises(ResourceResolutionError):
            S3ResourceResolver(client).resolve(uri)

        client.get_object.assert_not_called()


@pytest.mark.unit
class TestCompositeResourceResolver:
    """Test suite for CompositeResourceResolver."""

    def test_dispatch_by_scheme(self):
        s3 = Mock(spec=ResourceResolver)
        s3.resolve.return_value = b"s3"
        fallback = Mock(spec=ResourceResolver)
        fallback.resolve.return_value = b"http"
        resolver = CompositeResourceResolver({"S3": s3}, fallback=fallback)

        assert resolver.resolve("s3://models/core.xmi") == b"s3"
        assert resolver.resolve("http://example.com/core.xmi") == b"http"

        s3.resolve.assert_called_once_with("s3://models/core.xmi")
        fallback.resolve.assert_called_once_with("http://example.com/core.xmi")

    def test_no_resolver_for_scheme(self):
        resolver = CompositeResourceResolver({"s3": Mock(spec=ResourceResolver)})

        with pytest.raises(ResourceResolutionError, match="No resolver registered"):
            resolver.resolve("http://example.com/core.xmi")

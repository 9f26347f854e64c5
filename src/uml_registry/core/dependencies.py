#!/usr/bin/env python3

import os

from minio import Minio

from ..clients.resource_resolver import (
    CompositeResourceResolver,
    ResourceResolver,
    S3ResourceResolver,
    URLResourceResolver,
)


def get_s3_client():
    """Get MinIO/S3 client"""
    endpoint = os.getenv("MINIO_ENDPOINT", "localhost:9000")
    access_key = os.getenv("MINIO_ACCESS_KEY", "minio")
    secret_key = os.getenv("MINIO_SECRET_KEY", "minio123")
    secure = os.getenv("MINIO_SECURE", "false").lower() == "true"

    # Remove http:// or https:// from endpoint if present
    if endpoint.startswith("http://"):
        endpoint = endpoint[7:]
        secure = False
    elif endpoint.startswith("https://"):
        endpoint = endpoint[8:]
        secure = True

    return Minio(
        endpoint,
        access_key=access_key,
        secret_key=secret_key,
        secure=secure
    )


def get_resource_resolver(with_s3: bool = False) -> ResourceResolver:
    """Get the resolver for referenced documents.

    Args:
        with_s3: Also resolve s3:// URIs through MinIO
    """
    url_resolver = URLResourceResolver()
    if not with_s3:
        return url_resolver
    return CompositeResourceResolver({"s3": S3ResourceResolver(get_s3_client())}, fallback=url_resolver)

#!/usr/bin/env python3
"""On-demand loading of documents referenced through hrefs."""

import logging
from typing import Callable
from urllib.parse import urldefrag

from ....clients.resource_resolver import ResourceResolver
from ....core.exceptions import ResourceResolutionError, XMIParseError
from .document import XMIDocument, parse_document

logger = logging.getLogger(__name__)


class ExternalReferenceLoader:
    """Fetches referenced documents and feeds them to the loading pipeline.

    Each document URI is attempted at most once per registry: the URI is marked
    visited before it is fetched, which also stops cyclic references between
    documents from recursing forever. Fetch and parse failures are logged and
    leave the reference unresolved.
    """

    def __init__(
        self,
        resource_resolver: ResourceResolver,
        visited_uris: set[str],
        load_document: Callable[[XMIDocument], None],
    ):
        self._resource_resolver = resource_resolver
        self._visited_uris = visited_uris
        self._load_document = load_document

    @property
    def resource_resolver(self) -> ResourceResolver:
        return self._resource_resolver

    def is_visited(self, uri: str) -> bool:
        document_uri, _ = urldefrag(uri)
        return document_uri in self._visited_uris

    def mark_visited(self, uri: str) -> None:
        document_uri, _ = urldefrag(uri)
        self._visited_uris.add(document_uri)

    def load(self, uri: str) -> bool:
        """Load the document an href points into, unless already attempted.

        Args:
            uri: Absolute URI, with or without fragment

        Returns:
            True if the document was fetched and loaded by this call
        """
        document_uri, _ = urldefrag(uri)
        if not document_uri:
            return False
        if document_uri in self._visited_uris:
            logger.debug(f"Already visited {document_uri}")
            return False
        self._visited_uris.add(document_uri)

        try:
            data = self._resource_resolver.resolve(document_uri)
        except ResourceResolutionError as e:
            logger.error(f"Can not resolve referenced document: {document_uri}: {e}", extra={"uri": document_uri})
            return False

        if data is None:
            logger.warning(f"No content for referenced document: {document_uri}", extra={"uri": document_uri})
            return False

        try:
            document = parse_document(data, document_uri)
        except XMIParseError as e:
            logger.error(f"Can not parse referenced document: {document_uri}: {e}", extra={"uri": document_uri})
            return False

        logger.info(f"Loading referenced document {document_uri}", extra={"uri": document_uri})
        self._load_document(document)
        return True

"""Shared state injected into every tool and resource handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from swagger_mcp.cache import DocumentCache
from swagger_mcp.config import ServiceRegistry
from swagger_mcp.models import ServerSettings
from swagger_mcp.parser.document import DocumentResolver
from swagger_mcp.session import SessionState


@dataclass
class ServerContext:
    """Everything a handler needs, created once at startup.

    Attributes:
        resolver: Document fetch/dereference/cache entry point.
        session: The current service selection.
        registry: Configured service aliases.
        settings: Process-wide settings.
        transport: Optional transport for test requests (tests inject an
            :class:`httpx.MockTransport`).
    """

    resolver: DocumentResolver
    session: SessionState
    registry: ServiceRegistry
    settings: ServerSettings = field(default_factory=ServerSettings)
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def create(
        cls,
        registry: ServiceRegistry,
        settings: Optional[ServerSettings] = None,
        resolver: Optional[DocumentResolver] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> ServerContext:
        """Wire a resolver (with a fresh cache) and a session around *registry*."""
        resolver = resolver or DocumentResolver(DocumentCache())
        return cls(
            resolver=resolver,
            session=SessionState(resolver),
            registry=registry,
            settings=settings or ServerSettings(),
            transport=transport,
        )

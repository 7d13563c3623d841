"""
Base class for API service groups.
"""
from .client import Client


class Service:
    """Thin handle bound to a shared Client.

    Services hold no state of their own; every instance built from the same
    Client sends through the same configuration and connection pool.
    """

    def __init__(self, client: Client):
        self.client = client


def join_path(*parts: str) -> str:
    """Join path segments with single slashes, ignoring empty ones."""
    cleaned = [p.strip("/") for p in parts if p and p.strip("/")]
    return "/".join(cleaned)


class DiscardSink:
    """Sink for response bodies nobody reads (upload, delete, config writes)."""

    def write(self, chunk: bytes) -> int:
        return len(chunk)

"""Protocols (interfaces) for Sticker Hook components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AliasDocumentStore(Protocol):
    """Durable storage for the alias table.

    The whole table is stored as one document under a fixed identifier and
    replaced wholesale on every write.
    """

    @property
    def document_id(self) -> str:
        """Identifier of the alias document."""
        ...

    async def load(self) -> dict[str, Any] | None:
        """Return the stored document, or None if nothing has been saved."""
        ...

    async def save(self, document: dict[str, list[str]]) -> None:
        """Replace the stored document (upsert)."""
        ...

    async def close(self) -> None:
        """Release any connections held by the store."""
        ...


@runtime_checkable
class CatalogSource(Protocol):
    """Remote source of sticker records."""

    async def fetch(self) -> list[Any]:
        """Fetch the current sticker records.

        Raises:
            CatalogFetchError: On transport failure or non-success status.
        """
        ...

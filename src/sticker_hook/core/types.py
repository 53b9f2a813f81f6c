"""Core data types for Sticker Hook."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sticker_hook.catalog.source import StickerRecord


@dataclass(frozen=True)
class ImageSpec:
    """Addressing parameters for a sticker image.

    The URL for a given size is ``prefix + size + suffix``. The catalog API
    calls the suffix field ``name``.
    """

    prefix: str | None = None
    suffix: str | None = None
    sizes: frozenset[int] = field(default_factory=frozenset)

    def url(self, size: int) -> str | None:
        if not self.prefix or not self.suffix or size not in self.sizes:
            return None
        return f"{self.prefix}{size}{self.suffix}"


@dataclass(frozen=True)
class CatalogEntry:
    """A single sticker from the catalog.

    Entries are rebuilt from scratch on every catalog refresh and never
    mutated afterwards.
    """

    id: str
    name: str | None = None
    restricted: bool = False
    image: ImageSpec | None = None

    @property
    def lower_name(self) -> str:
        return (self.name or "").lower()

    def is_valid(self) -> bool:
        """True if the sticker has a name and is not restricted."""
        return self.name is not None and not self.restricted

    def image_url(self, size: int) -> str | None:
        """Image URL at ``size``, or None if the sticker has no image at that size."""
        if self.image is None:
            return None
        return self.image.url(size)

    @classmethod
    def from_record(cls, record: "StickerRecord") -> CatalogEntry:
        """Build an entry from a validated catalog source record."""
        image = None
        if record.image is not None:
            image = ImageSpec(
                prefix=record.image.prefix,
                suffix=record.image.name,
                sizes=frozenset(record.image.sizes or ()),
            )
        return cls(
            id=record.id,
            name=record.name,
            restricted=bool(record.restricted),
            image=image,
        )

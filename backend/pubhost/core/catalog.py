"""Builds the catalog (files plus categories) from a flat store listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from pubhost.core.pathnames import decompose, to_view_route
from pubhost.storage.base import StoredBlob


@dataclass(frozen=True)
class FileRecord:
    name: str
    category: str | None
    pathname: str
    url: str
    size: int
    uploaded_at: datetime

    @property
    def view_route(self) -> str:
        return to_view_route(self.category, self.name)


@dataclass
class Catalog:
    files: list[FileRecord] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)

    def find_by_url(self, url: str) -> FileRecord | None:
        for record in self.files:
            if record.url == url:
                return record
        return None

    def find_by_pathname(self, pathname: str) -> FileRecord | None:
        for record in self.files:
            if record.pathname == pathname:
                return record
        return None


def build_catalog(listing: Iterable[StoredBlob]) -> Catalog:
    """Decorate each listed blob with its category and name.

    Pure transform; the listing order is not significant.
    """
    files: list[FileRecord] = []
    for blob in listing:
        category, name = decompose(blob.pathname)
        files.append(
            FileRecord(
                name=name,
                category=category,
                pathname=blob.pathname,
                url=blob.url,
                size=blob.size,
                uploaded_at=blob.uploaded_at,
            )
        )

    categories = sorted({f.category for f in files if f.category})
    return Catalog(files=files, categories=categories)


def group_by_category(
    files: Iterable[FileRecord],
) -> list[tuple[str | None, list[FileRecord]]]:
    """Partition files by category for display.

    The uncategorized bucket (``None``) always comes first, the rest follow
    in lexicographic order. Files within a bucket are ordered by name.
    """
    buckets: dict[str | None, list[FileRecord]] = {}
    for record in files:
        buckets.setdefault(record.category, []).append(record)

    keys = sorted(buckets, key=lambda c: (c is not None, c or ""))
    return [(key, sorted(buckets[key], key=lambda f: f.name)) for key in keys]

"""Request and response models for the catalog and mutation endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pubhost.core.catalog import FileRecord


class FileItem(BaseModel):
    """One document in the catalog listing."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    category: str | None = None
    pathname: str
    url: str
    size: int
    uploaded_at: datetime = Field(alias="uploadedAt")
    view_route: str = Field(alias="viewRoute")

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileItem":
        return cls(
            name=record.name,
            category=record.category,
            pathname=record.pathname,
            url=record.url,
            size=record.size,
            uploaded_at=record.uploaded_at,
            view_route=record.view_route,
        )


class CatalogResponse(BaseModel):
    files: list[FileItem]
    categories: list[str]


class DeleteRequest(BaseModel):
    url: str


class MoveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    new_pathname: str = Field(alias="newPathname")


class MutationResponse(BaseModel):
    success: bool = True
    url: str
    pathname: str

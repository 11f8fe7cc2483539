"""Pydantic models for Google Books volume search responses.

Unknown keys are ignored so new API fields never break parsing.
"""

from pydantic import BaseModel, ConfigDict, Field


class ImageLinks(BaseModel):
    """Cover image links."""

    model_config = ConfigDict(populate_by_name=True)

    small_thumbnail: str | None = Field(default=None, alias="smallThumbnail")
    thumbnail: str | None = None


class IndustryIdentifier(BaseModel):
    """ISBN identifier tagged by type (ISBN_10 / ISBN_13)."""

    type: str
    identifier: str


class VolumeInfo(BaseModel):
    """Book details of a catalog record."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    subtitle: str | None = None
    authors: list[str] | None = None
    description: str | None = None
    page_count: int | None = Field(default=None, alias="pageCount")
    image_links: ImageLinks | None = Field(default=None, alias="imageLinks")
    industry_identifiers: list[IndustryIdentifier] | None = Field(
        default=None, alias="industryIdentifiers"
    )

    def identifier(self, kind: str) -> str | None:
        """First identifier of the given type, e.g. ``ISBN_13``."""
        for item in self.industry_identifiers or []:
            if item.type == kind:
                return item.identifier
        return None


class CatalogBook(BaseModel):
    """A candidate book returned by the catalog search."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    volume_info: VolumeInfo = Field(alias="volumeInfo")


class CatalogResponse(BaseModel):
    """Top-level volumes search response."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[CatalogBook] | None = None
    total_items: int | None = Field(default=0, alias="totalItems")

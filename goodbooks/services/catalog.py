"""Google Books catalog client and mapping of catalog records to library books."""

import time

import httpx
from pydantic import ValidationError

from goodbooks.config import get_settings
from goodbooks.constants import (
    AUTHOR_SEPARATOR,
    CATALOG_MAX_RESULTS_LIMIT,
    CATALOG_PRINT_TYPE,
    MANUAL_DEFAULT_DESCRIPTION,
    MANUAL_ID_PREFIX,
)
from goodbooks.db.repository import secure_url
from goodbooks.errors import CatalogSearchError
from goodbooks.models.book import Book, ReadingStatus
from goodbooks.models.catalog import CatalogBook, CatalogResponse
from goodbooks.utils.http_client import get_catalog_client
from goodbooks.utils.logging import get_logger
from goodbooks.utils.retry import RetryConfig, retry_async

logger = get_logger(__name__)


class GoogleBooksCatalog:
    """Free-text search against the Google Books volumes endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        max_results: int | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        settings = get_settings()
        self._client = client
        self.base_url = (base_url or settings.catalog_api_url).rstrip("/")
        self.max_results = min(max_results or settings.catalog_max_results, CATALOG_MAX_RESULTS_LIMIT)
        self.retry_config = retry_config or RetryConfig(max_retries=settings.catalog_max_retries)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_catalog_client()

    async def search(self, query: str) -> list[CatalogBook]:
        """Search volumes by text (title, author...).

        Raises:
            CatalogSearchError: on transport failure, non-200 status or an
                unparseable body.
        """
        params = {
            "q": query,
            "maxResults": self.max_results,
            "printType": CATALOG_PRINT_TYPE,
        }
        try:
            response = await retry_async(
                lambda: self.client.get(f"{self.base_url}/volumes", params=params),
                config=self.retry_config,
                operation_name="catalog search",
            )
        except httpx.HTTPError as e:
            raise CatalogSearchError(f"request failed: {e}") from e

        if response is None:
            raise CatalogSearchError("catalog unreachable after retries")
        if response.status_code != 200:
            raise CatalogSearchError(f"unexpected status {response.status_code}")

        try:
            payload = CatalogResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CatalogSearchError(f"malformed response: {e}") from e

        items = payload.items or []
        logger.debug(f"Catalog search {query!r} returned {len(items)} items")
        return items


def catalog_book_to_book(item: CatalogBook) -> Book:
    """Build a library book from a catalog record.

    Reading state always starts fresh: PENDING, no dates, no rating.
    """
    info = item.volume_info
    thumbnail = info.image_links.thumbnail if info.image_links else None
    return Book(
        id=item.id,
        title=info.title,
        subtitle=info.subtitle,
        authors=AUTHOR_SEPARATOR.join(info.authors) if info.authors else None,
        description=info.description,
        page_count=info.page_count,
        thumbnail_url=secure_url(thumbnail),
        isbn10=info.identifier("ISBN_10"),
        isbn13=info.identifier("ISBN_13"),
        status=ReadingStatus.PENDING,
        start_date=None,
        end_date=None,
        rating=None,
        notes=None,
    )


def _parse_pages(pages: str) -> int:
    try:
        value = int(pages.strip())
    except ValueError:
        return 0
    return max(value, 0)


def manual_book(
    title: str,
    author: str = "",
    pages: str = "",
    isbn: str = "",
    description: str = "",
    now: float | None = None,
) -> Book:
    """Build a hand-entered book with a ``manual_<unix-seconds>`` id."""
    if not title.strip():
        raise ValueError("title is required")
    timestamp = int(time.time() if now is None else now)
    return Book(
        id=f"{MANUAL_ID_PREFIX}{timestamp}",
        title=title,
        subtitle=None,
        authors=author or None,
        description=description or MANUAL_DEFAULT_DESCRIPTION,
        page_count=_parse_pages(pages),
        thumbnail_url=None,
        isbn10=None,
        isbn13=isbn or None,
        status=ReadingStatus.PENDING,
        start_date=None,
        end_date=None,
        rating=None,
        notes=None,
    )


# Singleton instance
google_books_catalog = GoogleBooksCatalog()

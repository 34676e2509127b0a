"""Thin Sifflet API client for sources.

Requests are sent once: no retries, no backoff. Non-2xx responses raise
:class:`SiffletAPIError` with the problem title/detail when the API sends one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any
from uuid import UUID

import httpx

from sifflet_sources.config import ClientConfig
from sifflet_sources.wire.dtos import (
    CreateSourceDto,
    PaginationDto,
    SourceFilterDto,
    SourceSearchCriteriaDto,
    UpdateSourceDto,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_RESULTS = 1000


class SiffletAPIError(Exception):
    """Error from the Sifflet API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _problem_message(response: httpx.Response) -> str:
    """Build an error message from an RFC 7807 problem body, if any."""
    message = f"HTTP status code: {response.status_code}"
    try:
        problem = response.json()
    except ValueError:
        return message
    if not isinstance(problem, dict):
        return message
    details = " ".join(
        str(problem[key]) for key in ("title", "detail") if problem.get(key)
    )
    return f"{message}. Details: {details}" if details else message


class SiffletClient:
    """Source endpoints of the Sifflet API.

    Args:
        config: Connection settings (host, prefix, timeout, TLS)
        token: API token sent as a bearer token
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
    """

    def __init__(
        self,
        config: ClientConfig,
        token: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not config.host:
            raise SiffletAPIError(
                "Sifflet host is not configured. Set host in sifflet.yml "
                "or the SIFFLET_HOST environment variable."
            )
        self.config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            verify=config.verify_tls,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    def __enter__(self) -> SiffletClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Content-Type": "application/json"} if content is not None else None
        logger.debug("%s %s", method, path)
        response = self._client.request(
            method, path, content=content, params=params, headers=headers
        )
        if not response.is_success:
            raise SiffletAPIError(_problem_message(response), response.status_code)
        return response

    def create_source(self, body: CreateSourceDto) -> bytes:
        """Create a source. Returns the raw response body."""
        return self._request("POST", "/sources", content=body.marshal()).content

    def update_source(self, source_id: UUID | str, body: UpdateSourceDto) -> bytes:
        """Update a source. Returns the raw response body."""
        return self._request(
            "PUT", f"/sources/{source_id}", content=body.marshal()
        ).content

    def get_source(self, source_id: UUID | str) -> bytes:
        """Fetch one source. Returns the raw response body."""
        return self._request("GET", f"/sources/{source_id}").content

    def delete_source(self, source_id: UUID | str) -> None:
        self._request("DELETE", f"/sources/{source_id}")

    def search_sources(self, criteria: SourceSearchCriteriaDto) -> dict[str, Any]:
        """Fetch one page of a source search as parsed JSON."""
        response = self._request("POST", "/sources/search", content=criteria.marshal())
        data: dict[str, Any] = response.json()
        return data

    def iter_sources(
        self,
        search_filter: SourceFilterDto | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        items_per_page: int = DEFAULT_PAGE_SIZE,
    ) -> Iterator[dict[str, Any]]:
        """Yield source items matching ``search_filter``, page by page.

        Args:
            search_filter: Search filter, None matches every source
            max_results: Maximum number of items to yield. Zero or less means
                the default of DEFAULT_MAX_RESULTS.
            items_per_page: Page size requested from the API

        The last page asks for only the remaining number of items when that
        keeps it aligned on a page boundary. Otherwise the page is cut locally.
        """
        if search_filter is None:
            search_filter = SourceFilterDto()
        remaining = max_results if max_results > 0 else DEFAULT_MAX_RESULTS
        page_size = min(items_per_page, remaining)
        page = 0
        seen = 0
        while remaining > 0:
            request_page, request_size = page, page_size
            offset = page * page_size
            if remaining < page_size and offset % remaining == 0:
                request_page, request_size = offset // remaining, remaining
            data = self.search_sources(
                SourceSearchCriteriaDto(
                    filter=search_filter,
                    pagination=PaginationDto(
                        page=request_page, items_per_page=request_size
                    ),
                )
            )
            items = (data.get("data") or [])[:remaining]
            yield from items
            seen += len(items)
            remaining -= len(items)
            total = data.get("totalElements")
            if not items or (total is not None and seen >= total):
                return
            page += 1

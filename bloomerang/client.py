"""Bloomerang REST API client with per-page retry and skip/take pagination."""

# For the fixed delay between retry attempts
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

# For making HTTP requests to the Bloomerang API
import requests

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

from .catalog import CollectionDescriptor
from .common import (
    BLOOMERANG_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    RECORDS_PER_PAGE,
    RETRY_DELAY_SECONDS,
    RETRY_LIMIT,
    BloomerangRequestError,
    InvalidCredentialsError,
)


def _as_int(value: Any) -> int:
    """Cast the way the API's ResultCount is read: missing or non-numeric values count as 0."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class PageResult:
    """One decoded page of a collection."""

    results: List[Any]
    result_count: int
    has_more: bool

    @classmethod
    def from_body(cls, body: Any, paginated: bool, page_size: int = RECORDS_PER_PAGE) -> "PageResult":
        """
        Build a page from a decoded response body.
        Paginated endpoints wrap records as {"Results": [...], "ResultCount": n}.
        Other endpoints return the whole collection as the body, which is always a single page.
        """
        if not paginated:
            if isinstance(body, list):
                results = body
            elif body is None:
                results = []
            else:
                results = [body]
            return cls(results=results, result_count=len(results), has_more=False)

        if not isinstance(body, dict):
            raise BloomerangRequestError(
                f"Expected a paginated response object, got {type(body).__name__}"
            )
        results = body.get("Results") or []
        result_count = _as_int(body.get("ResultCount"))

        # A short page, by either the records returned or the reported count, ends pagination
        has_more = len(results) >= page_size and result_count >= page_size
        return cls(results=list(results), result_count=result_count, has_more=has_more)


@dataclass(frozen=True)
class RequestOutcome:
    """The result of a single request attempt: a decoded body or the error that occurred."""

    body: Any = None
    error: Optional[BloomerangRequestError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BloomerangClient:
    """Lightweight HTTP client for the Bloomerang v2 API."""

    def __init__(
        self,
        private_key: str,
        base_url: str = BLOOMERANG_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        retry_limit: int = RETRY_LIMIT,
        retry_delay: int = RETRY_DELAY_SECONDS,
        page_size: int = RECORDS_PER_PAGE,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.retry_limit = retry_limit
        self.retry_delay = retry_delay
        self.page_size = page_size
        self.sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({"X-API-KEY": private_key, "Accept": "application/json"})

    def _attempt(self, path: str, params: Dict[str, Any]) -> RequestOutcome:
        """Perform one GET request and translate every failure into an outcome."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            return RequestOutcome(error=BloomerangRequestError(f"Request to {url} failed: {e}"))

        if response.status_code == 401:
            return RequestOutcome(error=InvalidCredentialsError())
        if response.status_code != 200:
            return RequestOutcome(
                error=BloomerangRequestError(
                    f"Resource not found or another HTTP error occurred. code: {response.status_code}",
                    status_code=response.status_code,
                )
            )

        try:
            return RequestOutcome(body=response.json())
        except ValueError as e:
            return RequestOutcome(
                error=BloomerangRequestError(
                    f"Invalid JSON in response from {url}: {e}", status_code=response.status_code
                )
            )

    def request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make a single request to the Bloomerang API.
        Args:
            path: the API path relative to the base URL, e.g. "constituents".
            params: query parameters for the request.
        Returns:
            The decoded JSON body.
        Raises:
            BloomerangRequestError: on transport errors, non-200 responses or invalid JSON.
        """
        outcome = self._attempt(path, params or {})
        if not outcome.ok:
            raise outcome.error
        return outcome.body

    def request_with_retries(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make a request, retrying every failure up to retry_limit times with a fixed delay.
        Invalid credentials are retried like any other failure.
        Raises:
            BloomerangRequestError: the last failure once the retries are exhausted.
        """
        attempt = 1
        while True:
            outcome = self._attempt(path, params or {})
            if outcome.ok:
                return outcome.body

            if attempt > self.retry_limit:
                log.severe(f"Bloomerang request to {path} failed after {attempt} attempts: {outcome.error}")
                raise outcome.error

            log.warning(
                f"Bloomerang request failed. Retrying. Attempt {attempt} of {self.retry_limit} "
                f"in {self.retry_delay} seconds. Error: {outcome.error}"
            )
            attempt += 1
            self.sleep(self.retry_delay)

    def fetch_page(
        self, collection: CollectionDescriptor, skip: int = 0, take: Optional[int] = None, retry: bool = True
    ) -> PageResult:
        """Fetch one page of a collection starting at the given offset."""
        params = {"skip": skip, "take": take if take is not None else self.page_size}
        if retry:
            body = self.request_with_retries(collection.api_path, params)
        else:
            body = self.request(collection.api_path, params)
        return PageResult.from_body(body, collection.paginated, self.page_size)

    def fetch_all(self, collection: CollectionDescriptor) -> Iterator[PageResult]:
        """
        Yield every page of a collection in increasing offset order.
        Each call starts again from offset 0. Non-paginated collections yield exactly one page.
        """
        current_page = 1
        while True:
            skip = self.page_size * (current_page - 1)
            log.fine(f"Fetching {collection.name} page {current_page} (skip={skip}, take={self.page_size})")
            page = self.fetch_page(collection, skip=skip)
            yield page

            if not page.has_more:
                break
            current_page += 1

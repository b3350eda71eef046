"""Shared constants and exceptions for the Bloomerang helpers."""

# For type hints in exception signatures
from typing import Optional


BLOOMERANG_BASE_URL = "https://api.bloomerang.co/v2/"
DEFAULT_TIMEOUT_SECONDS = 30

# Retries after the first attempt, so each page request is tried RETRY_LIMIT + 1 times
RETRY_LIMIT = 5
RETRY_DELAY_SECONDS = 30

RECORDS_PER_PAGE = 50

# The only column treated as a unique key
ID_COLUMN = "Id"

# Probed by the connection test; every Bloomerang account exposes it
TEST_COLLECTION = "addresses"


class BloomerangRequestError(Exception):
    """Raised when a Bloomerang API request fails or returns an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidCredentialsError(BloomerangRequestError):
    """Raised when the Bloomerang API rejects the private key (HTTP 401)."""

    def __init__(self, message: str = "Bloomerang credentials were invalid."):
        super().__init__(message, status_code=401)

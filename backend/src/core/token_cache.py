"""In-memory cache for the supplier access token.

The cache holds at most one token. Any request may read it; only
``refresh`` writes it. There is no lock: two requests that find the token
expired at the same moment both authenticate, and the last write wins.
Both tokens are valid, so the only cost is a redundant login call.
"""
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from src.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL_SECONDS = 5.5 * 60 * 60


@dataclass(frozen=True)
class Token:
    value: str
    issued_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.issued_at + self.ttl

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TokenCache:
    def __init__(
        self,
        authenticate: Callable[[], Awaitable[str]],
        ttl_seconds: float = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._authenticate = authenticate
        self._ttl = ttl_seconds
        self._clock = clock
        self._token: Token | None = None

    @property
    def current(self) -> Token | None:
        return self._token

    async def get_token(self) -> str:
        """Return the cached token, authenticating first if it is missing or expired."""
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return token.value
        refreshed = await self.refresh()
        return refreshed.value

    async def refresh(self) -> Token:
        value = await self._authenticate()
        if not value:
            raise AuthenticationError("Authentication returned no token")
        token = Token(value=value, issued_at=self._clock(), ttl=self._ttl)
        self._token = token
        logger.info("Supplier token refreshed, valid for %.0fs", self._ttl)
        return token

    def invalidate(self) -> None:
        self._token = None

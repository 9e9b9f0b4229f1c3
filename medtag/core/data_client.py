"""Data-access client shared by the disclosure resolvers."""

import asyncio
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Executable

from medtag.core.exceptions import UpstreamUnavailableException

logger = structlog.get_logger()


class DataClient:
    """
    Read-only query runner with a per-call timeout.

    Every call opens its own session, so independent lookups can be awaited
    concurrently. Store failures and timeouts surface as
    UpstreamUnavailableException and never carry driver error text.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout: float = 5.0,
    ):
        """Initialize client with a session factory and call timeout in seconds."""
        self.session_factory = session_factory
        self.timeout = timeout

    async def fetch_all(self, query: Executable, store: str = "store") -> list[dict[str, Any]]:
        """Run a query and return every row as a dict."""
        return await self._run(query, store, self._all_rows)

    async def fetch_one(self, query: Executable, store: str = "store") -> dict[str, Any] | None:
        """Run a query and return the first row as a dict, or None."""
        return await self._run(query, store, self._first_row)

    async def _all_rows(self, query: Executable) -> list[dict[str, Any]]:
        async with self.session_factory() as session:
            result = await session.execute(query)
            return [dict(row) for row in result.mappings().all()]

    async def _first_row(self, query: Executable) -> dict[str, Any] | None:
        async with self.session_factory() as session:
            result = await session.execute(query)
            row = result.mappings().first()
            return dict(row) if row else None

    async def _run(self, query: Executable, store: str, fetch: Any) -> Any:
        try:
            return await asyncio.wait_for(fetch(query), timeout=self.timeout)
        except TimeoutError as e:
            logger.warning("store_call_timed_out", store=store, timeout=self.timeout)
            raise UpstreamUnavailableException() from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("store_call_failed", store=store, error_type=type(e).__name__)
            raise UpstreamUnavailableException() from e

"""Time-bounded cache of the searchable catalog snapshot."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence

from catalog_search.errors import CatalogUnavailableError
from catalog_search.models.item import SearchableItem

logger = logging.getLogger(__name__)

CatalogFetcher = Callable[[], Awaitable[Sequence[SearchableItem]]]

DEFAULT_TTL_SECONDS = 300.0


class CatalogCache:
    """Holds the latest full catalog snapshot and owns its refresh policy.

    Snapshots are immutable tuples replaced wholesale on each successful
    refresh. A failed refresh keeps serving the previous snapshot; only when
    nothing was ever loaded does the failure reach the caller.

    Concurrent callers share one in-flight refresh. A caller that is
    cancelled while waiting does not cancel the refresh itself, so the new
    snapshot still lands for later callers.
    """

    def __init__(
        self,
        fetch: CatalogFetcher,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize catalog cache.

        Args:
            fetch: Async callable returning the complete catalog
            ttl_seconds: Maximum snapshot age before a refresh is attempted
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self._fetch = fetch
        self.ttl_seconds = ttl_seconds
        self._clock = clock

        self._snapshot: tuple[SearchableItem, ...] | None = None
        self._fetched_at: float | None = None
        self._refresh_task: asyncio.Task | None = None
        self.last_error: BaseException | None = None

        logger.info(f"Initialized CatalogCache with ttl={ttl_seconds}s")

    @property
    def snapshot(self) -> tuple[SearchableItem, ...] | None:
        """Last published snapshot, or None if nothing has loaded yet."""
        return self._snapshot

    @property
    def fetched_at(self) -> float | None:
        """Clock reading at the last successful refresh."""
        return self._fetched_at

    @property
    def age(self) -> float | None:
        if self._fetched_at is None:
            return None
        return self._clock() - self._fetched_at

    @property
    def is_stale(self) -> bool:
        """True when the snapshot is missing, expired or invalidated."""
        age = self.age
        return age is None or age >= self.ttl_seconds

    async def get(self) -> tuple[SearchableItem, ...]:
        """Return the cached snapshot, refreshing it first if stale.

        Returns:
            The current snapshot (possibly stale if the refresh failed)

        Raises:
            CatalogUnavailableError: If the refresh failed and no snapshot
                has ever been loaded
        """
        if not self.is_stale and self._snapshot is not None:
            return self._snapshot
        return await self._refresh_or_fallback()

    async def force_refresh(self) -> tuple[SearchableItem, ...]:
        """Refresh regardless of age, with the same stale-serve fallback."""
        self.invalidate()
        return await self._refresh_or_fallback()

    def invalidate(self) -> None:
        """Mark the snapshot stale without discarding it."""
        if self._fetched_at is not None:
            self._fetched_at = self._clock() - self.ttl_seconds
            logger.debug("Catalog snapshot invalidated")

    async def _refresh_or_fallback(self) -> tuple[SearchableItem, ...]:
        try:
            return await asyncio.shield(self._ensure_refresh_task())
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if self._snapshot is None:
                raise CatalogUnavailableError(
                    f"Catalog unavailable and no snapshot loaded: {e}", cause=e
                ) from e
            logger.warning(
                f"Catalog refresh failed, serving stale snapshot "
                f"({len(self._snapshot)} items): {e}"
            )
            return self._snapshot

    def _ensure_refresh_task(self) -> asyncio.Task:
        if self._refresh_task is None or self._refresh_task.done():
            task = asyncio.get_running_loop().create_task(self._refresh())
            # Failures are reported to waiters; consume them when nobody waits
            task.add_done_callback(_consume_exception)
            self._refresh_task = task
        return self._refresh_task

    async def _refresh(self) -> tuple[SearchableItem, ...]:
        logger.info("→ Catalog refresh START")
        started = self._clock()
        try:
            items = await self._fetch()
        except Exception as e:
            self.last_error = e
            logger.error(f"✗ Catalog refresh FAILED: {e}")
            raise

        snapshot = tuple(items)
        self._snapshot = snapshot
        self._fetched_at = self._clock()
        self.last_error = None

        logger.info(
            f"✓ Catalog refresh COMPLETE: {len(snapshot)} items in "
            f"{self._fetched_at - started:.2f}s"
        )
        return snapshot


def _consume_exception(task: asyncio.Task) -> None:
    if not task.cancelled():
        task.exception()

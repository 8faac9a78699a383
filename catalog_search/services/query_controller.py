"""Debounced, cancelable evaluation of keystroke-driven queries."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from catalog_search.errors import ControllerClosedError

logger = logging.getLogger(__name__)

AUTOCOMPLETE_DEBOUNCE_MS = 200
SEARCH_DEBOUNCE_MS = 300


class QueryController:
    """Restart a single deferred evaluation on every new input.

    Each ``submit`` abandons the pending evaluation (cancelling its task) and
    schedules a new one that waits for the debounce window before calling
    ``evaluate``. Only the latest submission's outcome reaches ``on_result``
    or ``on_error``; anything produced for a superseded submission is
    dropped, even if it finishes later.
    """

    def __init__(
        self,
        evaluate: Callable[[Any], Awaitable[Any]],
        on_result: Callable[[Any, Any], None],
        delay_ms: int = SEARCH_DEBOUNCE_MS,
        on_error: Callable[[Any, Exception], None] | None = None,
        name: str = "query",
    ):
        """Initialize query controller.

        Args:
            evaluate: Async evaluation of a settled value
            on_result: Called with (value, result) for the latest settled value
            delay_ms: Debounce window in milliseconds
            on_error: Called with (value, exception) when the latest
                evaluation fails
            name: Label used in log messages
        """
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")

        self._evaluate = evaluate
        self._on_result = on_result
        self._on_error = on_error
        self.delay_ms = delay_ms
        self.name = name

        self._generation = 0
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while an evaluation is scheduled or running."""
        return self._task is not None and not self._task.done()

    @property
    def generation(self) -> int:
        """Number of submissions and cancellations so far."""
        return self._generation

    def submit(self, value: Any) -> None:
        """Schedule ``value`` for evaluation, superseding any pending one.

        Raises:
            ControllerClosedError: If the controller has been closed
        """
        if self._closed:
            raise ControllerClosedError(f"{self.name} controller is closed")

        self._abandon()
        generation = self._generation
        self._task = asyncio.get_running_loop().create_task(self._run(generation, value))

    def cancel(self) -> None:
        """Abandon the pending evaluation, if any."""
        self._abandon()

    async def flush(self) -> None:
        """Wait until the latest submission has settled and been delivered."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def close(self) -> None:
        """Abandon pending work and reject further submissions."""
        self._closed = True
        task = self._task
        self._abandon()
        if task is not None:
            await asyncio.wait({task})

    def _abandon(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"[{self.name}] superseded pending evaluation")
        self._task = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(self, generation: int, value: Any) -> None:
        try:
            await asyncio.sleep(self.delay_ms / 1000)
            result = await self._evaluate(value)
        except asyncio.CancelledError:
            return
        except Exception as e:
            if not self._is_current(generation):
                logger.debug(f"[{self.name}] dropped failure of superseded evaluation: {e}")
                return
            if self._on_error is None:
                logger.error(f"[{self.name}] evaluation failed: {e}", exc_info=True)
                return
            self._on_error(value, e)
            return

        if not self._is_current(generation):
            logger.debug(f"[{self.name}] dropped result of superseded evaluation")
            return
        self._on_result(value, result)

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debouncer:
    """Отложенный вызов: каждый schedule() отменяет ожидающий и ставит заново"""

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]):
        self.delay = delay
        self._callback = callback
        self._timer: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """Есть запланированный, но еще не начавшийся вызов"""
        return self._timer is not None and not self._timer.done()

    @property
    def running(self) -> bool:
        return bool(self._running)

    def schedule(self) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._fire())

    def cancel(self) -> bool:
        """Отмена ожидающего вызова; уже начатый вызов не прерывается"""
        if not self.pending:
            self._timer = None
            return False

        self._timer.cancel()
        self._timer = None
        return True

    async def flush(self) -> bool:
        """Немедленный вызов, если он был запланирован"""
        if not self.cancel():
            await self.wait()
            return False

        await self.wait()
        await self._callback()
        return True

    async def wait(self) -> None:
        """Ожидание завершения уже начатых вызовов"""
        if self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    async def _fire(self) -> None:
        await asyncio.sleep(self.delay)

        # таймер отработал, дальше вызов живет отдельной задачей
        self._timer = None
        task = asyncio.current_task()
        self._running.add(task)
        try:
            await self._callback()
        except Exception:
            logger.exception("Debounced callback failed")
        finally:
            self._running.discard(task)

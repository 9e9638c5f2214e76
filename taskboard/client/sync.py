"""Синхронизация холста: локальные правки и отложенная отправка снимка.

Каждая правка меняет локальное состояние сразу, а на сервер уходит полный
снимок узлов через ``delay`` секунд после последней правки. Сервер заменяет
узлы холста целиком. Одновременные правки из двух мест не сливаются:
побеждает снимок, сохраненный последним.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

import httpx

from taskboard.client import history
from taskboard.client.api import ApiError
from taskboard.client.history import BoardState
from taskboard.client.scheduler import Debouncer
from taskboard.client.tree import Node, Nodes

logger = logging.getLogger(__name__)

SAVE_DELAY = 0.8


class NodeStore(Protocol):
    """Хранилище узлов одного холста: по владельцу или по ссылке"""

    async def load_nodes(self) -> List[Dict[str, Any]]:
        ...

    async def save_nodes(self, nodes: List[Dict[str, Any]]) -> int:
        ...


class CanvasSync:
    """Состояние одного открытого холста и его автосохранение"""

    def __init__(
        self,
        store: NodeStore,
        state: Optional[BoardState] = None,
        delay: float = SAVE_DELAY,
        on_save_error: Optional[Callable[[Exception], None]] = None
    ):
        self.store = store
        self.state = state or BoardState()
        self.on_save_error = on_save_error
        self.save_error: Optional[Exception] = None
        self.last_saved: Optional[Nodes] = None
        self._dirty = False
        # в каждый момент идет не больше одной отправки
        self._push_lock = asyncio.Lock()
        self._debouncer = Debouncer(delay, self._push)

    @property
    def nodes(self) -> Nodes:
        return self.state.present

    @property
    def saving(self) -> bool:
        """Отправка запланирована или уже идет"""
        return self._debouncer.pending or self._debouncer.running or self._push_lock.locked()

    @property
    def dirty(self) -> bool:
        return self._dirty

    async def load(self) -> BoardState:
        """Загрузка узлов с сервера со сбросом истории"""
        self._debouncer.cancel()
        items = await self.store.load_nodes()
        self.state = history.load(Node.from_wire(item) for item in items)
        self.last_saved = self.state.present
        self._dirty = False
        self.save_error = None
        return self.state

    def mutate(self, mutation: Callable[..., Nodes], *args, **kwargs) -> BoardState:
        return self._set_state(history.apply(self.state, mutation, *args, **kwargs))

    def undo(self) -> BoardState:
        return self._set_state(history.undo(self.state))

    def redo(self) -> BoardState:
        return self._set_state(history.redo(self.state))

    def drag_move(self, node_id: str, x: float, y: float) -> BoardState:
        return self._set_state(history.drag_move(self.state, node_id, x, y))

    def drag_end(self) -> BoardState:
        self.state = history.drag_end(self.state)
        return self.state

    async def flush(self) -> bool:
        """Немедленная отправка несохраненных правок; True, если все сохранено"""
        self._debouncer.cancel()
        await self._debouncer.wait()
        if self._dirty:
            await self._push()
        return self.save_error is None

    def _set_state(self, state: BoardState) -> BoardState:
        if state.present is not self.state.present:
            self._dirty = True
            self._debouncer.schedule()
        self.state = state
        return state

    async def _push(self) -> None:
        """Отправка текущего снимка, пока на сервере не окажется последняя версия"""
        async with self._push_lock:
            while self._dirty:
                snapshot = self.state.present
                self._dirty = False

                try:
                    await self.store.save_nodes([node.to_wire() for node in snapshot])
                except (ApiError, httpx.HTTPError) as e:
                    # правки остаются несохраненными до следующего flush()
                    self._dirty = True
                    self.save_error = e
                    logger.error(f"Failed to save {len(snapshot)} nodes: {e}")
                    if self.on_save_error is not None:
                        self.on_save_error(e)
                    return

                self.save_error = None
                self.last_saved = snapshot

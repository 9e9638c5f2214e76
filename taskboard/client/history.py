"""Неизменяемый контейнер состояния доски с историей отмены.

Состояние передается явно: каждая функция принимает ``BoardState`` и
возвращает новый. Глобального хранилища нет.
"""
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Tuple

from taskboard.client.tree import Node, Nodes, move_node

UNDO_LIMIT = 40


@dataclass(frozen=True)
class BoardState:
    present: Nodes = ()
    undo_stack: Tuple[Nodes, ...] = ()
    redo_stack: Tuple[Nodes, ...] = ()
    dragging: bool = False

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)


def _push_undo(undo_stack: Tuple[Nodes, ...], nodes: Nodes) -> Tuple[Nodes, ...]:
    # самые старые шаги отбрасываются
    return (undo_stack + (nodes,))[-UNDO_LIMIT:]


def load(nodes: Iterable[Node]) -> BoardState:
    """Новое состояние без истории, например при смене холста"""
    return BoardState(present=tuple(nodes))


def apply(state: BoardState, mutation: Callable[..., Nodes], *args, **kwargs) -> BoardState:
    """Применение операции дерева с записью предыдущего состояния в историю"""
    nodes = mutation(state.present, *args, **kwargs)
    if nodes == state.present:
        return state

    return BoardState(
        present=nodes,
        undo_stack=_push_undo(state.undo_stack, state.present),
        redo_stack=(),
        dragging=False,
    )


def undo(state: BoardState) -> BoardState:
    if not state.undo_stack:
        return state

    return BoardState(
        present=state.undo_stack[-1],
        undo_stack=state.undo_stack[:-1],
        redo_stack=(state.present,) + state.redo_stack,
        dragging=False,
    )


def redo(state: BoardState) -> BoardState:
    if not state.redo_stack:
        return state

    return BoardState(
        present=state.redo_stack[0],
        undo_stack=_push_undo(state.undo_stack, state.present),
        redo_stack=state.redo_stack[1:],
        dragging=False,
    )


def drag_move(state: BoardState, node_id: str, x: float, y: float) -> BoardState:
    """Кадр перетаскивания; в историю попадает только состояние до начала"""
    nodes = move_node(state.present, node_id, x, y)
    if nodes == state.present:
        return state

    if state.dragging:
        return replace(state, present=nodes)

    return BoardState(
        present=nodes,
        undo_stack=_push_undo(state.undo_stack, state.present),
        redo_stack=(),
        dragging=True,
    )


def drag_end(state: BoardState) -> BoardState:
    if not state.dragging:
        return state
    return replace(state, dragging=False)

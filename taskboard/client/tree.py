"""Клиентская модель дерева задач.

Все операции чистые: принимают кортеж узлов и возвращают новый кортеж.
Если операция ничего не меняет, возвращается тот же кортеж, и история
не получает лишнего шага.
"""
import json
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Iterable, NamedTuple, Optional, Tuple, Union

from taskboard.domains.nodes.tree import descendants, roots

NODE_WIDTH = 220
NODE_HEIGHT = 106
SNAPSHOT_VERSION = 2

PRIORITY_CYCLE = ("none", "low", "medium", "high")
PRIORITY_RANK = ("high", "medium", "low", "none")


@dataclass(frozen=True)
class Node:
    id: str
    title: str = ""
    x: float = 0.0
    y: float = 0.0
    priority: str = "none"
    completed: bool = False
    parent_id: Optional[str] = None
    due_date: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "x": self.x,
            "y": self.y,
            "priority": self.priority,
            "completed": self.completed,
            "parentId": self.parent_id,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Node":
        """Узел из JSON; отсутствующие поля получают значения по умолчанию"""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            x=float(data.get("x") or 0),
            y=float(data.get("y") or 0),
            priority=data.get("priority") or "none",
            completed=bool(data.get("completed", False)),
            parent_id=data.get("parentId") or None,
            due_date=data.get("dueDate") or None,
        )


Nodes = Tuple[Node, ...]


def new_node_id() -> str:
    return uuid.uuid4().hex


def find_node(nodes: Nodes, node_id: str) -> Optional[Node]:
    for node in nodes:
        if node.id == node_id:
            return node
    return None


def _update(nodes: Nodes, node_id: str, **changes) -> Nodes:
    node = find_node(nodes, node_id)
    if node is None:
        return nodes

    updated = replace(node, **changes)
    if updated == node:
        return nodes
    return tuple(updated if n.id == node_id else n for n in nodes)


def add_node(
    nodes: Nodes,
    node_id: Optional[str] = None,
    parent_id: Optional[str] = None,
    x: float = 0.0,
    y: float = 0.0,
    title: str = ""
) -> Nodes:
    """Новый узел; подзадача ставится под родителем рядом с братьями"""
    parent = find_node(nodes, parent_id) if parent_id else None
    if parent is not None:
        siblings = sum(1 for n in nodes if n.parent_id == parent.id)
        x = parent.x + (siblings - 0.5) * (NODE_WIDTH + 30)
        y = parent.y + NODE_HEIGHT + 70

    node = Node(
        id=node_id or new_node_id(),
        title=title,
        x=x,
        y=y,
        parent_id=parent.id if parent is not None else None,
    )
    return nodes + (node,)


def delete_node(nodes: Nodes, node_id: str) -> Nodes:
    """Удаление узла вместе со всеми потомками"""
    if find_node(nodes, node_id) is None:
        return nodes

    removed = descendants(nodes, node_id)
    return tuple(n for n in nodes if n.id not in removed)


def set_title(nodes: Nodes, node_id: str, title: str) -> Nodes:
    return _update(nodes, node_id, title=title)


def finish_edit(nodes: Nodes, node_id: str, title: str) -> Nodes:
    """Завершение редактирования: пустой заголовок удаляет узел"""
    if not title.strip():
        return delete_node(nodes, node_id)
    return set_title(nodes, node_id, title)


def toggle_completed(nodes: Nodes, node_id: str) -> Nodes:
    node = find_node(nodes, node_id)
    if node is None:
        return nodes
    return _update(nodes, node_id, completed=not node.completed)


def cycle_priority(nodes: Nodes, node_id: str) -> Nodes:
    """none -> low -> medium -> high -> none"""
    node = find_node(nodes, node_id)
    if node is None:
        return nodes

    index = PRIORITY_CYCLE.index(node.priority) if node.priority in PRIORITY_CYCLE else -1
    return _update(nodes, node_id, priority=PRIORITY_CYCLE[(index + 1) % len(PRIORITY_CYCLE)])


def move_node(nodes: Nodes, node_id: str, x: float, y: float) -> Nodes:
    return _update(nodes, node_id, x=x, y=y)


def set_due_date(nodes: Nodes, node_id: str, due_date: Optional[str]) -> Nodes:
    return _update(nodes, node_id, due_date=due_date or None)


def organize_by_priority(nodes: Nodes) -> Nodes:
    """Корневые узлы в ряд по убыванию приоритета"""
    ordered = sorted(
        roots(nodes),
        key=lambda n: PRIORITY_RANK.index(n.priority) if n.priority in PRIORITY_RANK else len(PRIORITY_RANK)
    )
    positions = {node.id: (i * (NODE_WIDTH + 50), 80) for i, node in enumerate(ordered)}

    result = tuple(
        replace(n, x=positions[n.id][0], y=positions[n.id][1]) if n.id in positions else n
        for n in nodes
    )
    return nodes if result == nodes else result


def make_independent(nodes: Nodes) -> Nodes:
    if all(n.parent_id is None for n in nodes):
        return nodes
    return tuple(replace(n, parent_id=None) for n in nodes)


def clear_all(nodes: Nodes) -> Nodes:
    return ()


def import_snapshot(nodes: Nodes, data: Union[str, Dict[str, Any]]) -> Nodes:
    """Замена всех узлов содержимым экспортированного JSON {nodes, version}"""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid snapshot: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("nodes", []), list):
        raise ValueError("Invalid snapshot: expected an object with a nodes list")

    try:
        imported = tuple(Node.from_wire(item) for item in data.get("nodes", []))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid snapshot node: {e}")

    return nodes if imported == nodes else imported


def export_snapshot(nodes: Iterable[Node]) -> str:
    return json.dumps(
        {"nodes": [n.to_wire() for n in nodes], "version": SNAPSHOT_VERSION},
        indent=2
    )


class BoardStats(NamedTuple):
    total: int
    completed: int
    overdue: int


def is_overdue(node: Node, today: date) -> bool:
    """Срок прошел, а задача не выполнена; сегодняшний срок еще не просрочен"""
    if node.completed or not node.due_date:
        return False
    return date.fromisoformat(node.due_date[:10]) < today


def board_stats(nodes: Iterable[Node], today: Optional[date] = None) -> BoardStats:
    """Счетчики для панели холста"""
    today = today or date.today()
    nodes = tuple(nodes)
    return BoardStats(
        total=len(nodes),
        completed=sum(1 for n in nodes if n.completed),
        overdue=sum(1 for n in nodes if is_overdue(n, today)),
    )

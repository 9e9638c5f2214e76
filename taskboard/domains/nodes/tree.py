"""Обход дерева задач по связям parent_id.

Функции принимают любые объекты с атрибутами ``id`` и ``parent_id``:
серверные ``TaskNode`` и клиентские ``taskboard.client.tree.Node``.
Клиент присылает снимок целиком, поэтому в нем может оказаться цикл;
все обходы ведутся с множеством посещенных и на цикле не зацикливаются.
"""
from typing import Dict, Iterable, List, Optional, Set


def build_children_map(nodes: Iterable) -> Dict[str, List[str]]:
    """Карта смежности parent_id -> ids прямых потомков"""
    children: Dict[str, List[str]] = {}
    for node in nodes:
        if node.parent_id is not None:
            children.setdefault(node.parent_id, []).append(node.id)
    return children


def descendants(nodes: Iterable, node_id: str) -> Set[str]:
    """Узел и все его потомки на любой глубине"""
    children = build_children_map(nodes)
    found = {node_id}
    stack = [node_id]

    while stack:
        current = stack.pop()
        for child_id in children.get(current, ()):
            if child_id not in found:
                found.add(child_id)
                stack.append(child_id)

    return found


def find_cycle(nodes: Iterable) -> Optional[str]:
    """Id узла, лежащего на цикле родителей, или None"""
    parents = {node.id: node.parent_id for node in nodes}
    done: Set[str] = set()

    for start in parents:
        if start in done:
            continue

        path: List[str] = []
        on_path: Set[str] = set()
        current = start
        while current is not None and current in parents and current not in done:
            if current in on_path:
                return current
            path.append(current)
            on_path.add(current)
            current = parents[current]

        done.update(path)

    return None


def roots(nodes: Iterable) -> List:
    """Узлы верхнего уровня в исходном порядке"""
    return [node for node in nodes if node.parent_id is None]

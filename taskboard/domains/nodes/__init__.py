from taskboard.domains.nodes.entities import TaskNode, NodeSnapshot, PRIORITIES
from taskboard.domains.nodes.schemas import NodePayload, NodeReplaceRequest, NodeResponse, SaveResponse
from taskboard.domains.nodes.tree import build_children_map, descendants, find_cycle, roots

__all__ = [
    "TaskNode", "NodeSnapshot", "PRIORITIES",
    "NodePayload", "NodeReplaceRequest", "NodeResponse", "SaveResponse",
    "build_children_map", "descendants", "find_cycle", "roots",
]

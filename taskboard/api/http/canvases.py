from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.auth import get_current_user
from taskboard.core.db import get_db
from taskboard.core.schemas import MessageResponse
from taskboard.domains.access import resolve_owner_access
from taskboard.domains.canvases.entities import Canvas
from taskboard.domains.canvases.schemas import CanvasCreate, CanvasRename, CanvasResponse
from taskboard.domains.canvases.services import CanvasService
from taskboard.domains.identity.entities import User
from taskboard.domains.nodes.entities import TaskNode
from taskboard.domains.nodes.schemas import NodeReplaceRequest, NodeResponse, SaveResponse
from taskboard.domains.nodes.services import NodeService

router = APIRouter(prefix="/api/canvases", tags=["canvases"])


def canvas_response(canvas: Canvas) -> CanvasResponse:
    return CanvasResponse(
        id=canvas.id,
        user_id=canvas.user_id,
        name=canvas.name,
        created_at=canvas.created_at,
        updated_at=canvas.updated_at
    )


def node_responses(nodes: List[TaskNode]) -> List[NodeResponse]:
    return [
        NodeResponse(
            id=node.id,
            title=node.title,
            x=node.x,
            y=node.y,
            priority=node.priority,
            completed=node.completed,
            parent_id=node.parent_id,
            due_date=node.due_date
        )
        for node in nodes
    ]


@router.get("", response_model=List[CanvasResponse])
async def list_canvases(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Холсты текущего пользователя"""
    canvas_service = CanvasService(db)

    canvases = await canvas_service.list_canvases(current_user.id)

    return [canvas_response(canvas) for canvas in canvases]


@router.post("", response_model=CanvasResponse, status_code=status.HTTP_201_CREATED)
async def create_canvas(
    canvas_data: CanvasCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового холста"""
    canvas_service = CanvasService(db)

    canvas = await canvas_service.create_canvas(current_user.id, canvas_data.name)

    return canvas_response(canvas)


@router.patch("/{canvas_id}", response_model=CanvasResponse)
async def rename_canvas(
    canvas_id: str,
    rename_data: CanvasRename,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Переименование холста"""
    canvas_service = CanvasService(db)

    canvas = await canvas_service.rename_canvas(current_user.id, canvas_id, rename_data.name)

    return canvas_response(canvas)


@router.delete("/{canvas_id}", response_model=MessageResponse)
async def delete_canvas(
    canvas_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление холста вместе с узлами и ссылками"""
    canvas_service = CanvasService(db)

    await canvas_service.delete_canvas(current_user.id, canvas_id)

    return {"message": "Canvas deleted"}


@router.get("/{canvas_id}/nodes", response_model=List[NodeResponse])
async def get_canvas_nodes(
    canvas_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Узлы холста"""
    access = await resolve_owner_access(db, current_user.id, canvas_id)

    nodes = await NodeService(db).list_canvas_nodes(access)

    return node_responses(nodes)


@router.put("/{canvas_id}/nodes", response_model=SaveResponse)
async def replace_canvas_nodes(
    canvas_id: str,
    replace_data: NodeReplaceRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Полная замена узлов холста снимком клиента"""
    access = await resolve_owner_access(db, current_user.id, canvas_id)

    saved = await NodeService(db).replace_canvas_nodes(
        access,
        [node.to_entity() for node in replace_data.nodes]
    )

    return SaveResponse(saved=saved)

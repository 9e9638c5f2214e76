from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.http.canvases import canvas_response, node_responses
from taskboard.core.auth import get_current_user
from taskboard.core.db import get_db
from taskboard.core.schemas import MessageResponse
from taskboard.domains.identity.entities import User
from taskboard.domains.nodes.schemas import NodeReplaceRequest, SaveResponse
from taskboard.domains.shares.entities import Share
from taskboard.domains.shares.schemas import ShareCreate, ShareResponse, SharedCanvasResponse
from taskboard.domains.shares.services import ShareService

router = APIRouter(prefix="/api/canvases", tags=["shares"])

# Доступ по ссылке без авторизации; подключается раньше маршрутов /{canvas_id}
shared_router = APIRouter(prefix="/api/canvases/shared", tags=["shared"])


def share_response(share: Share) -> ShareResponse:
    return ShareResponse(
        id=share.id,
        canvas_id=share.canvas_id,
        token=share.token,
        mode=share.mode,
        created_at=share.created_at
    )


@router.get("/{canvas_id}/shares", response_model=List[ShareResponse])
async def list_shares(
    canvas_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Ссылки доступа к холсту"""
    share_service = ShareService(db)

    shares = await share_service.list_shares(current_user.id, canvas_id)

    return [share_response(share) for share in shares]


@router.post("/{canvas_id}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def create_share(
    canvas_id: str,
    share_data: ShareCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание ссылки для просмотра или редактирования"""
    share_service = ShareService(db)

    share = await share_service.create_share(current_user.id, canvas_id, share_data.mode)

    return share_response(share)


@router.delete("/{canvas_id}/shares/{share_id}", response_model=MessageResponse)
async def revoke_share(
    canvas_id: str,
    share_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Отзыв ссылки"""
    share_service = ShareService(db)

    await share_service.revoke_share(current_user.id, canvas_id, share_id)

    return {"message": "Link revoked"}


@shared_router.get("/{token}", response_model=SharedCanvasResponse)
async def open_shared_canvas(token: str, db: AsyncSession = Depends(get_db)):
    """Холст по ссылке"""
    share_service = ShareService(db)

    canvas, nodes, mode = await share_service.open_shared_canvas(token)

    return SharedCanvasResponse(
        canvas=canvas_response(canvas),
        nodes=node_responses(nodes),
        mode=mode
    )


@shared_router.put("/{token}/nodes", response_model=SaveResponse)
async def replace_shared_nodes(
    token: str,
    replace_data: NodeReplaceRequest,
    db: AsyncSession = Depends(get_db)
):
    """Сохранение узлов по ссылке редактирования"""
    share_service = ShareService(db)

    saved = await share_service.replace_shared_nodes(
        token,
        [node.to_entity() for node in replace_data.nodes]
    )

    return SaveResponse(saved=saved)

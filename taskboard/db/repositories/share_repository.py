from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_
from sqlalchemy.exc import IntegrityError

from taskboard.core.errors import NotFoundError
from taskboard.db.models.share import Share as ShareModel
from taskboard.db.repositories.canvas_repository import owned_canvas_ids
from taskboard.domains.shares.entities import Share


def shared_canvas_ids(token: str, editable_only: bool = False):
    """Подзапрос id холстов, открытых по токену (для записи только режим edit)"""
    stmt = select(ShareModel.canvas_id).where(ShareModel.token == token)
    if editable_only:
        stmt = stmt.where(ShareModel.mode == "edit")
    return stmt


class ShareRepository:
    """Репозиторий ссылок доступа к холстам"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, share: Share) -> Share:
        """Создание новой ссылки"""
        db_share = ShareModel(
            id=share.id,
            canvas_id=share.canvas_id,
            token=share.token,
            mode=share.mode,
            created_at=share.created_at
        )

        self.session.add(db_share)
        try:
            await self.session.commit()
            await self.session.refresh(db_share)
            return self._to_domain(db_share)
        except IntegrityError:
            await self.session.rollback()
            raise NotFoundError("Canvas not found")

    async def get_by_token(self, token: str) -> Optional[Share]:
        """Поиск ссылки по токену"""
        result = await self.session.execute(
            select(ShareModel).where(ShareModel.token == token)
        )
        db_share = result.scalar_one_or_none()
        return self._to_domain(db_share) if db_share else None

    async def get_by_canvas(self, canvas_id: str, owner_id: str) -> List[Share]:
        """Ссылки холста, только для его владельца"""
        result = await self.session.execute(
            select(ShareModel)
            .where(
                and_(
                    ShareModel.canvas_id == canvas_id,
                    ShareModel.canvas_id.in_(owned_canvas_ids(owner_id))
                )
            )
            .order_by(ShareModel.created_at.asc())
        )
        db_shares = result.scalars().all()
        return [self._to_domain(share) for share in db_shares]

    async def delete(self, share_id: str, canvas_id: str, owner_id: str) -> bool:
        """Отзыв ссылки: совпасть должны и id ссылки, и id холста владельца"""
        stmt = delete(ShareModel).where(
            and_(
                ShareModel.id == share_id,
                ShareModel.canvas_id == canvas_id,
                ShareModel.canvas_id.in_(owned_canvas_ids(owner_id))
            )
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_share: ShareModel) -> Share:
        """Преобразование модели БД в доменную сущность"""
        return Share(
            id=db_share.id,
            canvas_id=db_share.canvas_id,
            token=db_share.token,
            mode=db_share.mode,
            created_at=db_share.created_at
        )

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from taskboard.config import settings

# Базовый класс для моделей
Base = declarative_base()


def _prepare_sqlite_path(database_url: str) -> None:
    """Создание каталога для файла SQLite, если его нет"""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


_prepare_sqlite_path(settings.database_url)

# Асинхронный движок
engine = create_async_engine(settings.database_url, future=True, echo=settings.database_echo)


if engine.dialect.name == "sqlite":
    # SQLite по умолчанию не проверяет внешние ключи, а каскады нам нужны
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables() -> None:
    """Создание таблиц по метаданным моделей"""
    import taskboard.db.models  # noqa: F401  регистрирует модели в Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session

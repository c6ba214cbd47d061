# app/core/database.py
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine, AsyncEngine
from sqlalchemy.orm import declarative_base

from app.core.config import Settings

# 建立 ORM Model 基底類別
Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """依據設定建立非同步引擎"""
    return create_async_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # 每次從連線池取連線前，先 PING 一次，確保連線有效
        echo=settings.DB_ECHO,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """啟動時建立所有資料表 (Model 需先被 import)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# (重要) 取得 DB Session 的 Dependency
async def get_db(request: Request) -> AsyncSession:
    """FastAPI Dependency: 取得非同步資料庫 session"""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

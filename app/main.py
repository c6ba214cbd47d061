import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory, create_tables
from app.routers import auth_router, freelancer_router

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import user  # noqa: F401
from app.models import freelancer_profile  # noqa: F401

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 啟動：建立資料表
    await create_tables(app.state.engine)
    logger.info("Database ready, uploads served from %s", app.state.settings.UPLOAD_DIR)
    yield
    # 關閉：釋放連線池
    await app.state.engine.dispose()


def create_app(settings: Settings) -> FastAPI:
    """
    建立 FastAPI 應用程式。
    Settings 只在啟動時建立一次，之後透過 app.state 傳給各依賴項。
    """
    app = FastAPI(lifespan=lifespan)

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # --- 設定 CORS (跨來源資源共用) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 未預期的錯誤統一回傳 500，並記錄完整 traceback
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Server Error"},
        )

    # --- 根路徑 ---
    @app.get("/")
    def read_root():
        return {"status": "success", "message": "Backend is running!"}

    # --- 載入 API 路由 ---
    app.include_router(auth_router.router)
    app.include_router(freelancer_router.router)

    # 上傳檔案：/uploads/<category>/<filename>
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir), name="uploads")

    return app


def build_app() -> FastAPI:
    """Process 進入點：uvicorn app.main:build_app --factory"""
    settings = Settings()
    setup_logging(settings)
    return create_app(settings)

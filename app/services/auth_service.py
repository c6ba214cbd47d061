# app/services/auth_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
import logging
import uuid

from app.core.config import Settings
from app.core.security import verify_password, create_access_token, get_password_hash
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.user_repo = UserRepository(db)
        self.settings = settings

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        if not user or not user.is_active:
            return None

        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """處理使用者註冊"""
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="此 Email 已經被註冊",
            )

        new_user = User(
            user_id=str(uuid.uuid4()),
            name=user_create.name,
            email=user_create.email,
            password_hash=get_password_hash(user_create.password),
            role=user_create.role
        )

        created_user = await self.user_repo.create_user(new_user)
        logger.info("Registered user %s (%s)", created_user.user_id, created_user.role.value)
        return created_user

    def create_login_token(self, user: User) -> str:
        """為指定使用者建立 access token"""
        return create_access_token(
            data={
                "sub": user.email,
                "user_id": str(user.user_id),
                "role": user.role.value  # 確保存入的是字串
            },
            settings=self.settings,
        )

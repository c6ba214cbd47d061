# app/repositories/profile_repo.py
from dataclasses import dataclass
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from app.models.freelancer_profile import FreelancerProfile, default_stats
from app.schemas.profile_schema import ProfessionalInfo
from typing import Union
import logging
import uuid

logger = logging.getLogger(__name__)


# fetch_or_create 的回傳值：讓呼叫端分辨「既有」與「剛建立」
@dataclass
class Existing:
    profile: FreelancerProfile


@dataclass
class Created:
    profile: FreelancerProfile


FetchResult = Union[Existing, Created]


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user_id(self, user_id: str) -> FreelancerProfile | None:
        stmt = select(FreelancerProfile).where(FreelancerProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_with_owner(self, user_id: str) -> FreelancerProfile | None:
        """連同擁有者 (User) 的姓名與 email 一起載入"""
        stmt = (
            select(FreelancerProfile)
            .where(FreelancerProfile.user_id == user_id)
            .options(selectinload(FreelancerProfile.user))
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def fetch_or_create(self, user_id: str, name: str, email: str | None) -> FetchResult:
        """
        依 user_id 取得 Profile；不存在時以使用者的 name / email 建立一份預設 Profile。

        新建立的 Profile 只會 flush，由呼叫端決定何時 commit
        (例如更新流程會與後續的修改一起 commit)。
        """
        profile = await self.get_by_user_id(user_id)
        if profile is not None:
            return Existing(profile)

        new_profile = FreelancerProfile(
            profile_id=str(uuid.uuid4()),
            user_id=user_id,
            personal_info={"name": name, "email": email},
            professional_info=ProfessionalInfo().model_dump(),
            skills=[],
            projects=[],
            stats=default_stats(),
            resume=None,
            profile_image=None,
        )
        self.db.add(new_profile)
        try:
            await self.db.flush()
        except IntegrityError:
            # 同一使用者的另一個請求已先建立 (user_id UNIQUE)，改用對方建立的那筆
            await self.db.rollback()
            profile = await self.get_by_user_id(user_id)
            if profile is None:
                raise
            return Existing(profile)

        logger.info("Created default freelancer profile for user %s", user_id)
        return Created(new_profile)

    async def save(self, profile: FreelancerProfile) -> FreelancerProfile:
        """寫回整筆 Profile (單筆寫入，last-write-wins)"""
        self.db.add(profile)
        await self.db.commit()
        await self.db.refresh(profile)
        return profile

    async def get_stats(self, user_id: str) -> dict:
        """取得統計資料；沒有 Profile 時回傳全 0，且不會建立 Profile"""
        stmt = select(FreelancerProfile.stats).where(FreelancerProfile.user_id == user_id)
        result = await self.db.execute(stmt)
        stats = result.scalars().first()
        if stats is None:
            return default_stats()
        return {**default_stats(), **stats}

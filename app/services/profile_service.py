# app/services/profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, UploadFile, status
from pydantic import ValidationError
import logging

from app.models.freelancer_profile import FreelancerProfile
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository, Created, FetchResult
from app.schemas.profile_schema import FreelancerProfileUpdate, ProfileRecord
from app.services.upload_service import UploadService
from app.utils.profile_merge import merge_profile_update, build_attachment

logger = logging.getLogger(__name__)

# 附件種類 (同時也是 Model 欄位名稱)
ATTACHMENT_KINDS = ("resume", "profile_image")


def profile_to_record(profile: FreelancerProfile) -> dict:
    """取出可被合併的欄位群組"""
    return {
        "personal_info": dict(profile.personal_info or {}),
        "professional_info": dict(profile.professional_info or {}),
        "skills": list(profile.skills or []),
        "projects": list(profile.projects or []),
        "stats": dict(profile.stats or {}),
    }


class ProfileService:
    def __init__(self, db: AsyncSession, uploads: UploadService | None = None):
        self.repo = ProfileRepository(db)
        self.uploads = uploads

    async def _fetch_or_create(self, user: User) -> FetchResult:
        return await self.repo.fetch_or_create(user.user_id, name=user.name, email=user.email)

    async def get_my_profile(self, user: User) -> FreelancerProfile:
        """取得登入者的 Profile，第一次存取時自動建立"""
        result = await self._fetch_or_create(user)
        if isinstance(result, Created):
            return await self.repo.save(result.profile)
        return result.profile

    async def update_my_profile(self, user: User, update_data: FreelancerProfileUpdate) -> FreelancerProfile:
        """
        業務邏輯：部分更新 Profile
        合併後整份重新驗證，驗證失敗時不寫入任何資料。
        """
        profile = (await self._fetch_or_create(user)).profile

        changes = update_data.model_dump(exclude_unset=True)
        merged = merge_profile_update(profile_to_record(profile), changes)

        try:
            record = ProfileRecord.model_validate(merged)
        except ValidationError as e:
            raise HTTPException(
                422,
                [{"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in e.errors()]
            )

        stored = record.model_dump(mode="json")
        profile.personal_info = stored["personal_info"]
        profile.professional_info = stored["professional_info"]
        profile.skills = stored["skills"]
        profile.projects = stored["projects"]
        profile.stats = stored["stats"]

        return await self.repo.save(profile)

    async def upload_attachment(self, user: User, kind: str, file: UploadFile | None) -> dict:
        """
        儲存履歷 / 頭像並整筆取代舊的附件紀錄。
        舊檔案在新紀錄寫入成功後刪除。
        Profile 不存在時會一併建立 (與新附件一起 commit)。
        """
        if kind not in ATTACHMENT_KINDS:
            raise ValueError(f"unknown attachment kind: {kind}")
        if file is None:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Please upload a file")

        # 先取得 Profile 再寫檔，避免查詢失敗時留下沒有紀錄的檔案
        profile = (await self._fetch_or_create(user)).profile
        stored = await self.uploads.save(file)
        previous = getattr(profile, kind)

        setattr(profile, kind, build_attachment(
            name=stored.original_name,
            size=stored.size,
            content_type=stored.content_type,
            url=stored.url,
        ))
        try:
            profile = await self.repo.save(profile)
        except Exception:
            # 紀錄沒寫入，新檔案也不保留
            self.uploads.remove(stored.url)
            raise
        logger.info("User %s uploaded %s -> %s", user.user_id, kind, stored.url)

        if previous and previous.get("url") and previous["url"] != stored.url:
            self.uploads.remove(previous["url"])

        return getattr(profile, kind)

    async def get_my_stats(self, user: User) -> dict:
        return await self.repo.get_stats(user.user_id)

    async def get_freelancer_profile(self, user_id: str) -> FreelancerProfile:
        """取得指定使用者的工作者 Profile (付款流程使用)，不會自動建立"""
        profile = await self.repo.get_with_owner(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer profile not found")
        return profile

# app/routers/freelancer_router.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.profile_service import ProfileService
from app.services.upload_service import UploadService
from app.schemas.profile_schema import (
    FreelancerProfileOut, FreelancerProfileWithOwnerOut, FreelancerProfileUpdate, Stats, Attachment
)

router = APIRouter(
    prefix="/freelancer",
    tags=["Freelancer"],
    dependencies=[Depends(get_current_user)]  # 整個路由都需要登入
)


def get_profile_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProfileService:
    return ProfileService(db, UploadService(settings))


@router.get("/profile", response_model=FreelancerProfileOut)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """
    獲取當前登入者的 Profile。
    尚未建立時會以帳號的姓名與 email 自動建立一份。
    """
    return await service.get_my_profile(current_user)


@router.put("/profile", response_model=FreelancerProfileOut)
async def update_my_profile(
    update_data: FreelancerProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """
    部分更新 Profile。

    - personalInfo / professionalInfo / stats: 只覆寫有傳入的欄位
    - skills / projects: 以傳入的列表整批取代
    """
    return await service.update_my_profile(current_user, update_data)


@router.get("/profile/{user_id}", response_model=FreelancerProfileWithOwnerOut)
async def get_freelancer_profile(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
):
    """獲取指定 User ID 的工作者 Profile (付款時查詢收款資訊，含姓名與 email)"""
    return await service.get_freelancer_profile(user_id)


@router.get("/stats", response_model=Stats)
async def get_my_stats(
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """取得統計資料；尚未建立 Profile 時回傳全 0"""
    return await service.get_my_stats(current_user)


# 必須傳送 form-data，檔案上限 5MB
@router.post("/resume", response_model=Attachment)
async def upload_resume(
    resume: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return await service.upload_attachment(current_user, "resume", resume)


@router.post("/profile-image", response_model=Attachment)
async def upload_profile_image(
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return await service.upload_attachment(current_user, "profile_image", profile_image)

# app/schemas/profile_schema.py
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

# 與前端約定的 email 格式；空字串代表未填
EMAIL_PATTERN = r"^$|^[^@\s]+@[^@\s]+\.[^@\s]+$"

Availability = Literal["full-time", "part-time", "contract", "unavailable"]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class CamelModel(BaseModel):
    """JSON 使用 camelCase (personalInfo, hourlyRate ...)，Python 端維持 snake_case"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# --- 個人資料 (personalInfo) ---
class PersonalInfoBase(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=50)
    email: str | None = Field(None, pattern=EMAIL_PATTERN)
    phone: str | None = None
    location: str | None = None
    bio: str | None = Field(None, max_length=500)
    title: str | None = Field(None, max_length=100)
    upi_id: str | None = Field(None, description="收款用 UPI ID")

    @field_validator("name", "upi_id", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class PersonalInfo(PersonalInfoBase):
    # 除姓名外皆可為 null (前端清空欄位時會送出 null 或空字串)
    name: str = Field(..., min_length=1, max_length=50)  # 姓名必填
    phone: str | None = ""
    location: str | None = ""
    bio: str | None = Field("", max_length=500)
    title: str | None = Field("Freelancer", max_length=100)
    upi_id: str | None = ""


class PersonalInfoUpdate(PersonalInfoBase):
    pass  # 更新時全為選填


# --- 專業資料 (professionalInfo) ---
class ProfessionalInfoBase(CamelModel):
    experience: str | None = None
    hourly_rate: str | None = None
    availability: Availability | None = None
    languages: List[str] | None = None
    education: str | None = None
    portfolio: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ProfessionalInfo(ProfessionalInfoBase):
    experience: str | None = ""
    hourly_rate: str | None = ""
    availability: Availability | None = "full-time"
    languages: List[str] = []
    education: str | None = ""
    portfolio: str | None = ""
    linkedin: str | None = ""
    github: str | None = ""


class ProfessionalInfoUpdate(ProfessionalInfoBase):
    pass


# --- 技能與作品 (整批覆蓋) ---
class SkillItem(CamelModel):
    name: str = Field(..., min_length=1)
    level: SkillLevel = "intermediate"


class ProjectItem(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    technologies: List[str] = []
    link: str = ""
    completed_at: str = ""


# --- 統計 (stats)，數值皆不可為負 ---
class StatsBase(CamelModel):
    completed_projects: int | None = Field(None, ge=0)
    total_earnings: float | None = Field(None, ge=0)
    success_rate: float | None = Field(None, ge=0)
    total_clients: int | None = Field(None, ge=0)


class Stats(StatsBase):
    completed_projects: int = Field(0, ge=0)
    total_earnings: float = Field(0, ge=0)
    success_rate: float = Field(0, ge=0)
    total_clients: int = Field(0, ge=0)


class StatsUpdate(StatsBase):
    pass


# --- 附件 (履歷 / 頭像) ---
class Attachment(CamelModel):
    name: str
    size: int = Field(..., ge=0)
    type: str
    url: str = Field(..., min_length=1)
    uploaded_at: datetime


# --- 更新請求 Body：任一群組皆可省略 ---
class FreelancerProfileUpdate(CamelModel):
    personal_info: Optional[PersonalInfoUpdate] = None
    professional_info: Optional[ProfessionalInfoUpdate] = None
    skills: Optional[List[SkillItem]] = None
    projects: Optional[List[ProjectItem]] = None
    stats: Optional[StatsUpdate] = None


class ProfileRecord(CamelModel):
    """合併後、寫入資料庫前的完整驗證"""
    personal_info: PersonalInfo
    professional_info: ProfessionalInfo = ProfessionalInfo()
    skills: List[SkillItem] = []
    projects: List[ProjectItem] = []
    stats: Stats = Stats()


class FreelancerProfileOut(ProfileRecord):
    profile_id: str
    user_id: str
    resume: Optional[Attachment] = None
    profile_image: Optional[Attachment] = None
    created_at: datetime
    updated_at: datetime


# --- 依 ID 查詢時附上擁有者資訊 (付款流程需要收款人姓名) ---
class ProfileOwnerOut(CamelModel):
    name: str
    email: str


class FreelancerProfileWithOwnerOut(FreelancerProfileOut):
    user: Optional[ProfileOwnerOut] = None

# app/models/freelancer_profile.py
from datetime import datetime, timezone
from sqlalchemy import Column, ForeignKey, JSON, CHAR, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def default_stats() -> dict:
    return {
        "completed_projects": 0,
        "total_earnings": 0,
        "success_rate": 0,
        "total_clients": 0,
    }


class FreelancerProfile(Base):
    __tablename__ = "freelancer_profiles"
    profile_id = Column(CHAR(36), primary_key=True)
    # 一個使用者只會有一份 Profile
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)

    # 巢狀欄位群組以 JSON 儲存 (key 為 snake_case)
    # 注意：更新時必須整個重新指派，SQLAlchemy 不會追蹤 dict 內部的變動
    personal_info = Column(JSON, nullable=False, default=dict)
    professional_info = Column(JSON, nullable=False, default=dict)
    skills = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    stats = Column(JSON, nullable=False, default=default_stats)

    # 附件 (履歷 / 頭像)，未上傳時為 NULL
    resume = Column(JSON, nullable=True)
    profile_image = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # 1-to-1 反向關聯到 User
    user = relationship("User", back_populates="freelancer_profile")

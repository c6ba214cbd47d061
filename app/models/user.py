# models/user.py
from sqlalchemy import Column, String, Boolean, Enum, CHAR
from app.core.database import Base
import enum
from sqlalchemy.orm import relationship


# 對應 SQL 中的 ENUM 型別
class UserRoleEnum(str, enum.Enum):
    freelancer = "freelancer"
    employer = "employer"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    # 基本欄位
    user_id = Column(CHAR(36), primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRoleEnum, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    is_active = Column(Boolean, default=True)

    # 1-to-1 關聯到工作者 Profile
    freelancer_profile = relationship(
        "FreelancerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )

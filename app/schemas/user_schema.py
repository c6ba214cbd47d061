# app/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field, field_validator
import re
from app.models.user import UserRoleEnum


# Token 回應的格式
class Token(BaseModel):
    access_token: str
    token_type: str


# Token 內的資料
class TokenData(BaseModel):
    user_id: str
    role: str


# 註冊請求 Body
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    # 密碼要求英數混合
    password: str = Field(..., min_length=8)
    role: UserRoleEnum = UserRoleEnum.freelancer

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('姓名不可為空白')
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        """
        驗證密碼是否至少8碼且包含英文和數字
        """
        if not re.search(r'(?=.*[a-zA-Z])(?=.*[0-9])', v):
            raise ValueError('密碼必須包含英文和數字')
        return v


# 註冊/查詢使用者的安全回應 (不含密碼)
class UserOut(BaseModel):
    user_id: str
    name: str
    email: EmailStr
    role: UserRoleEnum
    is_active: bool

    class Config:
        from_attributes = True

from pydantic import BaseModel, field_validator
from datetime import datetime

from fiscal_ledger.services.validators import is_valid_date_key, is_valid_phone


class MemberCreate(BaseModel):
    name: str
    phone: str = ""
    joined_date: str

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str):
        v = (v or "").strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("phone")
    @classmethod
    def phone_digits(cls, v: str):
        v = (v or "").strip()
        if not is_valid_phone(v):
            raise ValueError("phone number should contain only digits")
        return v

    @field_validator("joined_date")
    @classmethod
    def joined_date_shape(cls, v: str):
        if not is_valid_date_key(v):
            raise ValueError("joined_date must be YYYY-MM-DD")
        return v


class MemberUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    joined_date: str | None = None

    @field_validator("name")
    @classmethod
    def name_trim(cls, v: str | None):
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v

    @field_validator("phone")
    @classmethod
    def phone_digits(cls, v: str | None):
        if v is None:
            return None
        v = v.strip()
        if not is_valid_phone(v):
            raise ValueError("phone number should contain only digits")
        return v

    @field_validator("joined_date")
    @classmethod
    def joined_date_shape(cls, v: str | None):
        if v is None:
            return None
        if not is_valid_date_key(v):
            raise ValueError("joined_date must be YYYY-MM-DD")
        return v


class MemberOut(BaseModel):
    id: int
    name: str
    phone: str
    joined_date: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

"""
Pydantic schemas for locale and translation records
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class LocaleData(BaseModel):
    """Locale record as held by the cache and returned by the adapter"""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    code: str
    native_name: str
    english_name: str
    is_default: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocaleUpdate(BaseModel):
    """Schema for updating a locale"""
    native_name: Optional[str] = None
    english_name: Optional[str] = None
    is_default: Optional[bool] = None


class TranslationData(BaseModel):
    """Translation record as returned by the adapter"""
    model_config = ConfigDict(from_attributes=True)

    locale_id: str
    key: str
    value: str

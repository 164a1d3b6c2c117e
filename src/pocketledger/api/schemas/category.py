"""Pydantic schemas for category endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from pocketledger.domain.models.enums import CategoryType


class CategoryCreateRequest(BaseModel):
    """Request schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=255)
    type: CategoryType
    icon: Optional[str] = Field(default=None, max_length=64)


class CategoryUpdateRequest(BaseModel):
    """Request schema for renaming a category or changing its icon."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, max_length=64)


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    type: CategoryType
    icon: Optional[str] = None


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    count: int

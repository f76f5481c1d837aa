"""User API schemas."""

from pydantic import BaseModel, Field

from src.modules.news.domain.entities import Category, Country, Language


class PreferencesResponse(BaseModel):
    """User news preferences."""

    categories: list[Category] = Field(..., description="偏好分类（有序）")
    countries: list[Country] = Field(..., description="偏好国家（有序）")
    language: Language = Field(..., description="偏好语言")


class UpdatePreferencesRequest(BaseModel):
    """Update preferences request; omitted fields keep their current value."""

    categories: list[str] | None = Field(None, description="偏好分类")
    countries: list[str] | None = Field(None, description="偏好国家")
    language: str | None = Field(None, description="偏好语言")

    class Config:
        json_schema_extra = {
            "example": {
                "categories": ["technology", "science"],
                "countries": ["us", "gb"],
                "language": "en",
            }
        }

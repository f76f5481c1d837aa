"""News API schemas.

Upstream payloads pass through unchanged, so every model allows extra fields
and most fields are optional.
"""

from pydantic import BaseModel, ConfigDict, Field


class ArticleSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None


class Article(BaseModel):
    """A news article as returned by the upstream API."""

    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, description="标题")
    description: str | None = Field(None, description="摘要")
    url: str | None = Field(None, description="原文URL（去重键）")
    url_to_image: str | None = Field(None, alias="urlToImage", description="配图URL")
    source: ArticleSource | None = None
    author: str | None = None
    published_at: str | None = Field(
        None, alias="publishedAt", description="发布时间（ISO-8601）"
    )
    content: str | None = None


class ArticlesResponse(BaseModel):
    """Envelope for headline, search and personalized results."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: str = "ok"
    total_results: int | None = Field(None, alias="totalResults")
    articles: list[Article] = Field(default_factory=list)


class NewsSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    category: str | None = None
    language: str | None = None
    country: str | None = None


class SourcesResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str = "ok"
    sources: list[NewsSource] = Field(default_factory=list)

"""News domain entities and enumerated domains."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self, TypeVar

from src.modules.news.domain.exceptions import InvalidNewsQueryError


class Category(str, Enum):
    """新闻分类。"""

    GENERAL = "general"
    BUSINESS = "business"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    SCIENCE = "science"
    SPORTS = "sports"
    TECHNOLOGY = "technology"


class Country(str, Enum):
    """国家代码（ISO 3166-1 alpha-2，小写）。"""

    US = "us"
    GB = "gb"
    CA = "ca"
    AU = "au"
    IN = "in"
    DE = "de"
    FR = "fr"
    JP = "jp"
    CN = "cn"
    BR = "br"


class Language(str, Enum):
    """语言代码（ISO 639-1）。"""

    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    IT = "it"
    PT = "pt"
    RU = "ru"
    ZH = "zh"
    JA = "ja"
    AR = "ar"


class SortBy(str, Enum):
    """Sort orders accepted by the upstream ``/everything`` endpoint."""

    RELEVANCY = "relevancy"
    POPULARITY = "popularity"
    PUBLISHED_AT = "publishedAt"


DEFAULT_CATEGORIES = (Category.GENERAL, Category.TECHNOLOGY, Category.BUSINESS)
DEFAULT_COUNTRIES = (Country.US,)
DEFAULT_LANGUAGE = Language.EN

E = TypeVar("E", bound=Enum)


def parse_enum(enum_type: type[E], value: Any, field_name: str) -> E:
    """Coerce a raw value into ``enum_type`` or raise InvalidNewsQueryError."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            if str(member.value).lower() == normalized:
                return member
    allowed = ", ".join(str(member.value) for member in enum_type)
    raise InvalidNewsQueryError(f"Invalid {field_name} '{value}'. Allowed: {allowed}")


def _ordered_unique(
    enum_type: type[E], values: Iterable[Any], field_name: str
) -> tuple[E, ...]:
    result: list[E] = []
    for value in values:
        member = parse_enum(enum_type, value, field_name)
        if member not in result:
            result.append(member)
    return tuple(result)


@dataclass(frozen=True)
class Preferences:
    """User news preferences.

    Categories and countries keep the user's order: the personalized fan-out
    takes the leading entries of each.
    """

    categories: tuple[Category, ...] = field(default=DEFAULT_CATEGORIES)
    countries: tuple[Country, ...] = field(default=DEFAULT_COUNTRIES)
    language: Language = DEFAULT_LANGUAGE

    @classmethod
    def from_values(
        cls,
        categories: Iterable[Any] | None = None,
        countries: Iterable[Any] | None = None,
        language: Any = None,
    ) -> Self:
        """Build preferences from raw values, validating every member.

        Raises:
            InvalidNewsQueryError: a value is outside its enumerated domain,
                or a collection is not a list
        """
        for name, values in (("categories", categories), ("countries", countries)):
            if values is None:
                continue
            if not isinstance(values, list | tuple | set | frozenset):
                raise InvalidNewsQueryError(f"{name} must be a list")

        return cls(
            categories=(
                _ordered_unique(Category, categories, "category")
                if categories is not None
                else DEFAULT_CATEGORIES
            ),
            countries=(
                _ordered_unique(Country, countries, "country")
                if countries is not None
                else DEFAULT_COUNTRIES
            ),
            language=(
                parse_enum(Language, language, "language")
                if language is not None
                else DEFAULT_LANGUAGE
            ),
        )

    @classmethod
    def from_mapping(cls, data: Any) -> Self:
        if isinstance(data, Preferences):
            return data
        if not isinstance(data, dict):
            raise InvalidNewsQueryError("Preferences must be an object")
        return cls.from_values(
            categories=data.get("categories"),
            countries=data.get("countries"),
            language=data.get("language"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": [c.value for c in self.categories],
            "countries": [c.value for c in self.countries],
            "language": self.language.value,
        }

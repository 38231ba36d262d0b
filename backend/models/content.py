"""Pydantic models for the content index."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _text_or_none(v):
    """Optional text fields: anything that is not a string counts as missing."""
    return v if isinstance(v, str) else None


class GameRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["game"] = "game"
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: str | None = None
    tags: tuple[str, ...] = ()
    category: str | None = None
    image: str | None = None

    @field_validator("description", "category", "image", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return _text_or_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _string_tags(cls, v):
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(tag for tag in v if isinstance(tag, str))

    @property
    def label(self) -> str:
        return self.title


class PageRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["page"] = "page"
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    content: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return _text_or_none(v)

    @property
    def label(self) -> str:
        return self.title


class CategoryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["category"] = "category"
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return _text_or_none(v)

    @property
    def label(self) -> str:
        return self.name


Record = Union[GameRecord, PageRecord, CategoryRecord]


class ContentIndex(BaseModel):
    """The games, pages and categories published by the site build."""

    model_config = ConfigDict(frozen=True)

    games: tuple[GameRecord, ...] = ()
    pages: tuple[PageRecord, ...] = ()
    categories: tuple[CategoryRecord, ...] = ()

    def records(self) -> list[Record]:
        """All records in ranking tie-break order: games, pages, categories."""
        return [*self.games, *self.pages, *self.categories]


class ScoredResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: Record
    score: int

    @property
    def type(self) -> str:
        return self.record.type

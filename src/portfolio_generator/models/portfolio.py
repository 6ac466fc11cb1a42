"""Pydantic models for the portfolio document returned by the generation service.

The service output is untrusted and often partial, so every field is
optional and ``null`` is accepted anywhere. Decoded documents are frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "PortfolioDocument",
    "ProjectEntry",
]


class _DocumentModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


def _drop_nulls(value: Any) -> Any:
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class ExperienceEntry(_DocumentModel):
    """A single work-experience record."""

    role: str | None = None
    company: str | None = None
    start: str | None = None
    end: str | None = None
    summary: str | None = None
    achievements: tuple[str, ...] | None = None

    @field_validator("achievements", mode="before")
    @classmethod
    def drop_null_achievements(cls, value: Any) -> Any:
        return _drop_nulls(value)


class ProjectEntry(_DocumentModel):
    """A single project record."""

    name: str | None = None
    description: str | None = None
    tech: tuple[str, ...] | None = None

    @field_validator("tech", mode="before")
    @classmethod
    def drop_null_tech(cls, value: Any) -> Any:
        return _drop_nulls(value)


class EducationEntry(_DocumentModel):
    """A single education record."""

    degree: str | None = None
    institution: str | None = None
    start: str | None = None
    end: str | None = None
    details: str | None = None


class PortfolioDocument(_DocumentModel):
    """Structured portfolio produced from a resume.

    ``name`` and ``title`` are expected from the service but still nullable;
    the remaining sections are optional.
    """

    name: str | None = None
    title: str | None = None
    about: str | None = None
    skills: tuple[str, ...] | None = None
    experience: tuple[ExperienceEntry, ...] | None = None
    projects: tuple[ProjectEntry, ...] | None = None
    education: tuple[EducationEntry, ...] | None = None

    @field_validator("skills", "experience", "projects", "education", mode="before")
    @classmethod
    def drop_null_items(cls, value: Any) -> Any:
        return _drop_nulls(value)

"""Turn a (possibly partial) portfolio document into displayable views.

Every optional section is emitted only when it is present and non-empty, so a
partial document never produces an empty labelled block. Header fields are
always shown for an existing document, even when blank.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from portfolio_generator.models.portfolio import (
    EducationEntry,
    ExperienceEntry,
    PortfolioDocument,
    ProjectEntry,
)
from portfolio_generator.themes import ThemeTokens

# Inline markup characters, and block markers that only matter at the start of a line.
_INLINE_MARKUP = re.compile(r"([\\`*_\[\]<>])")
_LINE_MARKER = re.compile(r"^(\s*)([#>+-]|\d+(?=[.)]))", re.MULTILINE)

__all__ = [
    "EntryView",
    "PortfolioView",
    "SectionView",
    "StyledText",
    "render_portfolio",
    "render_portfolio_markdown",
]


@dataclass(frozen=True, slots=True)
class StyledText:
    text: str
    color: str


@dataclass(frozen=True, slots=True)
class EntryView:
    """One experience, project, or education entry."""

    heading: StyledText
    subheading: StyledText | None = None
    body: StyledText | None = None
    bullets: tuple[StyledText, ...] = ()
    footer: StyledText | None = None


@dataclass(frozen=True, slots=True)
class SectionView:
    """A titled block: About Me, Skills, Experience, Projects, or Education."""

    key: str
    title: StyledText
    text: StyledText | None = None
    items: tuple[StyledText, ...] = ()
    entries: tuple[EntryView, ...] = ()


@dataclass(frozen=True, slots=True)
class PortfolioView:
    name: StyledText
    title: StyledText
    sections: tuple[SectionView, ...]
    tokens: ThemeTokens


def render_portfolio(
    document: PortfolioDocument | None, tokens: ThemeTokens
) -> PortfolioView | None:
    """Build the view for *document* styled with *tokens*.

    Returns ``None`` when there is no document to show.
    """
    if document is None:
        return None

    sections: list[SectionView] = []

    if _has_text(document.about):
        sections.append(
            SectionView(
                key="about",
                title=StyledText("About Me", tokens.accent),
                text=StyledText(document.about, tokens.text),
            )
        )

    if _has_items(document.skills):
        sections.append(
            SectionView(
                key="skills",
                title=StyledText("Skills", tokens.accent),
                items=tuple(StyledText(skill, tokens.accent) for skill in document.skills),
            )
        )

    if _has_items(document.experience):
        sections.append(
            SectionView(
                key="experience",
                title=StyledText("Experience", tokens.accent),
                entries=tuple(_experience_entry(e, tokens) for e in document.experience),
            )
        )

    if _has_items(document.projects):
        sections.append(
            SectionView(
                key="projects",
                title=StyledText("Projects", tokens.accent),
                entries=tuple(_project_entry(p, tokens) for p in document.projects),
            )
        )

    if _has_items(document.education):
        sections.append(
            SectionView(
                key="education",
                title=StyledText("Education", tokens.accent),
                entries=tuple(_education_entry(e, tokens) for e in document.education),
            )
        )

    return PortfolioView(
        name=StyledText(_text(document.name), tokens.text),
        title=StyledText(_text(document.title), tokens.accent),
        sections=tuple(sections),
        tokens=tokens,
    )


def _experience_entry(entry: ExperienceEntry, tokens: ThemeTokens) -> EntryView:
    bullets: tuple[StyledText, ...] = ()
    if _has_items(entry.achievements):
        bullets = tuple(StyledText(a, tokens.text) for a in entry.achievements)
    return EntryView(
        heading=StyledText(f"{_text(entry.role)} at {_text(entry.company)}", tokens.text),
        subheading=StyledText(f"{_text(entry.start)} - {_text(entry.end)}", tokens.text),
        body=StyledText(_text(entry.summary), tokens.text),
        bullets=bullets,
    )


def _project_entry(entry: ProjectEntry, tokens: ThemeTokens) -> EntryView:
    footer = None
    if _has_items(entry.tech):
        footer = StyledText(f"Tech: {', '.join(entry.tech)}", tokens.text)
    return EntryView(
        heading=StyledText(_text(entry.name), tokens.text),
        body=StyledText(_text(entry.description), tokens.text),
        footer=footer,
    )


def _education_entry(entry: EducationEntry, tokens: ThemeTokens) -> EntryView:
    body = None
    if _has_text(entry.details):
        body = StyledText(entry.details, tokens.text)
    subheading = f"{_text(entry.institution)}, {_text(entry.start)} - {_text(entry.end)}"
    return EntryView(
        heading=StyledText(_text(entry.degree), tokens.text),
        subheading=StyledText(subheading, tokens.text),
        body=body,
    )


def render_portfolio_markdown(view: PortfolioView | None) -> str:
    """Render a portfolio view as markdown; empty string when there is none.

    Document values are escaped so that text coming from the service cannot
    introduce headings, emphasis or broken code spans.
    """
    if view is None:
        return ""

    parts: list[str] = [f"# {_escape(view.name.text)}", f"**{_escape(view.title.text)}**"]

    for section in view.sections:
        parts.append(f"\n## {section.title.text}")
        if section.text is not None:
            parts.append(_escape(section.text.text))
        if section.items:
            parts.append(" · ".join(_code_span(item.text) for item in section.items))
        for entry in section.entries:
            parts.append(f"\n### {_escape(entry.heading.text)}")
            if entry.subheading is not None:
                parts.append(f"*{_escape(entry.subheading.text)}*\n")
            if entry.body is not None:
                parts.append(_escape(entry.body.text))
            if entry.bullets:
                parts.append("")
                parts.extend(f"- {_escape(bullet.text)}" for bullet in entry.bullets)
            if entry.footer is not None:
                parts.append(f"\n{_escape(entry.footer.text)}")

    return "\n".join(parts)


def _escape(text: str) -> str:
    escaped = _INLINE_MARKUP.sub(r"\\\1", text)
    return _LINE_MARKER.sub(_escape_line_marker, escaped)


def _escape_line_marker(match: re.Match[str]) -> str:
    indent, marker = match.groups()
    if marker[0].isdigit():
        # "1." or "1)" starts an ordered list; escape the delimiter after the number.
        return f"{indent}{marker}\\"
    return f"{indent}\\{marker}"


def _code_span(text: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    if text.startswith("`") or text.endswith("`"):
        text = f" {text} "
    return f"{fence}{text}{fence}"


def _text(value: str | None) -> str:
    return "" if value is None else value


def _has_text(value: str | None) -> bool:
    return value is not None and value != ""


def _has_items(values: Sequence[object] | None) -> bool:
    return values is not None and len(values) > 0

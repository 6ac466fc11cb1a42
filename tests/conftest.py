from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_generator.models import ResumeFile


@pytest.fixture
def resume_file() -> ResumeFile:
    return ResumeFile(
        filename="resume.pdf", content=b"%PDF-1.4 fake", content_type="application/pdf"
    )


@pytest.fixture
def resume_path(tmp_path: Path) -> Path:
    path = tmp_path / "resume.pdf"
    path.write_bytes(b"%PDF-1.4 fake")
    return path


@pytest.fixture
def full_payload() -> dict:
    return {
        "name": "Ada Lovelace",
        "title": "Engineer",
        "about": "Writes the first programs.",
        "skills": ["Mathematics", "Analysis"],
        "experience": [
            {
                "role": "Analyst",
                "company": "Analytical Engine",
                "start": "1842",
                "end": "1843",
                "summary": "Annotated the engine.",
                "achievements": ["Note G", "Bernoulli numbers"],
            },
            {
                "role": "Writer",
                "company": "Taylor's Memoirs",
                "start": "1843",
                "end": "1843",
                "summary": "Published the translation.",
            },
        ],
        "projects": [
            {"name": "Note G", "description": "Bernoulli algorithm", "tech": ["Engine", "Cards"]},
            {"name": "Flyology", "description": "Flying machine study"},
        ],
        "education": [
            {
                "degree": "Private tutoring",
                "institution": "Home",
                "start": "1820",
                "end": "1835",
                "details": "Mathematics and science",
            },
            {
                "degree": "Correspondence",
                "institution": "De Morgan",
                "start": "1840",
                "end": "1842",
            },
        ],
    }

"""Data models and type definitions"""

from portfolio_generator.models.portfolio import (
    EducationEntry,
    ExperienceEntry,
    PortfolioDocument,
    ProjectEntry,
)
from portfolio_generator.models.request_state import (
    ACCEPTED_EXTENSIONS,
    Failed,
    FailureKind,
    FileSelected,
    Idle,
    InvalidResumeError,
    PendingRequest,
    Phase,
    RequestState,
    ResumeFile,
    Submitting,
    Succeeded,
    UploadState,
)

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "EducationEntry",
    "ExperienceEntry",
    "Failed",
    "FailureKind",
    "FileSelected",
    "Idle",
    "InvalidResumeError",
    "PendingRequest",
    "Phase",
    "PortfolioDocument",
    "ProjectEntry",
    "RequestState",
    "ResumeFile",
    "Submitting",
    "Succeeded",
    "UploadState",
]

"""
Report log component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReportContentInput:
    """Input for filing an abuse report."""

    content_id: int
    reason: str


@dataclass(frozen=True)
class ReportConfig:
    max_reason_length: int = 500

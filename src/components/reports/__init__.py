"""
Report log component.
"""

from .component import get_report, load_config_from_rules, run, run_report, validate_reason
from .models import ReportConfig, ReportContentInput
from .ports import ContentRepoPort, ReportRepoPort

__all__ = [
    "get_report",
    "load_config_from_rules",
    "run",
    "run_report",
    "validate_reason",
    "ReportConfig",
    "ReportContentInput",
    "ContentRepoPort",
    "ReportRepoPort",
]

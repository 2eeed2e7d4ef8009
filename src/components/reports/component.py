"""
Report log component.

One abuse report per (content, reporter). Reports open unresolved; there is
no moderation workflow.
"""

from __future__ import annotations

from src.domain.context import CallContext
from src.domain.entities import ContentReport
from src.domain.outcome import ErrorCode, Outcome
from src.rules.models import Rules

from .models import ReportConfig, ReportContentInput
from .ports import ContentRepoPort, ReportRepoPort


def validate_reason(reason: str, config: ReportConfig) -> None:
    """
    Reject reasons the host boundary would never accept.

    Raises:
        TypeError: reason is not text
        ValueError: reason exceeds the configured bound
    """
    if not isinstance(reason, str):
        raise TypeError("reason must be a string")
    if len(reason) > config.max_reason_length:
        raise ValueError(f"reason exceeds {config.max_reason_length} characters")


def run_report(
    inp: ReportContentInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    report_repo: ReportRepoPort,
    config: ReportConfig | None = None,
) -> Outcome[ContentReport]:
    """File a report against existing content, stamped with the block height."""
    config = config or ReportConfig()
    validate_reason(inp.reason, config)

    if content_repo.get_content(inp.content_id) is None:
        return Outcome.fail(ErrorCode.CONTENT_NOT_FOUND, f"Content {inp.content_id} not found")

    if report_repo.get_report(inp.content_id, ctx.caller) is not None:
        return Outcome.fail(ErrorCode.ALREADY_REPORTED, "Content already reported by caller")

    report = ContentReport(
        content_id=inp.content_id,
        reporter=ctx.caller,
        reason=inp.reason,
        timestamp=ctx.block_height,
    )
    report_repo.save_report(report)
    return Outcome.ok(report)


def get_report(content_id: int, reporter: str, *, repo: ReportRepoPort) -> ContentReport | None:
    return repo.get_report(content_id, reporter)


def run(
    inp: ReportContentInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    report_repo: ReportRepoPort,
    config: ReportConfig | None = None,
) -> Outcome[ContentReport]:
    if isinstance(inp, ReportContentInput):
        return run_report(inp, ctx, content_repo=content_repo, report_repo=report_repo, config=config)
    raise TypeError(f"Unknown input type: {type(inp)}")


def load_config_from_rules(rules: Rules) -> ReportConfig:
    return ReportConfig(max_reason_length=rules.reports.max_reason_length)

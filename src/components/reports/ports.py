from typing import Protocol

from src.domain.entities import ContentItem, ContentReport


class ContentRepoPort(Protocol):
    def get_content(self, content_id: int) -> ContentItem | None: ...


class ReportRepoPort(Protocol):
    def get_report(self, content_id: int, reporter: str) -> ContentReport | None: ...
    def save_report(self, report: ContentReport) -> None: ...

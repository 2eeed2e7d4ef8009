from typing import Protocol

from src.domain.entities import ContentItem


class ContentRepoPort(Protocol):
    def get_content(self, content_id: int) -> ContentItem | None: ...
    def save_content(self, item: ContentItem) -> None: ...

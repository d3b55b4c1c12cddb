"""scope_crawler.errors: иерархия исключений краулера.

Ошибки уровня одной страницы (ParseError, FetchError, WriteError) обрабатываются
локально и только логируются; FatalSetupError прерывает запуск до начала обхода.
"""
from __future__ import annotations

__all__ = ["CrawlerError", "ParseError", "FetchError", "WriteError", "FatalSetupError"]


class CrawlerError(Exception):
    """Базовое исключение ScopeCrawler."""


class ParseError(CrawlerError, ValueError):
    """Ссылку или базовый URL не удалось разобрать."""


class FetchError(CrawlerError):
    """Сетевая ошибка или таймаут при загрузке страницы."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class WriteError(CrawlerError):
    """Не удалось дописать запись в JSONL-файл."""


class FatalSetupError(CrawlerError):
    """Не удалось создать каталог запуска или выходные файлы."""

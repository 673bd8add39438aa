from __future__ import annotations
import re, datetime
from dataclasses import dataclass

class ParseError(ValueError):
    kind = "parse_error"

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key

class MalformedStructure(ParseError):
    kind = "malformed_structure"

class FieldError(ParseError):
    kind = "field_error"

    def __init__(self, key: str, reason: str):
        super().__init__(f"{key}: {reason}", key=key)
        self.reason = reason

@dataclass(frozen=True)
class ContentEntry:
    """One parsed post. Built once per source file, never mutated."""
    title: str
    date: datetime.datetime
    body: str
    author: str | None = None
    author_twitter: str | None = None
    cover: str | None = None
    tags: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    draft: bool = False
    show_full_content: bool = False

    @property
    def slug(self) -> str:
        s = self.title.lower()
        s = re.sub(r"[^a-z0-9\s-]", "", s)
        s = re.sub(r"\s+", "-", s).strip("-")
        return s[:80]

"""
Rendered document formats
"""

from enum import Enum


class OutputFormat(str, Enum):
    PDF = "pdf"
    HTML = "html"

    @property
    def media_type(self) -> str:
        return "application/pdf" if self is OutputFormat.PDF else "text/html"

"""Common file extensions."""

from enum import Enum


class FileExtension(str, Enum):
    """File extensions (without the leading dot)."""

    HTM = "htm"
    HTML = "html"
    ZIP = "zip"

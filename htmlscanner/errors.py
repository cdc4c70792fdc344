from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Invalid scan input (bad root directory, no keywords, bad keyword file)."""


class OutputWriteError(OSError):
    """The report destination could not be written."""


@dataclass(frozen=True)
class FileAccessWarning:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

from __future__ import annotations

from typing import Any, Sequence, Tuple

from pydantic import ValidationError


class PxRefError(Exception):
    """Base class for failures surfaced to the user as a dialog."""

    title = "PxRef Error"

    def __init__(self, message: str = "", *, title: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class DecodeError(PxRefError):
    """Raised when a palette image cannot be read or decoded."""

    title = "Unable to load palette"


class FileIOError(PxRefError):
    """Raised when a file cannot be created, read or written."""

    title = "File error"

    def __init__(self, path: str, reason: str, *, title: str | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}", title=title)


class InvariantViolation(PxRefError):
    """Raised when an edit would break a document invariant."""

    title = "Invalid action"


def location_path(loc: Sequence[Any]) -> str:
    """Render a pydantic error location, e.g. ``("frames", 0, 3)`` -> ``frames[0][3]``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "<root>"


class FormatError(PxRefError, ValueError):
    """Raised when a reference file has the wrong extension or fails validation.

    ``problems`` holds one ``(location, message)`` pair per schema failure.
    """

    title = "Unable to open Ref"

    def __init__(
        self,
        source: str,
        message: str = "",
        *,
        problems: Sequence[Tuple[str, str]] = (),
    ) -> None:
        self.source = source
        self.problems = list(problems)
        super().__init__(message or self._summary())

    def _summary(self) -> str:
        header = f"{self.source} is not a valid reference file ({len(self.problems)} error(s))."
        return "\n".join([header, *(f"- {where}: {what}" for where, what in self.problems)])

    @classmethod
    def from_pydantic(cls, source: str, exc: ValidationError) -> "FormatError":
        problems = [
            (location_path(error.get("loc", ())), str(error.get("msg", "invalid value")))
            for error in exc.errors()
        ]
        return cls(source, problems=problems)

"""Custom exceptions for data loading and validation."""
from __future__ import annotations

import json
from typing import Sequence, Tuple

_MISSING = object()


def format_path(
    document: str,
    record_kind: str | None = None,
    index: int | None = None,
    field_path: Sequence[str | int] = (),
) -> str:
    """Render ``[<document>] <record_kind>[<index>].<field>[.<subfield>]``."""
    out = f"[{document}]"
    parts: list[str | int] = []
    if record_kind:
        parts.append(record_kind)
    if index is not None:
        parts.append(index)
    parts.extend(field_path)
    if not parts:
        return out
    rendered = ""
    for position, part in enumerate(parts):
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif position == 0:
            rendered += part
        else:
            rendered += f".{part}"
    return f"{out} {rendered}"


def _describe(value: object) -> str:
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a definition document cannot be fetched or parsed."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"[{location}] {reason}")
        self.location = location
        self.reason = reason


class DataValidationError(DataError):
    """Raised when a definition document fails structural validation.

    The failing location is kept as structured fields so callers can inspect
    it without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        document: str,
        record_kind: str | None = None,
        index: int | None = None,
        field_path: Sequence[str | int] = (),
        value: object = _MISSING,
    ) -> None:
        self.document = document
        self.record_kind = record_kind
        self.index = index
        self.field_path: Tuple[str | int, ...] = tuple(field_path)
        self.has_value = value is not _MISSING
        self.value = value if self.has_value else None
        self.message = message
        text = f"{self.path} {message}"
        if self.has_value:
            text = f"{text}, got: {_describe(value)}"
        super().__init__(text)

    @property
    def path(self) -> str:
        return format_path(self.document, self.record_kind, self.index, self.field_path)


class DataReferenceError(DataValidationError):
    """Raised when definitions reference missing related data."""

"""Base repository implementation for JSON definition tables."""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Generic, List, Mapping, Sequence, Tuple, TypeVar, Union

from packforge.data.errors import DataValidationError

T = TypeVar("T")

FieldPath = Tuple[Union[str, int], ...]


class RepositoryBase(Generic[T]):
    """Turns one raw top-level list into a tuple of typed definitions.

    Subclasses set ``document`` and ``record_kind`` and implement
    ``_build_record``. Every helper reports failures with the exact document,
    record index and field path of the offending value.
    """

    document: str = ""
    record_kind: str = ""

    def build(self, raw: object) -> Tuple[T, ...]:
        """Validate ``raw`` and return the typed definitions in document order."""
        if not isinstance(raw, list):
            raise self._error("must be array", value=raw)
        definitions: List[T] = []
        seen: set[str] = set()
        for index, entry in enumerate(raw):
            record = self._require_mapping(entry, index)
            definition = self._build_record(record, index)
            def_id = getattr(definition, "id")
            if def_id in seen:
                raise self._error(f"duplicate id '{def_id}'", index=index, field_path=("id",))
            seen.add(def_id)
            definitions.append(definition)
        return tuple(definitions)

    def _build_record(self, record: Mapping[str, object], index: int) -> T:
        """Convert one raw record into a typed definition."""
        raise NotImplementedError

    def _error(
        self,
        message: str,
        *,
        index: int | None = None,
        field_path: Sequence[str | int] = (),
        **kwargs: object,
    ) -> DataValidationError:
        return DataValidationError(
            message,
            document=self.document,
            record_kind=self.record_kind,
            index=index,
            field_path=field_path,
            **kwargs,
        )

    def _require_key(
        self,
        payload: Mapping[str, object],
        key: str,
        index: int,
        parent: FieldPath = (),
    ) -> object:
        if key not in payload:
            raise self._error(f"missing key '{key}'", index=index, field_path=parent + (key,))
        return payload[key]

    def _require_mapping(self, value: object, index: int, path: FieldPath = ()) -> Mapping[str, object]:
        if not isinstance(value, dict):
            raise self._error("must be object", index=index, field_path=path, value=value)
        return value

    def _require_list(self, value: object, index: int, path: FieldPath) -> list[object]:
        if not isinstance(value, list):
            raise self._error("must be array", index=index, field_path=path, value=value)
        return value

    def _require_str(self, value: object, index: int, path: FieldPath) -> str:
        if not isinstance(value, str):
            raise self._error("must be a string", index=index, field_path=path, value=value)
        return value

    def _require_id(self, value: object, index: int, path: FieldPath = ("id",)) -> str:
        text = self._require_str(value, index, path)
        if not text.strip():
            raise self._error("must not be empty", index=index, field_path=path, value=value)
        if text != text.strip():
            raise self._error("must not have surrounding whitespace", index=index, field_path=path, value=value)
        return text

    def _require_number(self, value: object, index: int, path: FieldPath) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise self._error("must be a number", index=index, field_path=path, value=value)
        return value

    def _require_int(self, value: object, index: int, path: FieldPath) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._error("must be an integer", index=index, field_path=path, value=value)
        return value

    def _require_weight(self, value: object, index: int, path: FieldPath) -> float:
        weight = self._require_number(value, index, path)
        if weight < 0:
            raise self._error("must be >= 0", index=index, field_path=path, value=value)
        return weight

    def _require_range(self, value: object, index: int, path: FieldPath) -> Tuple[int, int]:
        """Validate a ``[min, max]`` integer pair with ``min <= max``."""
        if (
            not isinstance(value, list)
            or len(value) != 2
            or any(isinstance(bound, bool) or not isinstance(bound, int) for bound in value)
        ):
            raise self._error("must be [min,max] array", index=index, field_path=path, value=value)
        low, high = value
        if low > high:
            raise self._error(f"invalid: {low} > {high}", index=index, field_path=path)
        return low, high

    def _require_number_map(self, value: object, index: int, path: FieldPath) -> Mapping[str, float]:
        mapping = self._require_mapping(value, index, path)
        result = {}
        for key, entry in mapping.items():
            result[key] = self._require_number(entry, index, path + (key,))
        return MappingProxyType(result)

    def _require_str_list(self, value: object, index: int, path: FieldPath) -> Tuple[str, ...]:
        entries = self._require_list(value, index, path)
        result: List[str] = []
        for position, entry in enumerate(entries):
            result.append(self._require_str(entry, index, path + (position,)))
        return tuple(result)

    def _optional_number(self, payload: Mapping[str, object], key: str, index: int, parent: FieldPath) -> float | None:
        if key not in payload or payload[key] is None:
            return None
        return self._require_number(payload[key], index, parent + (key,))

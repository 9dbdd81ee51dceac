"""Structural validation of value trees against shapes."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Mapping

from .errors import ParamValidationError
from .models.shapes import ListShape, MapShape, ScalarShape, Shape, StructureShape


def _is_type_match(kind: str, value: Any) -> bool:
    if kind == "string":
        return isinstance(value, str)
    if kind == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "float":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "timestamp":
        return isinstance(value, (datetime, date, int, float)) and not isinstance(value, bool)
    if kind == "blob":
        return isinstance(value, (bytes, bytearray, str)) or hasattr(value, "read")
    # Unknown kinds: accept
    return True


class ParamValidator:
    """Collects every shape mismatch in a value tree, then raises once.

    ``None`` is accepted anywhere; it means "no value".
    """

    def __init__(self, shape: Shape, validate_required: bool = True) -> None:
        self.shape = shape
        self.validate_required = validate_required

    def validate(self, data: Any) -> None:
        errors: List[str] = []
        self._check(self.shape, data, "params", errors)
        if errors:
            raise ParamValidationError(errors)

    def _check(self, shape: Shape, value: Any, context: str, errors: List[str]) -> None:
        if value is None:
            return
        if isinstance(shape, StructureShape):
            self._check_structure(shape, value, context, errors)
        elif isinstance(shape, ListShape):
            if not isinstance(value, (list, tuple)):
                errors.append(f"expected {context} to be a list, got {type(value).__name__}")
                return
            for idx, item in enumerate(value):
                self._check(shape.member, item, f"{context}[{idx}]", errors)
        elif isinstance(shape, MapShape):
            if not isinstance(value, Mapping):
                errors.append(f"expected {context} to be a mapping, got {type(value).__name__}")
                return
            for key, item in value.items():
                if not isinstance(key, str):
                    errors.append(f"expected {context} keys to be strings, got {type(key).__name__}")
                self._check(shape.value, item, f"{context}[{key!r}]", errors)
        elif isinstance(shape, ScalarShape):
            if not _is_type_match(shape.kind, value):
                errors.append(f"expected {context} to be of type {shape.kind}, got {type(value).__name__}")

    def _check_structure(self, shape: StructureShape, value: Any, context: str, errors: List[str]) -> None:
        if not isinstance(value, Mapping):
            errors.append(f"expected {context} to be a structure, got {type(value).__name__}")
            return
        if self.validate_required:
            for name in shape.required:
                if value.get(name) is None:
                    errors.append(f"missing required parameter {context}.{name}")
        for name, member_value in value.items():
            ref = shape.members.get(name)
            if ref is None:
                errors.append(f"unexpected value at {context}.{name}")
                continue
            self._check(ref.shape, member_value, f"{context}.{name}", errors)


def validate(shape: Shape, data: Any, validate_required: bool = True) -> None:
    ParamValidator(shape, validate_required=validate_required).validate(data)

"""Stub generation from output shapes.

Turns a partial value tree into a complete, shape-conformant value:

- structures get every declared member; omitted required structures are
  generated with defaults, omitted optional ones stay ``None``
- lists and maps contain exactly the supplied elements
- scalars keep supplied values and otherwise receive a fixed placeholder
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from ..errors import ModelError, NoOutputError
from ..models.shapes import ListShape, MapShape, MemberRef, Shape, StructureShape
from ..models.structures import EmptyStructure, Structure
from ..validation import ParamValidator


class StubGenerator:
    def __init__(self, shape: StructureShape | None) -> None:
        self.shape = shape

    def format(self, data: Mapping | None = None) -> Any:
        """Return a stub for ``data``, an optional partial value tree."""
        if self.shape is None:
            return self._empty_stub(data)
        data = {} if data is None else data
        ParamValidator(self.shape, validate_required=False).validate(data)
        return self._stub(self.shape, data)

    # --- internal helpers ---

    def _stub(self, shape: Shape, value: Any) -> Any:
        if isinstance(shape, StructureShape):
            return self._stub_structure(shape, value)
        if isinstance(shape, ListShape):
            return self._stub_list(shape, value or [])
        if isinstance(shape, MapShape):
            return self._stub_map(shape, value or {})
        return self._stub_scalar(shape, value)

    def _stub_structure(self, shape: StructureShape, value: Mapping | None, generating: tuple = ()) -> Structure | None:
        if value is None:
            return None
        stub = Structure()
        for name, ref in shape.members.items():
            if name in value:
                stub[name] = None if value[name] is None else self._stub(ref.shape, value[name])
                continue
            member_value = self._member_value(shape, name, ref)
            if member_value is None:
                stub[name] = self._stub(ref.shape, None)
                continue
            # Omitted required structure: the chain of generated shapes must not loop
            if ref.shape in generating or ref.shape is shape:
                raise ModelError(f"Cannot stub required member {name!r}: shape {ref.shape.name!r} requires itself")
            stub[name] = self._stub_structure(ref.shape, member_value, generating + (shape,))
        return stub

    def _member_value(self, shape: StructureShape, name: str, ref: MemberRef) -> Any:
        if isinstance(ref.shape, StructureShape) and name in shape.required:
            return {}
        return None

    def _stub_list(self, shape: ListShape, values: List[Any]) -> List[Any]:
        return [self._stub(shape.member, item) for item in values]

    def _stub_map(self, shape: MapShape, values: Mapping) -> Dict[Any, Any]:
        return {key: self._stub(shape.value, item) for key, item in values.items()}

    def _stub_scalar(self, shape: Shape, value: Any) -> Any:
        if value is not None:
            return value
        kind = getattr(shape, "kind", None)
        if kind == "string":
            return shape.name
        if kind == "integer":
            return 0
        if kind == "float":
            return 0.0
        if kind == "boolean":
            return False
        if kind == "timestamp":
            return datetime.now(timezone.utc)
        return None

    def _empty_stub(self, data: Mapping | None) -> EmptyStructure:
        if not data:
            return EmptyStructure()
        raise NoOutputError(
            "unable to generate a stubbed response from the given data; "
            "this operation does not return data"
        )

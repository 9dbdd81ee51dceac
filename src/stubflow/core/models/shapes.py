"""Shape trees and API model parsing."""
from __future__ import annotations

import re
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, List, Optional

from ..errors import ModelError, UnknownOperationError

SCALAR_KINDS = {"string", "integer", "float", "boolean", "timestamp"}
TYPE_ALIASES = {
    "long": "integer",
    "short": "integer",
    "byte": "integer",
    "double": "float",
    "bool": "boolean",
}
LOCATIONS = {"header", "headers", "statusCode", "uri", "querystring"}


def snake_case(name: str) -> str:
    """``ContentLength`` -> ``content_length``, ``HTTPStatus`` -> ``http_status``."""
    value = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    return value.replace("-", "_").lower()


def _normalize_type(value: str | None) -> str:
    if not value:
        return "string"
    lowered = str(value).lower()
    return TYPE_ALIASES.get(lowered, lowered)


@dataclass(eq=False)
class Shape:
    name: str


@dataclass(eq=False)
class ScalarShape(Shape):
    # Unknown kinds (blob, document, ...) are kept as-is
    kind: str = "string"


@dataclass(eq=False)
class MemberRef:
    name: str
    shape: Shape
    location_name: str
    location: Optional[str] = None


@dataclass(eq=False)
class StructureShape(Shape):
    members: Dict[str, MemberRef] = dataclass_field(default_factory=dict)
    required: frozenset = frozenset()


@dataclass(eq=False)
class ListShape(Shape):
    member: Optional[Shape] = None
    member_name: str = "member"


@dataclass(eq=False)
class MapShape(Shape):
    key: Optional[Shape] = None
    value: Optional[Shape] = None


@dataclass
class Operation:
    name: str
    wire_name: str
    input: Optional[StructureShape] = None
    output: Optional[StructureShape] = None
    http_method: str = "POST"
    request_uri: str = "/"
    errors: List[str] = dataclass_field(default_factory=list)


@dataclass
class ApiModel:
    metadata: Dict[str, Any]
    operations: Dict[str, Operation]
    shapes: Dict[str, Shape]

    @property
    def protocol(self) -> str | None:
        return self.metadata.get("protocol")

    def operation(self, name: str) -> Operation:
        """Look up an operation by its snake_case or wire name."""
        op = self.operations.get(name) or self.operations.get(snake_case(name))
        if op is None:
            raise UnknownOperationError(f"Unknown operation '{name}'")
        return op

    def operation_names(self) -> List[str]:
        return list(self.operations)


# --- Parsing helpers ---


class _ShapeBuilder:
    """Resolves named shape definitions, tolerating recursive references."""

    def __init__(self, definitions: Dict[str, Any]) -> None:
        self.definitions = definitions
        self.resolved: Dict[str, Shape] = {}

    def build(self, name: str) -> Shape:
        if name in self.resolved:
            return self.resolved[name]
        spec = self.definitions.get(name)
        if not isinstance(spec, dict):
            raise ModelError(f"Shape '{name}' is not defined")
        kind = _normalize_type(spec.get("type"))

        if kind == "structure":
            shape = StructureShape(name=name)
            self.resolved[name] = shape
            self._fill_structure(shape, spec)
            return shape
        if kind == "list":
            shape = ListShape(name=name)
            self.resolved[name] = shape
            member = spec.get("member") or {}
            shape.member = self._ref_target(member, name)
            shape.member_name = member.get("locationName") or "member"
            return shape
        if kind == "map":
            shape = MapShape(name=name)
            self.resolved[name] = shape
            shape.key = self._ref_target(spec.get("key") or {"shape": None}, name, default_string=True)
            shape.value = self._ref_target(spec.get("value") or {}, name)
            return shape

        shape = ScalarShape(name=name, kind=kind)
        self.resolved[name] = shape
        return shape

    def _ref_target(self, ref: Dict[str, Any], owner: str, default_string: bool = False) -> Shape:
        target = ref.get("shape") if isinstance(ref, dict) else None
        if not isinstance(target, str):
            if default_string:
                return ScalarShape(name="String", kind="string")
            raise ModelError(f"Shape '{owner}' has a reference without a 'shape' name")
        return self.build(target)

    def _fill_structure(self, shape: StructureShape, spec: Dict[str, Any]) -> None:
        members = spec.get("members") or {}
        if not isinstance(members, dict):
            raise ModelError(f"Structure '{shape.name}' members must be a mapping")
        wire_required = set(spec.get("required") or [])
        required = set()
        for wire_name, ref in members.items():
            if not isinstance(ref, dict):
                continue
            py_name = snake_case(wire_name)
            location = ref.get("location")
            if location is not None and location not in LOCATIONS:
                raise ModelError(f"Member '{wire_name}' of '{shape.name}' has unknown location '{location}'")
            shape.members[py_name] = MemberRef(
                name=py_name,
                shape=self._ref_target(ref, shape.name),
                location_name=ref.get("locationName") or wire_name,
                location=location,
            )
            if wire_name in wire_required:
                required.add(py_name)
        shape.required = frozenset(required)


def _parse_operation(wire_name: str, spec: Dict[str, Any], builder: _ShapeBuilder) -> Operation:
    http = spec.get("http") or {}

    def _io(key: str) -> StructureShape | None:
        ref = spec.get(key)
        if not ref:
            return None
        shape = builder.build(ref.get("shape"))
        if not isinstance(shape, StructureShape):
            raise ModelError(f"Operation '{wire_name}' {key} must be a structure")
        return shape

    errors = [e.get("shape") for e in spec.get("errors") or [] if isinstance(e, dict) and e.get("shape")]
    return Operation(
        name=snake_case(wire_name),
        wire_name=wire_name,
        input=_io("input"),
        output=_io("output"),
        http_method=str(http.get("method") or "POST").upper(),
        request_uri=http.get("requestUri") or "/",
        errors=errors,
    )


def parse_api(raw: Dict[str, Any]) -> ApiModel:
    """Parse a botocore-style API description into an :class:`ApiModel`."""
    if not isinstance(raw, dict):
        raise ModelError("API model must be a dictionary")
    metadata = raw.get("metadata") or {}
    operations_raw = raw.get("operations") or {}
    shapes_raw = raw.get("shapes") or {}
    if not isinstance(operations_raw, dict) or not isinstance(shapes_raw, dict):
        raise ModelError("API model 'operations' and 'shapes' must be mappings")

    builder = _ShapeBuilder(shapes_raw)
    operations: Dict[str, Operation] = {}
    for wire_name, spec in operations_raw.items():
        if not isinstance(spec, dict):
            continue
        op = _parse_operation(wire_name, spec, builder)
        operations[op.name] = op

    # Shapes not reachable from an operation are still resolvable by name
    for name in shapes_raw:
        builder.build(name)

    return ApiModel(metadata=dict(metadata), operations=operations, shapes=builder.resolved)

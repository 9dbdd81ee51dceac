"""Value codecs shared by the wire protocols (JSON, XML, headers, query strings)."""
from __future__ import annotations

import base64
import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any, Dict, List, Mapping, Tuple

from ..errors import ResponseParseError
from ..models.shapes import ListShape, MapShape, ScalarShape, Shape, StructureShape
from ..models.structures import Structure


# --- scalars ---


def to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    text = str(value).strip()
    try:
        return datetime.fromtimestamp(float(text), tz=timezone.utc)
    except ValueError:
        pass
    try:
        return to_datetime(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError) as exc:
        raise ResponseParseError(f"Unrecognized timestamp '{text}'") from exc


def iso8601(value: Any) -> str:
    return to_datetime(value).astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def blob_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if hasattr(value, "read"):
        if hasattr(value, "seek"):
            value.seek(0)
        data = value.read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return bytes(value)


def scalar_to_text(shape: Shape, value: Any, header: bool = False) -> str:
    kind = getattr(shape, "kind", "string")
    if kind == "boolean":
        return "true" if value else "false"
    if kind == "timestamp":
        if header:
            return format_datetime(to_datetime(value).astimezone(timezone.utc), usegmt=True)
        return iso8601(value)
    if kind == "blob":
        return base64.b64encode(blob_bytes(value)).decode("ascii")
    return str(value)


def text_to_scalar(shape: Shape, text: str | None) -> Any:
    if text is None:
        return None
    kind = getattr(shape, "kind", "string")
    try:
        if kind == "integer":
            return int(text)
        if kind == "float":
            return float(text)
    except ValueError as exc:
        raise ResponseParseError(f"Cannot read {kind} from '{text}'") from exc
    if kind == "boolean":
        return text.strip().lower() == "true"
    if kind == "timestamp":
        return to_datetime(text)
    if kind == "blob":
        return base64.b64decode(text)
    return text


# --- JSON ---


def to_json_value(shape: Shape, value: Any) -> Any:
    """Convert a value tree into JSON-ready data keyed by wire names."""
    if value is None:
        return None
    if isinstance(shape, StructureShape):
        out: Dict[str, Any] = {}
        for name, member_value in value.items():
            ref = shape.members.get(name)
            if ref is None or member_value is None:
                continue
            out[ref.location_name] = to_json_value(ref.shape, member_value)
        return out
    if isinstance(shape, ListShape):
        return [to_json_value(shape.member, item) for item in value]
    if isinstance(shape, MapShape):
        return {key: to_json_value(shape.value, item) for key, item in value.items()}
    kind = getattr(shape, "kind", None)
    if kind == "timestamp":
        return to_datetime(value).timestamp()
    if kind == "blob":
        return scalar_to_text(shape, value)
    return value


def from_json_value(shape: Shape, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(shape, StructureShape):
        if not isinstance(value, Mapping):
            raise ResponseParseError(f"Expected an object for '{shape.name}'")
        out = Structure()
        for name, ref in shape.members.items():
            out[name] = from_json_value(ref.shape, value.get(ref.location_name))
        return out
    if isinstance(shape, ListShape):
        return [from_json_value(shape.member, item) for item in value]
    if isinstance(shape, MapShape):
        return {key: from_json_value(shape.value, item) for key, item in value.items()}
    kind = getattr(shape, "kind", None)
    if kind == "timestamp":
        return to_datetime(value)
    if kind == "blob":
        return base64.b64decode(value)
    return value


# --- XML ---


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def build_xml(parent: ET.Element, tag: str, shape: Shape, value: Any) -> None:
    """Append ``value`` under ``parent`` as element ``tag``."""
    if value is None:
        return
    node = ET.SubElement(parent, tag)
    if isinstance(shape, StructureShape):
        build_xml_members(node, shape, value)
    elif isinstance(shape, ListShape):
        for item in value:
            build_xml(node, shape.member_name, shape.member, item)
    elif isinstance(shape, MapShape):
        for key, item in value.items():
            entry = ET.SubElement(node, "entry")
            ET.SubElement(entry, "key").text = str(key)
            build_xml(entry, "value", shape.value, item)
    else:
        node.text = scalar_to_text(shape, value)


def build_xml_members(node: ET.Element, shape: StructureShape, value: Mapping, skip_located: bool = False) -> None:
    for name, member_value in value.items():
        ref = shape.members.get(name)
        if ref is None or (skip_located and ref.location):
            continue
        build_xml(node, ref.location_name, ref.shape, member_value)


def parse_xml(shape: Shape, element: ET.Element | None) -> Any:
    if element is None:
        return None
    if isinstance(shape, StructureShape):
        return parse_xml_members(shape, element)
    if isinstance(shape, ListShape):
        return [parse_xml(shape.member, child) for child in element if local_name(child.tag) == shape.member_name]
    if isinstance(shape, MapShape):
        out: Dict[str, Any] = {}
        for entry in element:
            key = find_child(entry, "key")
            if key is None:
                continue
            out[key.text or ""] = parse_xml(shape.value, find_child(entry, "value"))
        return out
    return text_to_scalar(shape, element.text or "")


def parse_xml_members(shape: StructureShape, element: ET.Element, skip_located: bool = False) -> Structure:
    out = Structure()
    for name, ref in shape.members.items():
        if skip_located and ref.location:
            out[name] = None
            continue
        out[name] = parse_xml(ref.shape, find_child(element, ref.location_name))
    return out


def xml_bytes(root: ET.Element) -> bytes:
    return ET.tostring(root, encoding="utf-8", xml_declaration=False)


def read_xml(body: bytes) -> ET.Element | None:
    if not body.strip():
        return None
    try:
        return ET.fromstring(body)
    except ET.ParseError as exc:
        raise ResponseParseError(f"Invalid XML body: {exc}") from exc


# --- query strings ---


def flatten_query(shape: Shape, value: Any, prefix: str, ec2: bool = False) -> List[Tuple[str, str]]:
    """Serialize params the way the query and ec2 protocols send them."""
    if value is None:
        return []
    pairs: List[Tuple[str, str]] = []
    if isinstance(shape, StructureShape):
        for name, member_value in value.items():
            ref = shape.members.get(name)
            if ref is None:
                continue
            key = ref.location_name
            if ec2:
                key = key[:1].upper() + key[1:]
            pairs.extend(flatten_query(ref.shape, member_value, f"{prefix}.{key}" if prefix else key, ec2))
    elif isinstance(shape, ListShape):
        for idx, item in enumerate(value, start=1):
            item_prefix = f"{prefix}.{idx}" if ec2 else f"{prefix}.member.{idx}"
            pairs.extend(flatten_query(shape.member, item, item_prefix, ec2))
    elif isinstance(shape, MapShape):
        for idx, (key, item) in enumerate(value.items(), start=1):
            pairs.append((f"{prefix}.entry.{idx}.key", str(key)))
            pairs.extend(flatten_query(shape.value, item, f"{prefix}.entry.{idx}.value", ec2))
    elif isinstance(shape, ScalarShape):
        pairs.append((prefix, scalar_to_text(shape, value)))
    return pairs

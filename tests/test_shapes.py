import pytest

from stubflow.core.errors import ModelError, UnknownOperationError
from stubflow.core.models.shapes import (
    ListShape,
    MapShape,
    ScalarShape,
    StructureShape,
    parse_api,
    snake_case,
)


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("ContentLength", "content_length"),
        ("HTTPStatus", "http_status"),
        ("ID", "id"),
        ("NextToken", "next_token"),
        ("x-amz-meta", "x_amz_meta"),
    ],
)
def test_snake_case(wire, expected):
    assert snake_case(wire) == expected


def test_parse_api_operations_and_shapes(widgets_api):
    assert widgets_api.protocol == "json"
    assert widgets_api.operation_names() == ["describe_widget", "delete_widget"]

    op = widgets_api.operation("describe_widget")
    assert op.wire_name == "DescribeWidget"
    assert op.request_uri == "/widgets/{WidgetId}"
    assert op.errors == ["WidgetNotFound"]
    assert isinstance(op.output, StructureShape)
    assert list(op.output.members) == ["widget", "owner", "next_token"]
    assert op.output.required == frozenset({"widget"})

    widget = op.output.members["widget"].shape
    assert isinstance(widget.members["tags"].shape, ListShape)
    assert isinstance(widget.members["attributes"].shape, MapShape)
    assert widget.members["weight"].shape.kind == "float"
    assert widget.members["payload"].shape.kind == "blob"


def test_operation_lookup_by_wire_name(widgets_api):
    assert widgets_api.operation("DescribeWidget") is widgets_api.operation("describe_widget")


def test_unknown_operation(widgets_api):
    with pytest.raises(UnknownOperationError):
        widgets_api.operation("launch_widget")


def test_operation_without_output(widgets_api):
    assert widgets_api.operation("delete_widget").output is None


def test_member_locations(objects_api):
    output = objects_api.operation("head_object").output
    ref = output.members["content_length"]
    assert ref.location == "header"
    assert ref.location_name == "Content-Length"
    assert ref.shape.kind == "integer"


def test_recursive_shapes_resolve():
    api = parse_api(
        {
            "metadata": {"protocol": "json"},
            "operations": {"GetTree": {"output": {"shape": "Node"}}},
            "shapes": {
                "Node": {"type": "structure", "members": {"Children": {"shape": "NodeList"}, "Label": {"shape": "S"}}},
                "NodeList": {"type": "list", "member": {"shape": "Node"}},
                "S": {"type": "string"},
            },
        }
    )
    node = api.operation("get_tree").output
    assert node.members["children"].shape.member is node
    assert isinstance(node.members["label"].shape, ScalarShape)


def test_undefined_shape_reference():
    with pytest.raises(ModelError):
        parse_api({"metadata": {}, "operations": {"Op": {"output": {"shape": "Missing"}}}, "shapes": {}})


def test_unknown_member_location():
    raw = {
        "metadata": {},
        "operations": {},
        "shapes": {"Out": {"type": "structure", "members": {"A": {"shape": "S", "location": "cookie"}}}, "S": {"type": "string"}},
    }
    with pytest.raises(ModelError):
        parse_api(raw)


def test_parse_api_requires_mapping():
    with pytest.raises(ModelError):
        parse_api(["not", "a", "model"])

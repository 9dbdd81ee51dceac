import threading

import pytest

from stubflow.core.errors import ModelError, ParamValidationError, UnknownOperationError
from stubflow.core.models.shapes import parse_api
from stubflow.core.models.stubs import DataStub, ErrorStub, HttpStub
from stubflow.core.stubbing import StubQueueStore


def test_empty_queue_generates_default_every_time(widgets_api):
    store = StubQueueStore(widgets_api)
    first = store.next("describe_widget")
    second = store.next("describe_widget")
    assert isinstance(first, DataStub)
    assert first.data.widget.details.parts == 0
    assert second.data.widget.size == 0
    assert first.data is not second.data


def test_single_entry_repeats(widgets_api):
    store = StubQueueStore(widgets_api)
    store.configure("describe_widget", ["WidgetNotFound"])
    entries = [store.next("describe_widget") for _ in range(3)]
    assert all(isinstance(e, HttpStub) for e in entries)
    assert entries[0] is entries[1] is entries[2]
    assert store.pending("describe_widget") == 1


def test_multiple_entries_advance_then_last_repeats(widgets_api):
    store = StubQueueStore(widgets_api)
    errors = [ValueError("one"), ValueError("two"), ValueError("three")]
    store.configure("describe_widget", errors)

    seen = [store.next("describe_widget").error for _ in range(5)]
    assert seen == [errors[0], errors[1], errors[2], errors[2], errors[2]]
    assert store.pending("describe_widget") == 1


def test_configure_replaces_queue(widgets_api):
    store = StubQueueStore(widgets_api)
    store.configure("describe_widget", [KeyError, KeyError])
    store.configure("describe_widget", [TypeError])
    entry = store.next("describe_widget")
    assert isinstance(entry, ErrorStub)
    assert entry.error is TypeError


def test_failed_configure_keeps_previous_queue(widgets_api):
    store = StubQueueStore(widgets_api)
    store.configure("describe_widget", [TypeError])
    with pytest.raises(ParamValidationError):
        store.configure("describe_widget", [{"next_token": 1}])
    assert store.next("describe_widget").error is TypeError


def test_queues_are_per_operation_and_wire_names_share_them(widgets_api):
    store = StubQueueStore(widgets_api)
    store.configure("DescribeWidget", [TypeError])
    assert store.pending("describe_widget") == 1
    assert store.pending("delete_widget") == 0


def test_clear(widgets_api):
    store = StubQueueStore(widgets_api)
    store.configure("describe_widget", [TypeError])
    store.configure("delete_widget", [TypeError])
    store.clear("describe_widget")
    assert store.pending("describe_widget") == 0
    assert store.pending("delete_widget") == 1
    store.clear()
    assert store.pending("delete_widget") == 0


def test_unknown_operation(widgets_api):
    store = StubQueueStore(widgets_api)
    with pytest.raises(UnknownOperationError):
        store.next("launch_widget")


def test_stores_are_independent(widgets_api):
    one = StubQueueStore(widgets_api)
    two = StubQueueStore(widgets_api)
    one.configure("describe_widget", [TypeError])
    assert isinstance(two.next("describe_widget"), DataStub)


def test_concurrent_next_hands_out_each_entry_once(widgets_api):
    store = StubQueueStore(widgets_api)
    specs = [ValueError(str(i)) for i in range(50)]
    store.configure("describe_widget", specs)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(10):
            entry = store.next("describe_widget")
            with lock:
                results.append(entry.error)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # 49 dequeues plus one read of the remaining entry
    assert sorted(str(e) for e in results) == sorted(str(e) for e in specs)


def test_self_requiring_output_raises_model_error():
    api = parse_api({
        "metadata": {"protocol": "json"},
        "operations": {"GetNode": {"output": {"shape": "Node"}}},
        "shapes": {"Node": {"type": "structure", "required": ["Next"], "members": {"Next": {"shape": "Node"}}}},
    })
    with pytest.raises(ModelError):
        StubQueueStore(api).next("get_node")

import json

from hermes_agent.streaming import StreamAccumulator, iter_sse_payloads


def sse(payload) -> str:
    return f"data: {json.dumps(payload)}\n\n"


def content_delta(text, finish_reason=None):
    return {"choices": [{"delta": {"content": text}, "finish_reason": finish_reason}]}


def tool_delta(call_id=None, name=None, arguments=None):
    function = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    item = {"function": function}
    if call_id is not None:
        item["id"] = call_id
    return {"choices": [{"delta": {"tool_calls": [item]}}]}


def test_iter_sse_payloads_skips_non_data_and_done():
    chunk = ": comment\n" + sse({"a": 1}) + "event: x\n" + "data: [DONE]\n"
    assert list(iter_sse_payloads(chunk)) == [{"a": 1}]


def test_iter_sse_payloads_accepts_bytes_and_skips_invalid_json():
    chunk = (sse({"b": 2}) + "data: {not json\n" + sse([1, 2])).encode("utf-8")
    assert list(iter_sse_payloads(chunk)) == [{"b": 2}, [1, 2]]


def test_iter_sse_payloads_trims_whitespace():
    chunk = '   data: {"c": 3}   \r\n'
    assert list(iter_sse_payloads(chunk)) == [{"c": 3}]


def test_iter_sse_payloads_requires_space_after_prefix():
    assert list(iter_sse_payloads('data:{"d": 4}\n')) == []


def test_feed_returns_tokens_and_accumulates_content():
    acc = StreamAccumulator()
    first = acc.feed(sse(content_delta("Hel")) + sse(content_delta("lo")))
    second = acc.feed(sse(content_delta(" world", finish_reason="stop")).encode())
    assert first == ["Hel", "lo"]
    assert second == [" world"]
    assert acc.content == "Hello world"
    assert acc.finish_reason == "stop"
    assert acc.finish() == []
    assert not acc.wants_tools


def test_null_finish_reason_does_not_overwrite():
    acc = StreamAccumulator()
    acc.feed(sse(content_delta("a", finish_reason="length")))
    acc.feed(sse(content_delta("b", finish_reason=None)))
    assert acc.finish_reason == "length"


def test_single_tool_call_assembled_from_fragments():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="call_1", name="terminal", arguments='{"comm')))
    acc.feed(sse(tool_delta(arguments='and": "ls"} ')))
    acc.feed(sse({"choices": [{"delta": {}, "finish_reason": "tool_calls"}]}))
    calls = acc.finish()
    assert len(calls) == 1
    assert calls[0].id == "call_1"
    assert calls[0].function.name == "terminal"
    assert json.loads(calls[0].function.arguments) == {"command": "ls"}
    assert calls[0].function.arguments == calls[0].function.arguments.strip()
    assert acc.wants_tools


def test_new_id_flushes_previous_tool_call():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="a", name="file_read", arguments='{"path": "x"}')))
    acc.feed(sse(tool_delta(call_id="b", name="file_write", arguments='{"path": "y"}')))
    calls = acc.finish()
    assert [c.id for c in calls] == ["a", "b"]
    assert [c.function.name for c in calls] == ["file_read", "file_write"]
    assert [json.loads(c.function.arguments)["path"] for c in calls] == ["x", "y"]


def test_repeated_same_id_does_not_split():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="a", name="memory", arguments='{"x":')))
    acc.feed(sse(tool_delta(call_id="a", arguments="1}")))
    calls = acc.finish()
    assert len(calls) == 1
    assert json.loads(calls[0].function.arguments) == {"x": 1}


def test_tool_call_without_name_is_dropped():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="a", arguments="{}")))
    assert acc.finish() == []


def test_tool_call_with_empty_name_is_dropped():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="a", name="", arguments="{}")))
    assert acc.finish() == []


def test_finish_is_idempotent():
    acc = StreamAccumulator()
    acc.feed(sse(tool_delta(call_id="a", name="todo", arguments="{}")))
    first = acc.finish()
    second = acc.finish()
    assert [c.id for c in first] == [c.id for c in second] == ["a"]


def test_malformed_payloads_are_ignored():
    acc = StreamAccumulator()
    tokens = acc.feed(
        sse({"choices": []})
        + sse({"choices": "x"})
        + sse({"other": 1})
        + sse({"choices": [{"delta": {"content": 5}}]})
    )
    assert tokens == []
    assert acc.content == ""
    assert acc.finish() == []
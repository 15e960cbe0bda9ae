import pytest

from hermes_agent.compression import (
    ContextCompressor,
    estimate_tokens,
    message_tokens,
    tool_summary,
)
from hermes_agent.messages import Message, ToolCall, ToolFunction


def test_estimate_tokens_empty():
    assert estimate_tokens("") == 0


@pytest.mark.parametrize("text", ["alpha", "one two three", "a b c d e f g h"])
def test_estimate_tokens_ascii_equals_word_count(text):
    assert estimate_tokens(text) == len(text.split())


def test_estimate_tokens_grows_with_wide_characters():
    assert estimate_tokens("hello " + "中" * 40) > estimate_tokens("hello")


def test_message_tokens_includes_tool_calls():
    call = ToolCall(id="c1", function=ToolFunction(name="terminal", arguments='{"command": "ls -la"}'))
    msg = Message(role="assistant", content="running a command now", tool_calls=[call])
    expected = (
        estimate_tokens("running a command now")
        + estimate_tokens("terminal")
        + estimate_tokens('{"command": "ls -la"}')
    )
    assert message_tokens(msg) == expected


def test_message_tokens_without_content():
    assert message_tokens(Message(role="assistant")) == 0


def test_tool_summary_default_short_content_is_kept():
    assert tool_summary(None, "short output") == "[tool] short output"


def test_tool_summary_search_counts_matches():
    assert tool_summary("search_files", "a --> b\nc --> d") == "[search_files] 2 match(es)"


def test_tool_summary_terminal_no_output():
    assert tool_summary("terminal", "") == "[terminal] no output: 0 lines"


def test_tool_summary_prefix_uses_tool_name():
    assert tool_summary("web_search", "URL: x").startswith("[web_search] ")


def _words_message(role, n=100):
    return Message(role=role, content="word " * n)


def test_should_compress_threshold():
    comp = ContextCompressor()
    messages = [_words_message("user", 100)]
    assert comp.should_compress(messages, 100) is True
    assert comp.should_compress(messages, 1_000_000) is False


def test_compress_short_conversation_unchanged():
    comp = ContextCompressor()
    messages = [_words_message("user") for _ in range(10)]
    result, ratio, saved = comp.compress(messages)
    assert result == messages
    assert ratio == 0.0
    assert saved == 0


def test_compress_protects_head_and_tail():
    comp = ContextCompressor()
    messages = [Message(role="assistant", content=f"message number {i} " * 20) for i in range(60)]
    result, ratio, saved = comp.compress(messages)
    assert result[:3] == messages[:3]
    assert result[-20:] == messages[-20:]
    assert len(result) < len(messages)
    assert saved > 0
    assert 0.0 < ratio <= 1.0


def test_compress_keeps_everything_after_last_user_message():
    comp = ContextCompressor()
    messages = [Message(role="assistant", content=f"m{i} text") for i in range(40)]
    messages[10] = Message(role="user", content="the question")
    result, _, _ = comp.compress(messages)
    assert result[-30:] == messages[10:]


def test_compress_drops_consecutive_duplicate_tool_outputs():
    comp = ContextCompressor()
    messages = [Message(role="user", content="start")] * 3
    messages += [Message(role="tool", content="same output", name="x")] * 10
    messages += [Message(role="assistant", content=f"tail {i}") for i in range(20)]
    result, _, _ = comp.compress(messages)
    tool_messages = [m for m in result if m.role == "tool"]
    assert len(tool_messages) == 1


def test_compress_collapses_long_tool_output():
    comp = ContextCompressor()
    long_output = "\n".join(f"line {i}" for i in range(200))
    messages = [Message(role="assistant", content="head")] * 3
    messages += [Message(role="tool", content=long_output, name="terminal", tool_call_id="t1")]
    messages += [Message(role="assistant", content=f"tail {i}") for i in range(20)]
    result, _, saved = comp.compress(messages)
    collapsed = result[3]
    assert collapsed.role == "tool"
    assert collapsed.tool_call_id == "t1"
    assert collapsed.content == tool_summary("terminal", long_output)
    assert saved > 0


def test_anti_thrashing_stops_compression_after_low_savings():
    comp = ContextCompressor()
    messages = [_words_message("assistant") for _ in range(24)]
    assert comp.should_compress(messages, 1) is True
    for _ in range(2):
        _, ratio, _ = comp.compress(messages)
        assert ratio == 0.0
    assert comp.should_compress(messages, 1) is False
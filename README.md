# hermes_agent

These are building blocks for a chat agent that uses tools and talks to an
OpenAI-compatible chat-completion API. The package needs only the standard
library.

## Modules

- `hermes_agent.messages` holds `Message`, `ToolCall`, `ToolFunction` and
  `ChatResponse`. Each has `to_dict()`. `Message` and `ToolCall` also have
  `from_dict()`, which raises `ValueError` when a required field is missing.
  `Message.to_dict()` leaves out optional fields that are unset.
- `hermes_agent.streaming`:
  - `iter_sse_payloads(chunk)` yields the JSON payload of each `data:` line in
    a chunk. It skips `[DONE]` and payloads that are not valid JSON.
  - `StreamAccumulator.feed(chunk)` returns the content tokens in a chunk. It
    also collects the content, the tool calls and `finish_reason`.
  - `StreamAccumulator.finish()` completes any tool call still pending and
    returns every tool call collected.
  - `wants_tools` tells whether the model asked for tools.
- `hermes_agent.compression`:
  - `ContextCompressor` has two methods. `should_compress(messages, context_limit)`
    is true when the estimated tokens exceed `threshold` (0.6) of the limit.
    `compress(messages)` returns `(messages, ratio_saved, tokens_saved)`.
  - Compression drops consecutive duplicate tool outputs and replaces tool
    outputs over 300 bytes with a one-line summary. It then thins out the
    middle of the conversation. The first `protect_head` messages, the last
    `protect_tail` messages and the last user message are kept.
  - After two compressions in a row that save less than 10%,
    `should_compress` returns false.
  - `estimate_tokens`, `message_tokens` and `tool_summary` are public as well.
- `hermes_agent.skill_commands` provides `SkillCommandRegistry`.
  - `reload()` scans a skills directory for `*.json` metadata files, each with
    an optional `name` and `aliases`. It returns how many it loaded.
  - `resolve("/name")` returns the text of the matching `<skill>.md`.
  - `list_commands()` returns a JSON listing.
  - The directory defaults to `get_skills_dir()`, which is
    `~/.hermes/skills`. It is created if it does not exist.
- `hermes_agent.local_tools`:
  - `execute_terminal(command, cwd)` runs a command through `sh -c`, or
    `cmd /C` on Windows.
  - `execute_file_read(path)` and `execute_file_write(path, content)` read and
    write a file. Writing creates missing parent directories.
  - `execute_list_directory(path)` lists a directory's entries in sorted
    order. If the directory cannot be read, it lists the current directory
    instead.
  - `tool_call_preview(name, arguments)` gives a short log rendering of a
    tool call.
  - All of these return text. Errors are described in that text; none is
    raised.
- `hermes_agent.retry_utils`:
  - `calculate_delay(attempt, config)` returns a `timedelta`. The delay is
    `base_delay_ms * 2**attempt`, capped at `max_delay_ms`, plus up to 25%
    random jitter unless the config was made with `without_jitter()`.
  - `RetryConfig` holds the settings.
  - `retry_with_backoff(config, func)` awaits `func()` and retries on any
    exception.
  - `retry_api_call(config, func)` retries only when the error message
    points to a network problem, a server error (500/502/503) or a rate limit
    (429/529).
- `hermes_agent.memory_nudge` provides `MemoryNudge`, `NudgeConfig` and
  `NudgeInjector`. They decide on which turns to remind the agent to save
  what it has learned. By default this is every 8 turns, at most 5 times per
  session, and only when there has been no memory activity in the last two
  turns.
- `hermes_agent.iteration` provides `IterationBudget`, a thread-safe count of
  iterations against a maximum.
- `hermes_agent.interrupt` provides `InterruptFlag`, a thread-safe stop flag.

## Installation

```
pip install .
pip install .[test]   # with pytest and pytest-asyncio
```

## Example

```python
from hermes_agent.messages import Message
from hermes_agent.streaming import StreamAccumulator
from hermes_agent.compression import ContextCompressor

acc = StreamAccumulator()
acc.feed(b'data: {"choices":[{"delta":{"content":"Hello"}}]}\n')
acc.feed(b'data: {"choices":[{"delta":{},"finish_reason":"stop"}]}\n')
tool_calls = acc.finish()
reply = Message(role="assistant", content=acc.content)

messages = [Message(role="user", content="hi"), reply]
compressor = ContextCompressor()
if compressor.should_compress(messages, 180_000):
    messages, ratio, saved = compressor.compress(messages)
```

## What the package does not do

The package does not send HTTP requests to model providers. Sending the
request and reading the stream is left to the caller; `StreamAccumulator`
parses what comes back.

It also does not provide:

- a driver for the conversation loop
- persistent memory storage
- a builder for the system prompt
- a classifier for provider errors
- a command-line program
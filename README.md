# logfmtlog

Format records from Python's standard `logging` module as logfmt lines, with
nested spans for context.

```
ts=2024-05-01T12:00:00.123456Z level=info target=app span=request span_path=server>request message="handled request" user=42
```

The package has no dependencies beyond the standard library.

## Installation

```
pip install logfmtlog
```

## Quick start

```python
import logging
import sys

from logfmtlog.builder import layer

logger = logging.getLogger("app")
logger.addHandler(layer(sys.stderr))
logger.setLevel(logging.INFO)

logger.info("started")
```

`layer(stream)` returns a `logging.StreamHandler` with the default
configuration. Without a stream it writes to `sys.stdout`.

## Configuring the output

Use the builder to choose which entries go into each line. Every `with_*`
method takes a bool and returns the builder, so the calls chain:

```python
import sys

from logfmtlog.builder import builder

handler = (
    builder()
    .with_timestamp(False)
    .with_span_path(False)
    .with_location(True)
    .with_module_path(True)
    .handler(sys.stdout)
)
```

| Option             | Default                      | Entry in the output                          |
|--------------------|------------------------------|----------------------------------------------|
| `with_timestamp`   | on                           | `ts`: UTC time of the record, in microseconds |
| `with_level`       | on                           | `level`                                      |
| `with_target`      | on                           | `target`: the logger name                    |
| `with_location`    | off                          | `location`: `pathname:lineno`                |
| `with_module_path` | off                          | `module_path`: the record's module name      |
| `with_span_name`   | on                           | `span`                                       |
| `with_span_path`   | on                           | `span_path`                                  |
| `with_ansi_color`  | on when stdout is a terminal | colours keys and the level                   |

Levels are written as `error`, `warn`, `info`, `debug`, and `trace` for
anything below `DEBUG`.

Every line ends with `message=...`, then any fields passed through `extra=`,
then the fields of the open spans.

To use the formatter with a handler you already have, call
`builder().formatter()` and pass the result to `handler.setFormatter(...)`.
You can also build `logfmtlog.formatter.EventsFormatter` directly; its keyword
arguments have the same names as the builder's methods.

## Spans

A span names a unit of work and can carry fields. Create one with
`logfmtlog.spans.span(name, **fields)`. Its parent is whichever span is current
when it is created. It becomes current inside a `with` block:

```python
from logfmtlog.spans import span

with span("server"):
    with span("request", method="GET"):
        logger.info("handled request", extra={"user": 42})
```

```
... span=request span_path=server>request message="handled request" user=42 method=GET
```

`span` is the innermost span's name. `span_path` joins the names from the
outermost span inward with `>`. The fields of every open span are appended,
outermost first. `current_span()` returns the innermost open span, or `None`.
The current span is held in a context variable, so it works across threads and
asyncio tasks.

To name and path a different span for one record, pass it as
`extra={"span": some_span}`. The fields appended at the end still come from the
current span.

## Quoting rules

A value is wrapped in double quotes when it contains a space, an ASCII control
character, `=` or `"`. Inside quotes, special characters are escaped, for
example `\n`, `\"`, `\\`, `\0` and `\u{1f}`. Integers, floats and booleans from
`extra=` or span fields are written unquoted, with booleans as `true`/`false`.
Any other object is written as its `repr()`.

Characters that would need quoting are dropped from keys. A key that ends up
empty raises `logfmtlog.serializer.InvalidKeyError`, which is a subclass of
`SerializerError`. In `EventsFormatter.format` this error propagates. When span
fields are formatted, output simply stops at the first invalid key.

The lower-level `logfmtlog.serializer.Serializer` writes key/value pairs by
itself:

```python
from logfmtlog.serializer import Serializer

s = Serializer(with_ansi_color=False)
s.serialize_entry("key", "value")
s.serialize_entry("note", "two words")
print(s.getvalue())   # key=value note="two words"
```

## What it does not do

logfmtlog is a library only. It has no command-line tool. It does not parse
logfmt back into records. Output goes wherever the `logging` handler you give
it writes.
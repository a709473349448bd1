# zaplog

Building blocks for fast, structured, leveled logging.

zaplog gives you the pieces a structured logger is made of:

- **Levels** (`zaplog.level`): the `Level` enumeration (debug, info, warn,
  error, dpanic, panic, fatal), `parse_level` for turning text into a level
  (the empty string means info; unknown names raise `ValueError`),
  `AtomicLevel` for a thread-safe level that can be changed at run time, and
  `LevelEnablerFunc` for deciding with a plain function. `level_flag` adds a
  `--<name>` level option to an `argparse` parser and returns an
  `AtomicLevel` that follows the parsed value.
- **A level endpoint** (`zaplog.http_handler`): `LevelHandler` is a WSGI
  application that reports the current level of an `AtomicLevel` on `GET`
  and changes it on `PUT` with a body such as `{"level": "warn"}`. Malformed
  bodies get `400 Bad Request`; other methods get `405 Method Not Allowed`.
  Every response is a one-line JSON object.
- **Typed fields** (`zaplog.field`, `zaplog.arrays`, `zaplog.errors`,
  `zaplog.anyfield`): `Field` and `FieldType`, constructors such as
  `string`, `integer`, `boolean`, `float64`, `duration`, `timestamp`,
  `object`, their sequence counterparts (`strings`, `ints`, `bools`, ...,
  built on `TypedArray`), `error` / `named_error` / `errors` for exceptions
  (`None` gives a no-op field), and `any_field`, which picks the most
  specific field type for a value and falls back to `reflect`.
- **Encoder registry** (`zaplog.encoder`): `EncoderRegistry`, plus
  `register_encoder` and `new_encoder` for a process-wide registry of named
  encoder constructors. Empty names and duplicate registrations raise errors.
- **Buffers** (`zaplog.buffer`): a pooled, append-only `Buffer` with
  integer, boolean and float formatting; `Pool` hands out and takes back
  buffers, and `get_buffer()` takes one from the shared pool.
- **Helpers**: `zaplog.color.Color` wraps text in ANSI colour codes,
  `zaplog.exit` lets tests intercept process exit (`stub`, `with_stub`,
  `StubbedExit`), and `zaplog.ztest` offers spy writers (`Discarder`,
  `FailWriter`, `ShortWriter`, `Buffer`) and timeouts scaled by the
  `TEST_TIMEOUT_SCALE` environment variable.

## Installation

```
pip install zaplog
```

## Examples

Fields are plain values for an encoder to serialize:

```python
from zaplog import field, arrays, anyfield

fields = [
    field.string("url", "http://example.com"),
    field.integer("attempt", 3),
    arrays.strings("tags", ["a", "b"]),
    anyfield.any_field("ratio", 0.5),
]
```

A shared level can be changed while the program runs:

```python
from zaplog.level import AtomicLevel, Level

lvl = AtomicLevel()
lvl.unmarshal_text("warn")
assert lvl.enabled(Level.ERROR)
assert not lvl.enabled(Level.INFO)
print(lvl.marshal_text())   # b'warn'
```

Colouring terminal output:

```python
from zaplog.color import Color

print(Color.RED.add("failed"))
```

## Benchmark tables

The `zaplog-readme` command reads a template on standard input, replaces
each `{{.BenchmarkAddingFields}}`, `{{.BenchmarkAccumulatedContext}}` and
`{{.BenchmarkWithoutFields}}` with a Markdown table, and writes the result to
standard output. The tables are built by running
`go test -bench=<name> -benchmem ./benchmarks` in the current directory, so
that toolchain and a `benchmarks` directory must be present.

```
zaplog-readme < README.tmpl > README.out
```

## What this package does not do

zaplog has no logger that writes entries, no log cores, sinks or
configuration loader, and it ships no encoders: the encoder registry starts
empty, and you register your own constructors with `register_encoder`.

## Running the tests

```
pip install "zaplog[test]"
pytest
```
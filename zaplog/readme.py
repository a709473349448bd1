"""Regenerate the README's benchmark tables from ``go test -bench`` output.

A template read from standard input is filled in with Markdown tables built
from benchmark runs and written to standard output.
"""

from __future__ import annotations

import argparse
import math
import re
import subprocess
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

LIBRARY_NAME_TO_MARKDOWN_NAME: dict[str, str] = {
    "Zap": ":zap: zap",
    "Zap.Sugar": ":zap: zap (sugared)",
    "stdlib.Println": "standard library",
    "sirupsen/logrus": "logrus",
    "go-kit/kit/log": "go-kit",
    "inconshreveable/log15": "log15",
    "apex/log": "apex/log",
    "rs/zerolog": "zerolog",
}

BENCHMARK_NAMES = (
    "BenchmarkAddingFields",
    "BenchmarkAccumulatedContext",
    "BenchmarkWithoutFields",
)

TABLE_HEADER = (
    "| Package | Time | Time % to zap | Objects Allocated |",
    "| :------ | :--: | :-----------: | :---------------: |",
)

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_COMPONENT = r"(\d+(?:\.\d*)?|\.\d+)([^\d.]+)"
_DURATION_RE = re.compile(f"(?:{_COMPONENT})+")
_COMPONENT_RE = re.compile(_COMPONENT)
_INT64_MAX = (1 << 63) - 1
_ATOI_RE = re.compile(r"[+-]?\d+")
_ACTION_RE = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_FIELD_RE = re.compile(r"\s*\.(\w+)\s*")
_COMMENT_RE = re.compile(r"\s*/\*.*\*/\s*", re.DOTALL)


def parse_duration(text: str) -> int:
    """Parse a duration such as ``"1.5ms"`` or ``"1h2m"`` into nanoseconds."""
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest or not _DURATION_RE.fullmatch(rest):
        raise ValueError(f'invalid duration "{text}"')
    total = Decimal(0)
    for number, unit in _COMPONENT_RE.findall(rest):
        try:
            scale = _UNIT_NANOS[unit]
        except KeyError:
            raise ValueError(f'unknown unit "{unit}" in duration "{text}"') from None
        total += Decimal(number) * scale
    nanos = int(total)
    if nanos > _INT64_MAX:
        raise ValueError(f'invalid duration "{text}"')
    return -nanos if negative else nanos


def _atoi(text: str) -> int:
    if not _ATOI_RE.fullmatch(text):
        raise ValueError(f'invalid integer "{text}"')
    return int(text)


def _percent(value: int, baseline: int) -> str:
    if baseline == 0:
        if value > 0:
            return "+Inf%"
        if value < 0:
            return "-Inf%"
        return "+NaN%"
    change = (value / baseline) * 100 - 100
    return f"{change:+.0f}%"


@dataclass
class BenchmarkRow:
    """One library's result in a benchmark, with zap's result as baseline."""

    name: str
    time: int = 0
    allocated_bytes: int = 0
    allocated_objects: int = 0
    zap_time: int = 0
    zap_allocated_bytes: int = 0
    zap_allocated_objects: int = 0

    @property
    def is_zap(self) -> bool:
        return "zap" in self.name

    def __str__(self) -> str:
        return (
            f"| {self.name} | {self.time} ns/op | "
            f"{_percent(self.time, self.zap_time)} | "
            f"{self.allocated_objects} allocs/op"
        )


def find_unique_substring(lines: Iterable[str], substring: str) -> str:
    """Return the one line containing ``substring``, or ``""`` if none does.

    Raises ValueError if more than one line contains it.
    """
    found = ""
    for line in lines:
        if substring in line:
            if found:
                raise ValueError(f"input has duplicate substring {substring}")
            found = line
    return found


def get_benchmark_row(
    lines: Sequence[str],
    benchmark_name: str,
    library_name: str,
    baseline: BenchmarkRow | None,
) -> BenchmarkRow | None:
    """Parse one library's result line; ``None`` if the library did not run."""
    line = find_unique_substring(lines, f"{benchmark_name}/{library_name}-")
    if not line:
        return None
    parts = line.split("\t")
    if len(parts) < 5:
        raise ValueError(f"unknown benchmark line: {line}")
    time_text = parts[2].strip().removesuffix("/op").replace(" ", "")
    row = BenchmarkRow(
        name=LIBRARY_NAME_TO_MARKDOWN_NAME.get(library_name, ""),
        time=parse_duration(time_text),
        allocated_bytes=_atoi(parts[3].strip().removesuffix(" B/op")),
        allocated_objects=_atoi(parts[4].strip().removesuffix(" allocs/op")),
    )
    if baseline is not None:
        row.zap_time = baseline.time
        row.zap_allocated_bytes = baseline.allocated_bytes
        row.zap_allocated_objects = baseline.allocated_objects
    return row


def sort_rows(rows: Iterable[BenchmarkRow]) -> list[BenchmarkRow]:
    """Order rows with zap's first, each part by ascending time."""
    return sorted(rows, key=lambda row: (not row.is_zap, row.time))


def get_benchmark_output(benchmark_name: str) -> list[str]:
    """Run one benchmark with ``go test`` and return its output lines."""
    args = ["test", f"-bench={benchmark_name}", "-benchmem", "./benchmarks"]
    try:
        result = subprocess.run(
            ["go", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"error running go {' '.join(args)}: {exc}\n") from exc
    output = result.stdout or ""
    if result.returncode != 0:
        raise RuntimeError(
            f"error running go {' '.join(args)}: "
            f"exit status {result.returncode}\n{output}"
        )
    return output.split("\n")


def _format_rows(lines: Sequence[str], benchmark_name: str) -> str:
    baseline = get_benchmark_row(lines, benchmark_name, "Zap", None)
    rows = [
        row
        for library in LIBRARY_NAME_TO_MARKDOWN_NAME
        if (row := get_benchmark_row(lines, benchmark_name, library, baseline))
        is not None
    ]
    return "\n".join([*TABLE_HEADER, *(str(row) for row in sort_rows(rows))])


def get_benchmark_rows(benchmark_name: str) -> str:
    """Run a benchmark and format its results as a Markdown table."""
    return _format_rows(get_benchmark_output(benchmark_name), benchmark_name)


def render_template(template: str, data: Mapping[str, object]) -> str:
    """Replace each ``{{.Name}}`` in ``template`` with ``data["Name"]``.

    Comments (``{{/* ... */}}``) are dropped; any other action, or a name
    missing from ``data``, raises ValueError.
    """

    def replace(match: re.Match) -> str:
        action = match.group(1)
        if _COMMENT_RE.fullmatch(action):
            return ""
        field = _FIELD_RE.fullmatch(action)
        if field is None:
            raise ValueError(f"unsupported template action: {{{{{action}}}}}")
        name = field.group(1)
        if name not in data:
            raise ValueError(f"can't evaluate field {name}")
        return str(data[name])

    return _ACTION_RE.sub(replace, template)


def main(argv: Sequence[str] | None = None) -> int:
    """Read a template on stdin and write it filled with benchmark tables."""
    parser = argparse.ArgumentParser(
        description="Fill a README template with benchmark tables."
    )
    parser.parse_args(argv)
    try:
        data = {name: get_benchmark_rows(name) for name in BENCHMARK_NAMES}
        template = sys.stdin.read()
        sys.stdout.write(render_template(template, data))
    except (OSError, RuntimeError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
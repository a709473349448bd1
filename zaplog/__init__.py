"""Structured, leveled logging building blocks: levels, typed fields, an encoder registry and buffers."""

__version__ = "0.1.0"

__all__ = [
    "anyfield",
    "arrays",
    "buffer",
    "color",
    "encoder",
    "errors",
    "exit",
    "field",
    "http_handler",
    "level",
    "readme",
    "ztest",
]
"""A WSGI endpoint that reports or changes an AtomicLevel."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable

from zaplog.level import AtomicLevel, parse_level

_STATUS = {
    200: "200 OK",
    400: "400 Bad Request",
    405: "405 Method Not Allowed",
}


class LevelHandler:
    """Serve GET (report) and PUT (change) requests for a logging level.

    PUT requests expect a payload like ``{"level":"info"}``.
    """

    def __init__(self, level: AtomicLevel) -> None:
        self.level = level

    def __call__(
        self, environ: dict[str, Any], start_response: Callable
    ) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        if method == "GET":
            return self._respond(start_response, 200, {"level": str(self.level)})
        if method == "PUT":
            try:
                new_level = self._read_level(environ)
            except ValueError as exc:
                return self._respond(start_response, 400, {"error": str(exc)})
            self.level.level = new_level
            return self._respond(start_response, 200, {"level": str(new_level)})
        return self._respond(
            start_response, 405, {"error": "Only GET and PUT are supported."}
        )

    @staticmethod
    def _read_level(environ: dict[str, Any]):
        stream = environ.get("wsgi.input")
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        raw = stream.read(length) if stream is not None and length > 0 else b""
        text = raw.decode("utf-8", errors="replace").lstrip()
        try:
            payload, _ = json.JSONDecoder().raw_decode(text)
            if not isinstance(payload, dict):
                raise ValueError("expected a JSON object")
            value = payload.get("level")
            if value is None:
                return None
            if not isinstance(value, str):
                raise ValueError("level must be a string")
            level = parse_level(value)
        except ValueError as exc:
            raise ValueError(
                f"Request body must be well-formed JSON: {exc}"
            ) from exc
        if level is None:
            raise ValueError("Must specify a logging level.")
        return level

    @staticmethod
    def _respond(start_response: Callable, code: int, payload: dict) -> list[bytes]:
        body = (json.dumps(payload, separators=(",", ":")) + "\n").encode("utf-8")
        start_response(
            _STATUS[code],
            [
                ("Content-Type", "application/json"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]
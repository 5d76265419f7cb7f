"""Homogeneous JSON envelopes: {ok: true, data} and {ok: false, error}."""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


def success(data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse({"ok": True, "data": [] if data is None else data}, status_code=status_code)


def failure(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"ok": False, "error": message}, status_code=status_code)

# backend/climacare/core/api.py
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence
from fastapi.responses import JSONResponse

# UTF-8 charset em todas as respostas JSON
class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"

def list_meta(items: Optional[Sequence[Any]] = None, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    if items is not None:
        meta["count"] = len(items)
    if extra:
        meta.update(extra)
    return meta

def ok(
    data: Any = True,
    meta: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    message: Optional[str] = None,
):
    payload: Dict[str, Any] = {"success": True, "data": data}
    if message:
        payload["message"] = message
    if meta:
        payload["meta"] = meta
    return UTF8JSONResponse(content=payload, status_code=status_code)

def fail(error: str, status_code: int = 400, meta: Optional[Dict[str, Any]] = None):
    payload: Dict[str, Any] = {"success": False, "error": error}
    if meta:
        payload["meta"] = meta
    return UTF8JSONResponse(content=payload, status_code=status_code)

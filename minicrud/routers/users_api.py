"""
Single JSON endpoint dispatching on the ``action`` parameter.

    GET  /api?action=list
    POST /api?action=create   {"nombre": "...", "email": "..."}
    POST /api?action=delete   {"index": 0}
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from minicrud.core.responses import success
from minicrud.services.user_service import (
    InvalidActionError,
    MethodNotAllowedError,
    UserService,
)

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)

ACTION_METHODS = {"list": "GET", "create": "POST", "delete": "POST"}
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService no configurado")
    return svc


async def _read_payload(request: Request) -> dict:
    """JSON object body, or form fields; anything unparseable counts as {}."""
    if request.method in ("GET", "HEAD"):
        return {}
    content_type = (request.headers.get("content-type") or "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items()}
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        logger.debug("Ignoring malformed JSON body")
        return {}
    return data if isinstance(data, dict) else {}


def resolve_action(request: Request, payload: dict) -> str:
    action = request.query_params.get("action")
    if action is None:
        body_action = payload.get("action")
        action = body_action if isinstance(body_action, str) else "list"
    return action


def check_action(method: str, action: str) -> None:
    """Raise unless (method, action) is one of the supported combinations."""
    expected = ACTION_METHODS.get(action)
    if expected is None:
        raise InvalidActionError(action)
    if method != expected:
        raise MethodNotAllowedError(method, action)


@router.api_route("/api", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def users_api(request: Request):
    payload = await _read_payload(request)
    action = resolve_action(request, payload)
    method = request.method.upper()

    check_action(method, action)

    svc = _get_user_service(request)
    if action == "list":
        return success(await run_in_threadpool(svc.list_users))
    if action == "create":
        nombre = payload.get("nombre", payload.get("name"))
        records = await run_in_threadpool(svc.create_user, nombre, payload.get("email"))
        return success(records, status_code=201)
    return success(await run_in_threadpool(svc.delete_user, payload.get("index")))

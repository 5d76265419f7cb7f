from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

router = APIRouter(prefix="", tags=["pages"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates no configurados")


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    templates = _templates(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"api_url": request.app.url_path_for("users_api")},
    )


@router.get("/favicon.ico")
def favicon():
    return Response(status_code=204)

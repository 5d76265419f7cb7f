"""
FastAPI routers grouped by concern (JSON API, HTML pages).

Each file inside this package exposes an APIRouter that is included in the
main application (app.py).
"""

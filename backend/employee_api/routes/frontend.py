"""
Employee API: Frontend Static Files
=====================================

Serves the pre-built single-page frontend from settings.frontend_dir.
Registered last so every API route takes precedence. The catch-all also
accepts non-GET methods, so a miss under /api is answered here: 405 when
another route owns the path, 404 otherwise.

    GET /                 → index.html
    GET /main.js          → frontend_dir/main.js (if it exists)
    GET /employees/42     → index.html (client-side routing)
    GET /api/unknown      → 404 {"success": false, "message": "API endpoint not found"}
    PATCH /api/employees  → 405 {"success": false, "message": "Method not allowed"}
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.routing import Match

from employee_api.exceptions import NotFoundError
from employee_api.responses import error_body

router = APIRouter(tags=["Frontend"], include_in_schema=False)

CATCH_ALL_PATH = "/{full_path:path}"
API_NOT_FOUND_MESSAGE = "API endpoint not found"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


def resolve_frontend_file(root: Path, requested: str) -> Path:
    """
    Map a request path to a file under `root`.

    Falls back to index.html for anything that is not an existing file
    inside the frontend directory, including attempts to escape it with "..".
    """
    root = root.resolve()
    if requested:
        candidate = (root / requested).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate
    return root / "index.html"


def _path_served_by_other_route(request: Request) -> bool:
    for route in request.app.router.routes:
        if getattr(route, "path", None) == CATCH_ALL_PATH:
            continue
        match, _ = route.matches(request.scope)
        if match != Match.NONE:
            return True
    return False


@router.api_route(CATCH_ALL_PATH, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def serve_frontend(full_path: str, request: Request):
    if full_path == "api" or full_path.startswith("api/"):
        if _path_served_by_other_route(request):
            return JSONResponse(status_code=405, content=error_body(METHOD_NOT_ALLOWED_MESSAGE))
        return JSONResponse(status_code=404, content=error_body(API_NOT_FOUND_MESSAGE))
    if request.method != "GET":
        return JSONResponse(status_code=404, content=error_body("Not found"))

    root = Path(request.app.state.settings.frontend_dir)
    target = resolve_frontend_file(root, full_path)
    if not target.is_file():
        raise NotFoundError(resource="Frontend", resource_id=str(root))
    return FileResponse(path=str(target))

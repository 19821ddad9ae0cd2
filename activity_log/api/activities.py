"""
Activities Endpoint

One resource path, dispatched on HTTP method:

    GET     -> list active activities
    POST    -> create an activity
    DELETE  -> archive one activity ({"id": ...}) or all ({"clearAll": true})

Every response body carries a `success` flag. Storage failures are caught
here and turned into 500 responses; nothing escapes the handler.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from activity_log.audit.logger import AuditLogger, get_logger
from activity_log.models.activity import ActivityInput
from activity_log.services.storage.interface import ActivityStorageInterface


ACTIVITIES_PATH = "/api/activities"
ALLOWED_METHODS = ("GET", "POST", "DELETE")
REQUIRED_FIELDS = ("date", "time", "category")

router = APIRouter()
logger = get_logger(__name__)


def get_activity_storage(request: Request) -> ActivityStorageInterface:
    """Storage built once at startup and shared by all requests."""
    return request.app.state.storage


def get_audit_logger(request: Request) -> AuditLogger:
    return request.app.state.audit_logger


def _ok(status_code: int, **content: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, **content})


def _fail(
    status_code: int,
    error: str,
    headers: Optional[dict[str, str]] = None,
    **content: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, **content},
        headers=headers,
    )


def method_not_allowed(method: str) -> JSONResponse:
    """405 for any method outside GET, POST and DELETE."""
    return _fail(
        405,
        f"Method {method.upper()} not allowed",
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
    )


async def _read_json_object(request: Request) -> Optional[dict]:
    """Parse the body as a JSON object; None if it is anything else."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _missing_fields(body: dict) -> list[str]:
    return [name for name in REQUIRED_FIELDS if _is_blank(body.get(name))]


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


async def _list_activities(storage: ActivityStorageInterface) -> JSONResponse:
    activities = await storage.get_activities()
    return _ok(200, data=[a.model_dump() for a in activities])


async def _create_activity(
    request: Request,
    storage: ActivityStorageInterface,
    audit: AuditLogger,
) -> JSONResponse:
    body = await _read_json_object(request)
    if body is None:
        return _fail(400, "Request body must be a JSON object")

    missing = _missing_fields(body)
    if missing:
        return _fail(
            400,
            f"Date, time and category are required (missing: {', '.join(missing)})",
        )

    try:
        activity = ActivityInput(
            date=body.get("date"),
            time=body.get("time"),
            category=body.get("category"),
            note=body.get("note"),
            amount=body.get("amount"),
        )
    except ValidationError as e:
        return _fail(400, _validation_message(e))

    if not activity.is_known_category:
        logger.warning("unknown_category", category=activity.category)

    created = await storage.create_activity(activity)
    audit.log_activity_created(
        activity_id=created.get("id") if isinstance(created, dict) else None,
        date=activity.date,
        category=activity.category,
        amount=activity.amount,
    )
    return _ok(201, message="Activity added")


async def _delete_activities(
    request: Request,
    storage: ActivityStorageInterface,
    audit: AuditLogger,
) -> JSONResponse:
    body = await _read_json_object(request)
    if body is None:
        return _fail(400, "Request body must be a JSON object")

    if body.get("clearAll") is True:
        result = await storage.clear_all_activities()
        audit.log_activities_cleared(result.archived_count)
        return _ok(
            200,
            message="All activities deleted",
            archived=result.archived_count,
        )

    activity_id = body.get("id")
    if isinstance(activity_id, str) and activity_id.strip():
        await storage.delete_activity(activity_id.strip())
        audit.log_activity_deleted(activity_id.strip())
        return _ok(200, message="Activity deleted")

    return _fail(400, "Invalid id: provide an id or clearAll: true")


@router.api_route(
    ACTIVITIES_PATH,
    methods=["GET", "POST", "DELETE", "PUT", "PATCH", "HEAD", "OPTIONS"],
)
async def activities_endpoint(
    request: Request,
    storage: ActivityStorageInterface = Depends(get_activity_storage),
    audit: AuditLogger = Depends(get_audit_logger),
) -> JSONResponse:
    """Dispatch on method to the storage operations."""
    method = request.method.upper()

    if method not in ALLOWED_METHODS:
        return method_not_allowed(method)

    try:
        if method == "GET":
            return await _list_activities(storage)
        if method == "POST":
            return await _create_activity(request, storage, audit)
        return await _delete_activities(request, storage, audit)
    except Exception as e:
        logger.exception("api_error", method=method)
        audit.log_request_failed(
            method=method,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return _fail(500, "server error", details=str(e))

"""FastAPI wrapper for versus import and the fight library."""

from __future__ import annotations

import dataclasses
import importlib.metadata
import json
import logging
import time
import uuid
from typing import Annotated, Any

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from apps.cli.io import to_data_url
from core.config.loader import resolve_settings
from core.config.models import EngineSettings
from core.importer.models import FightRecord, ParsedImport
from core.orchestrator.pipeline import (
    build_active_fight,
    build_import_preview,
    fight_view_payload,
    require_import,
)
from core.storage.library import FightLibrary
from core.storage.store import JsonFileFightStore, JsonFileLegacySource
from core.templates.blueprint import build_import_blueprint
from core.templates.catalog import DEFAULT_TEMPLATE_ORDER, TEMPLATE_PRESETS
from core.utils.errors import (
    FightNotFoundError,
    ImportFailedError,
    SettingsError,
    StoreError,
)

app = FastAPI(title="versus-vault API", version="0.1.0")
logger = logging.getLogger("versus.api")

REQUEST_ID_HEADER = "X-Versus-Request-Id"
_DOCUMENT_SUFFIX = ".txt"


class ApiRequestError(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail or {}


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Ensure every response has a request id header."""

    request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            failure_stage="middleware",
        )
        response = _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
            detail={"path": request.url.path},
        )
    response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/v1/meta")
async def meta_v1(request: Request) -> JSONResponse:
    """Template catalog and default order for bootstrap clients."""

    request_id = _request_id_from_request(request)
    payload = {
        "templates": [dataclasses.asdict(preset) for preset in TEMPLATE_PRESETS],
        "default_template_order": list(DEFAULT_TEMPLATE_ORDER),
        "version": _package_version(),
    }
    return JSONResponse(status_code=200, headers={REQUEST_ID_HEADER: request_id}, content=payload)


@app.get("/v1/blueprint")
async def blueprint_v1(request: Request) -> PlainTextResponse:
    """Example import document covering every template block."""

    request_id = _request_id_from_request(request)
    return PlainTextResponse(build_import_blueprint(), headers={REQUEST_ID_HEADER: request_id})


@app.post("/v1/import", response_model=None)
async def import_v1(
    request: Request,
    document: Annotated[UploadFile, File(...)],
) -> JSONResponse:
    """Parse one uploaded document without storing it."""

    request_started = time.perf_counter()
    request_id = _request_id_from_request(request)
    failure_stage = "init"

    try:
        failure_stage = "load_settings"
        settings = _load_settings()
        failure_stage = "read_document"
        file_name, raw = _read_document_upload(document, settings.max_upload_bytes)
        failure_stage = "parse"
        parsed = _parse_document(raw, file_name)
        preview = build_import_preview(parsed, settings)
    except (ApiRequestError, StoreError) as exc:
        return _failure_response(exc, request_id, failure_stage)

    _log_event(
        logging.INFO,
        "import",
        request_id,
        file_name=file_name,
        category_count=len(preview.categories),
        total_ms=_elapsed_ms(request_started),
    )
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content=preview.to_json(),
    )


@app.get("/v1/fights", response_model=None)
async def list_fights_v1(request: Request) -> JSONResponse:
    """Stored fights, newest first."""

    request_id = _request_id_from_request(request)
    try:
        library = await _open_library(_load_settings())
    except (ApiRequestError, StoreError) as exc:
        return _failure_response(exc, request_id, "restore")

    payload = {
        "fights": [_fight_summary(fight) for fight in library.fights],
        "active_fight_id": library.active_fight_id,
    }
    return JSONResponse(status_code=200, headers={REQUEST_ID_HEADER: request_id}, content=payload)


@app.post("/v1/fights", response_model=None)
async def create_fight_v1(
    request: Request,
    document: Annotated[UploadFile, File(...)],
    portrait_a: Annotated[UploadFile, File(...)],
    portrait_b: Annotated[UploadFile, File(...)],
) -> JSONResponse:
    """Import a document with both portraits into the library."""

    request_id = _request_id_from_request(request)
    failure_stage = "init"

    try:
        failure_stage = "load_settings"
        settings = _load_settings()
        failure_stage = "read_document"
        file_name, raw = _read_document_upload(document, settings.max_upload_bytes)
        failure_stage = "read_portraits"
        portrait_a_url = _read_portrait_upload(portrait_a, "portrait_a", settings.max_upload_bytes)
        portrait_b_url = _read_portrait_upload(portrait_b, "portrait_b", settings.max_upload_bytes)
        failure_stage = "parse"
        parsed = _parse_document(raw, file_name)
        failure_stage = "store"
        library = await _open_library(settings)
        fight = await library.create_from_draft(
            parsed,
            file_name=file_name,
            portrait_a=portrait_a_url,
            portrait_b=portrait_b_url,
        )
        await library.set_active(fight.id)
    except (ApiRequestError, StoreError) as exc:
        return _failure_response(exc, request_id, failure_stage)

    _log_event(logging.INFO, "fight_created", request_id, fight_id=fight.id)
    return JSONResponse(
        status_code=201,
        headers={REQUEST_ID_HEADER: request_id},
        content=_fight_summary(fight),
    )


@app.get("/v1/fights/{fight_id}", response_model=None)
async def get_fight_v1(request: Request, fight_id: str) -> JSONResponse:
    """Render-ready view of one stored fight, by id or name."""

    request_id = _request_id_from_request(request)
    failure_stage = "restore"
    try:
        settings = _load_settings()
        library = await _open_library(settings)
        failure_stage = "resolve"
        record = _resolve_fight(library, fight_id)
    except (ApiRequestError, StoreError) as exc:
        return _failure_response(exc, request_id, failure_stage)

    payload = fight_view_payload(build_active_fight(record, settings))
    return JSONResponse(status_code=200, headers={REQUEST_ID_HEADER: request_id}, content=payload)


@app.delete("/v1/fights/{fight_id}", response_model=None)
async def delete_fight_v1(request: Request, fight_id: str) -> JSONResponse:
    request_id = _request_id_from_request(request)
    try:
        library = await _open_library(_load_settings())
        deleted = await library.delete(fight_id)
        if not deleted:
            raise ApiRequestError(
                status_code=404,
                error_code="FIGHT_NOT_FOUND",
                message="fight not found",
                detail={"fight_id": fight_id},
            )
    except (ApiRequestError, StoreError) as exc:
        return _failure_response(exc, request_id, "delete")

    _log_event(logging.INFO, "fight_deleted", request_id, fight_id=fight_id)
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content={"deleted": fight_id},
    )


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    generated = uuid.uuid4().hex
    request.state.request_id = generated
    return generated


def _load_settings() -> EngineSettings:
    try:
        return resolve_settings()
    except SettingsError as exc:
        raise ApiRequestError(
            status_code=500,
            error_code="SETTINGS_ERROR",
            message="invalid server settings",
            detail={"error": str(exc)},
        ) from exc


async def _open_library(settings: EngineSettings) -> FightLibrary:
    legacy = (
        JsonFileLegacySource(settings.legacy_store_path)
        if settings.legacy_store_path is not None
        else None
    )
    library = FightLibrary(JsonFileFightStore(settings.store_path), legacy)
    await library.restore()
    return library


def _resolve_fight(library: FightLibrary, fight_id: str) -> FightRecord:
    try:
        return library.resolve(fight_id)
    except FightNotFoundError as exc:
        raise ApiRequestError(
            status_code=404,
            error_code="FIGHT_NOT_FOUND",
            message="fight not found",
            detail={"fight_id": exc.query},
        ) from exc


def _parse_document(raw: str, file_name: str) -> ParsedImport:
    try:
        return require_import(raw, file_name)
    except ImportFailedError as exc:
        raise ApiRequestError(
            status_code=422,
            error_code="IMPORT_FAILED",
            message=str(exc),
            detail={"file_name": exc.file_name, "issue": exc.issue.model_dump(mode="json")},
        ) from exc


def _read_document_upload(upload: UploadFile, max_bytes: int) -> tuple[str, str]:
    _validate_upload_name(upload.filename, expected_suffix=_DOCUMENT_SUFFIX, field_name="document")
    content = _read_upload_with_limit(upload=upload, max_bytes=max_bytes, field_name="document")
    try:
        raw = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_DOCUMENT_ENCODING",
            message="document must be UTF-8 text",
            detail={"field": "document", "filename": upload.filename},
        ) from exc
    return upload.filename or "", raw


def _read_portrait_upload(upload: UploadFile, field_name: str, max_bytes: int) -> str:
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise ApiRequestError(
            status_code=415,
            error_code="INVALID_MEDIA_TYPE",
            message=f"{field_name} must be an image",
            detail={"field": field_name, "content_type": content_type},
        )
    content = _read_upload_with_limit(upload=upload, max_bytes=max_bytes, field_name=field_name)
    if not content:
        raise ApiRequestError(
            status_code=400,
            error_code="EMPTY_UPLOAD",
            message=f"{field_name} is empty",
            detail={"field": field_name},
        )
    return to_data_url(content, content_type)


def _validate_upload_name(filename: str | None, *, expected_suffix: str, field_name: str) -> None:
    if filename is None or not filename.lower().endswith(expected_suffix):
        raise ApiRequestError(
            status_code=415,
            error_code="INVALID_MEDIA_TYPE",
            message=f"{field_name} must be a {expected_suffix} file",
            detail={"field": field_name, "filename": filename},
        )


def _read_upload_with_limit(*, upload: UploadFile, max_bytes: int, field_name: str) -> bytes:
    chunks: list[bytes] = []
    total_size = 0

    source = upload.file
    source.seek(0)

    while True:
        chunk = source.read(1024 * 1024)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_bytes:
            raise ApiRequestError(
                status_code=413,
                error_code="UPLOAD_TOO_LARGE",
                message=f"{field_name} exceeds upload size limit",
                detail={
                    "field": field_name,
                    "max_bytes": max_bytes,
                    "received_bytes": total_size,
                },
            )
        chunks.append(chunk)

    source.close()
    return b"".join(chunks)


def _fight_summary(fight: FightRecord) -> dict[str, Any]:
    return {
        "id": fight.id,
        "name": fight.name,
        "fileName": fight.file_name,
        "createdAt": fight.created_at,
        "fighterAName": fight.payload.fighter_a_name,
        "fighterBName": fight.payload.fighter_b_name,
    }


def _failure_response(
    exc: ApiRequestError | StoreError, request_id: str, failure_stage: str
) -> JSONResponse:
    if isinstance(exc, StoreError):
        exc = ApiRequestError(
            status_code=500,
            error_code="STORE_ERROR",
            message="fight store unreadable",
            detail={"error": str(exc)},
        )
    _log_event(
        logging.ERROR,
        "error",
        request_id,
        error_code=exc.error_code,
        status_code=exc.status_code,
        failure_stage=failure_stage,
    )
    return _error_response(
        status_code=exc.status_code,
        error_code=exc.error_code,
        message=exc.message,
        request_id=request_id,
        detail=exc.detail,
    )


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _package_version() -> str:
    try:
        return importlib.metadata.version("versus-vault")
    except importlib.metadata.PackageNotFoundError:
        return app.version


def _error_response(
    *,
    status_code: int,
    error_code: str,
    message: str,
    request_id: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    payload_detail = dict(detail or {})
    payload_detail["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        headers={REQUEST_ID_HEADER: request_id},
        content={
            "error_code": error_code,
            "message": message,
            "detail": payload_detail,
        },
    )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _log_event(level: int, event: str, request_id: str, **fields: Any) -> None:
    payload = {
        "event": event,
        "request_id": request_id,
        **fields,
    }
    logger.log(level, _dump_json(payload))

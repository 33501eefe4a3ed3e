"""Bulk import and export endpoints for a subject's credentials.

Authentication happens upstream: the gateway forwards the verified subject in
``X-Subject-Id``. The master passphrase travels only in the request that needs
it and is never logged or stored.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from safepass.core.exceptions import (
    MalformedInputError,
    NothingToExportError,
    PersistenceFailureError,
    UnsupportedFormatError,
)

router = APIRouter(tags=["passwords"])


def get_subject_id(x_subject_id: Optional[str] = Header(default=None)) -> str:
    if not x_subject_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing subject")
    return x_subject_id


def _extension_of(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1]


@router.post("/import")
async def import_passwords(
    request: Request,
    file: UploadFile = File(...),
    passphrase: Optional[str] = Form(default=None),
    subject_id: str = Depends(get_subject_id),
) -> dict[str, Any]:
    """Import a csv, xlsx, xlsm or xml export into the caller's vault."""
    settings = request.app.state.settings
    data = await file.read(settings.importer.max_upload_bytes + 1)
    if len(data) > settings.importer.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {settings.importer.max_upload_bytes} bytes",
        )

    pipeline = request.app.state.import_pipeline
    try:
        result = await run_in_threadpool(
            pipeline.run, data, _extension_of(file.filename), subject_id, passphrase,
        )
    except UnsupportedFormatError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported file format")
    except MalformedInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Error importing file: {exc}")
    except PersistenceFailureError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "imported": exc.imported_count},
        )

    response: dict[str, Any] = {
        "message": f"Successfully imported {result.imported_count} passwords",
        "imported": result.imported_count,
    }
    if result.warnings:
        response["warnings"] = [w.model_dump(mode="json") for w in result.warnings]
        response["warning_message"] = (
            f"{result.plaintext_count} plaintext passwords detected in the import file."
        )
    return response


@router.get("/export")
async def export_passwords(
    request: Request,
    format: str = Query(default="csv"),
    x_vault_passphrase: Optional[str] = Header(default=None),
    subject_id: str = Depends(get_subject_id),
) -> Response:
    """Download every credential of the caller as csv, xlsx, xlsm or xml."""
    service = request.app.state.export_service
    try:
        export = await run_in_threadpool(service.export, subject_id, format, x_vault_passphrase)
    except UnsupportedFormatError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported export format")
    except NothingToExportError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No passwords to export")

    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )

from __future__ import annotations

import logging
import re
from typing import Any

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from ..deps import get_settings_service
from ..services.settings import (
    SETTINGS_SCHEMA,
    FieldKind,
    WalletAuthSettingsService,
    build_form,
    export_settings,
    import_settings,
)


router = APIRouter()
log = logging.getLogger(__name__)

SETTINGS_PATH = "/admin/config/wallet-auth"
MAX_SETTINGS_IMPORT_BYTES = 64 * 1024

_MULTI_KEYS = [f.key for f in SETTINGS_SCHEMA if f.kind is FieldKind.ENUM_MULTI]
_CHECKBOX_KEYS = [f.key for f in SETTINGS_SCHEMA if f.kind is FieldKind.BOOLEAN]
_GROUP_ITEM = re.compile(r"^([a-z_]+)\[([A-Za-z0-9_-]+)\]$")


def _raw_from_form(form) -> dict[str, Any]:
    """Turn a posted HTML form into the raw mapping the validator expects.

    Checkbox groups arrive either as `authentication_methods[email]=email`
    or as repeated `authentication_methods=email`; both become
    `{"email": <flag>}`. Unchecked checkboxes are simply not posted.
    """

    raw: dict[str, Any] = {}
    groups: dict[str, dict[str, Any]] = {k: {} for k in _MULTI_KEYS}

    for key, value in form.multi_items():
        m = _GROUP_ITEM.match(key)
        if m and m.group(1) in groups:
            groups[m.group(1)][m.group(2)] = value
        elif key in groups:
            groups[key][str(value)] = True
        elif key not in raw:
            raw[key] = value

    raw.update(groups)
    for key in _CHECKBOX_KEYS:
        raw.setdefault(key, "0")
    return raw


def _saved_redirect(request: Request) -> Response:
    url = f"{SETTINGS_PATH}?saved=1"
    if request.headers.get("HX-Request") == "true":
        # HTMX: full redirect instead of swapping the page into the target.
        resp = Response(status_code=204)
        resp.headers["HX-Redirect"] = url
        return resp
    return RedirectResponse(url=url, status_code=303)


def _store_failed() -> JSONResponse:
    return JSONResponse({"ok": False, "message": "Settings could not be saved"}, status_code=500)


@router.get(SETTINGS_PATH)
def settings_page(saved: int = 0, service: WalletAuthSettingsService = Depends(get_settings_service)):
    current = service.load_current()
    return {
        "form": build_form(current, service.base_url()),
        "values": current.to_storage(),
        "saved": bool(saved),
    }


@router.post(SETTINGS_PATH)
async def settings_save(request: Request, service: WalletAuthSettingsService = Depends(get_settings_service)):
    form = await request.form()
    raw = _raw_from_form(form)

    try:
        res = service.submit(raw)
    except SQLAlchemyError:
        log.exception("Failed to save wallet authentication settings")
        return _store_failed()

    if not res.ok:
        return JSONResponse(res.to_dict(), status_code=422)
    return _saved_redirect(request)


@router.get(SETTINGS_PATH + "/export.json")
def settings_export_json(service: WalletAuthSettingsService = Depends(get_settings_service)):
    payload = export_settings(service.load_current())
    resp = JSONResponse(payload)
    resp.headers["Content-Disposition"] = (
        f"attachment; filename=wallet_auth_settings_v{payload['schema_version']}.json"
    )
    return resp


@router.post(SETTINGS_PATH + "/import")
async def settings_import_json(
    request: Request,
    file: UploadFile = File(...),
    service: WalletAuthSettingsService = Depends(get_settings_service),
):
    content_type = (getattr(file, "content_type", "") or "").lower()
    if content_type and ("json" not in content_type) and (content_type != "text/plain"):
        return JSONResponse({"ok": False, "message": "Import: a JSON file is expected"}, status_code=415)

    raw = await file.read(MAX_SETTINGS_IMPORT_BYTES + 1)
    if len(raw) > MAX_SETTINGS_IMPORT_BYTES:
        return JSONResponse(
            {"ok": False, "message": f"Import: file too large (max {MAX_SETTINGS_IMPORT_BYTES // 1024} KB)"},
            status_code=413,
        )

    try:
        res = import_settings(raw)
    except ValueError as e:
        log.warning("Settings import rejected: %s", e)
        return JSONResponse({"ok": False, "message": str(e)}, status_code=422)

    if not res.ok or res.record is None:
        return JSONResponse(res.to_dict(), status_code=422)

    try:
        service.save(res.record)
    except SQLAlchemyError:
        log.exception("Failed to save imported wallet authentication settings")
        return _store_failed()
    return _saved_redirect(request)

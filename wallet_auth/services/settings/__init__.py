"""Wallet authentication settings.

Typed schema (schema), config blob persistence (storage), submission
validation (validator), form description for the rendering host (form),
JSON export/import and the service tying them together.
"""

from .schema import (
    CONFIG_NAME,
    CURRENT_SCHEMA_VERSION,
    SETTINGS_SCHEMA,
    FieldKind,
    FieldSpec,
    WalletAuthSettings,
)
from .storage import ConfigStore, SqlConfigStore
from .validator import ErrorReason, FieldError, ValidateResult, validate_submission
from .form import build_form
from .export_import import export_settings, import_settings
from .service import WalletAuthSettingsService

__all__ = [
    "CONFIG_NAME",
    "CURRENT_SCHEMA_VERSION",
    "SETTINGS_SCHEMA",
    "FieldKind",
    "FieldSpec",
    "WalletAuthSettings",
    "ConfigStore",
    "SqlConfigStore",
    "ErrorReason",
    "FieldError",
    "ValidateResult",
    "validate_submission",
    "build_form",
    "export_settings",
    "import_settings",
    "WalletAuthSettingsService",
]

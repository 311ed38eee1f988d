from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from .form import build_form
from .schema import SETTINGS_SCHEMA, WalletAuthSettings, schema_defaults
from .storage import ConfigStore
from .validator import ValidateResult, validate_submission

log = logging.getLogger(__name__)

AUDIT_LOGGER_NAME = "wallet_auth"
SAVED_MESSAGE = "Wallet authentication settings updated."


class WalletAuthSettingsService:
    """Load, validate and save the wallet authentication settings.

    Collaborators are plain constructor arguments:
    - `store`: where the record lives (``wallet_auth.settings``),
    - `logger`: receives one info message per successful save,
    - `base_url`: returns the display prefix for the redirect path field.
    """

    def __init__(
        self,
        store: ConfigStore,
        logger: logging.Logger | None = None,
        base_url: Callable[[], str] | None = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)
        self.base_url = base_url or (lambda: "")

    def load_current(self) -> WalletAuthSettings:
        """Stored record with schema defaults for absent (or no longer valid) keys."""

        stored = self.store.get_all()
        defaults = schema_defaults()
        values: dict[str, Any] = {}

        for spec in SETTINGS_SCHEMA:
            v = stored.get(spec.key)
            if v is None:
                values[spec.key] = defaults[spec.key]
                continue
            try:
                WalletAuthSettings.model_validate({**defaults, spec.key: v})
            except ValidationError:
                log.warning("Stored value for %s is invalid (%r), using default", spec.key, v)
                v = defaults[spec.key]
            values[spec.key] = v

        return WalletAuthSettings.model_validate(values)

    def validate_and_normalize(self, raw: Mapping[str, Any]) -> ValidateResult:
        return validate_submission(raw)

    def save(self, record: WalletAuthSettings) -> None:
        """Replace the whole stored record. Store errors propagate unchanged."""

        self.store.set_all(record.to_storage())
        self.logger.info(SAVED_MESSAGE)

    def submit(self, raw: Mapping[str, Any]) -> ValidateResult:
        res = self.validate_and_normalize(raw)
        if res.ok and res.record is not None:
            self.save(res.record)
        return res

    def build_form(self) -> list[dict[str, Any]]:
        return build_form(self.load_current(), self.base_url())

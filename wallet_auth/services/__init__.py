"""Application service layer.

Stable import surface for routers:
    from wallet_auth.services import ...
"""

from .settings import WalletAuthSettingsService, SqlConfigStore, ValidateResult

__all__ = [
    "WalletAuthSettingsService",
    "SqlConfigStore",
    "ValidateResult",
]

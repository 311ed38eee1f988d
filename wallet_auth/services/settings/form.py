from __future__ import annotations

"""Form description for the settings page.

The rendering host turns this into widgets. Nothing here is read back by the
validator: titles, hints and visibility states are presentation only.
"""

from typing import Any

from .schema import (
    AUTH_METHODS,
    NETWORKS,
    NONCE_LIFETIME_MAX,
    NONCE_LIFETIME_MIN,
    SOCIAL_PROVIDERS,
    WalletAuthSettings,
    field_spec,
)

NETWORK_LABELS = {
    "mainnet": "Ethereum Mainnet",
    "sepolia": "Sepolia Testnet",
    "polygon": "Polygon",
    "bsc": "Binance Smart Chain",
    "arbitrum": "Arbitrum",
    "optimism": "Optimism",
}

AUTH_METHOD_LABELS = {
    "email": "Email",
    "social": "Social",
}

SOCIAL_LABELS = {
    "google": "Google",
    "twitter": "Twitter/X",
    "discord": "Discord",
    "bluesky": "Bluesky",
}


def _options(values: tuple[str, ...], labels: dict[str, str]) -> dict[str, str]:
    return {v: labels.get(v, v) for v in values}


def build_form(current: WalletAuthSettings, base_url: str = "") -> list[dict[str, Any]]:
    """Describe the settings form, prefilled from `current`."""

    return [
        {
            "name": "network",
            "type": "select",
            "title": "Blockchain network",
            "description": "Select the blockchain network to use for wallet authentication.",
            "options": _options(NETWORKS, NETWORK_LABELS),
            "default_value": current.network,
            "required": field_spec("network").required,
        },
        {
            "name": "enable_auto_connect",
            "type": "checkbox",
            "title": "Enable auto-connect",
            "description": "Automatically attempt to connect the wallet when the block is loaded.",
            "default_value": current.enable_auto_connect,
            "required": field_spec("enable_auto_connect").required,
        },
        {
            "name": "nonce_lifetime",
            "type": "number",
            "title": "Authentication timeout",
            "description": "How long the authentication challenge is valid in seconds. Default is 300 (5 minutes).",
            "default_value": current.nonce_lifetime,
            # Advisory only, the validator enforces the range itself.
            "min": NONCE_LIFETIME_MIN,
            "max": NONCE_LIFETIME_MAX,
            "required": field_spec("nonce_lifetime").required,
            "field_suffix": "seconds",
        },
        {
            "name": "authentication_methods",
            "type": "checkboxes",
            "title": "Authentication methods",
            "description": "Select which authentication methods to display.",
            "options": _options(AUTH_METHODS, AUTH_METHOD_LABELS),
            "default_value": list(current.authentication_methods),
            "required": field_spec("authentication_methods").required,
        },
        {
            "name": "allowed_socials",
            "type": "checkboxes",
            "title": "Allowed social providers",
            "description": "Select which social providers to allow.",
            "options": _options(SOCIAL_PROVIDERS, SOCIAL_LABELS),
            "default_value": list(current.allowed_socials),
            "required": field_spec("allowed_socials").required,
            "states": {
                "visible": {
                    ':input[name="authentication_methods[social]"]': {"checked": True},
                },
            },
        },
        {
            "name": "redirect_on_success",
            "type": "textfield",
            "title": "Redirect path after login",
            "description": "The internal path to redirect to after successful authentication (e.g., /user or /dashboard).",
            "default_value": current.redirect_on_success,
            "required": field_spec("redirect_on_success").required,
            "field_prefix": base_url,
        },
    ]

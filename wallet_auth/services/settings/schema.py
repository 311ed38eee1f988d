from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_NAME = "wallet_auth.settings"

CURRENT_SCHEMA_VERSION = 1

NETWORKS = ("mainnet", "sepolia", "polygon", "bsc", "arbitrum", "optimism")
AUTH_METHODS = ("email", "social")
SOCIAL_PROVIDERS = ("google", "twitter", "discord", "bluesky")

NONCE_LIFETIME_MIN = 60
NONCE_LIFETIME_MAX = 3600

Network = Literal["mainnet", "sepolia", "polygon", "bsc", "arbitrum", "optimism"]


class FieldKind(str, Enum):
    ENUM_SINGLE = "enum-single"
    BOOLEAN = "boolean"
    INTEGER_RANGE = "integer-range"
    ENUM_MULTI = "enum-multi"
    STRING = "string"  # non-empty after trimming


@dataclass(frozen=True)
class FieldSpec:
    """Declarative description of one recognized setting."""

    key: str
    kind: FieldKind
    default: Any
    required: bool = False
    allowed_values: tuple[str, ...] = ()
    value_range: tuple[int, int] | None = None


# Order matters: it is the display order and the order of multi-value results.
SETTINGS_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec(
        key="network",
        kind=FieldKind.ENUM_SINGLE,
        default="mainnet",
        required=True,
        allowed_values=NETWORKS,
    ),
    FieldSpec(
        key="enable_auto_connect",
        kind=FieldKind.BOOLEAN,
        default=True,
    ),
    FieldSpec(
        key="nonce_lifetime",
        kind=FieldKind.INTEGER_RANGE,
        default=300,
        required=True,
        value_range=(NONCE_LIFETIME_MIN, NONCE_LIFETIME_MAX),
    ),
    FieldSpec(
        key="authentication_methods",
        kind=FieldKind.ENUM_MULTI,
        default=AUTH_METHODS,
        required=True,
        allowed_values=AUTH_METHODS,
    ),
    FieldSpec(
        key="allowed_socials",
        kind=FieldKind.ENUM_MULTI,
        default=SOCIAL_PROVIDERS,
        required=True,
        allowed_values=SOCIAL_PROVIDERS,
    ),
    FieldSpec(
        key="redirect_on_success",
        kind=FieldKind.STRING,
        default="/user",
        required=True,
    ),
)

FIELDS_BY_KEY: dict[str, FieldSpec] = {f.key: f for f in SETTINGS_SCHEMA}


def field_spec(key: str) -> FieldSpec:
    return FIELDS_BY_KEY[key]


def schema_defaults() -> dict[str, Any]:
    """Defaults in storage shape (lists, not tuples)."""
    out: dict[str, Any] = {}
    for f in SETTINGS_SCHEMA:
        out[f.key] = list(f.default) if f.kind is FieldKind.ENUM_MULTI else f.default
    return out


def _in_schema_order(values: list[str], allowed: tuple[str, ...]) -> list[str]:
    unknown = [v for v in values if v not in allowed]
    if unknown:
        raise ValueError("unknown option(s): " + ", ".join(unknown))
    chosen = set(values)
    return [v for v in allowed if v in chosen]


class WalletAuthSettings(BaseModel):
    """Validated wallet authentication settings (the stored record)."""

    model_config = ConfigDict(frozen=True)

    network: Network = Field(default="mainnet")
    enable_auto_connect: bool = Field(default=True)
    nonce_lifetime: int = Field(default=300, ge=NONCE_LIFETIME_MIN, le=NONCE_LIFETIME_MAX)
    authentication_methods: list[str] = Field(default_factory=lambda: list(AUTH_METHODS), min_length=1)
    allowed_socials: list[str] = Field(default_factory=lambda: list(SOCIAL_PROVIDERS), min_length=1)
    redirect_on_success: str = Field(default="/user", min_length=1)

    @field_validator("authentication_methods")
    @classmethod
    def _methods_order(cls, v: list[str]) -> list[str]:
        return _in_schema_order(v, AUTH_METHODS)

    @field_validator("allowed_socials")
    @classmethod
    def _socials_order(cls, v: list[str]) -> list[str]:
        return _in_schema_order(v, SOCIAL_PROVIDERS)

    @field_validator("redirect_on_success", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def to_storage(self) -> dict[str, Any]:
        """Flat mapping written under ``wallet_auth.settings`` (a fresh copy)."""
        return self.model_dump()

"""
Tests for submission validation and normalization.
"""

import pytest

from wallet_auth.services.settings import ErrorReason, validate_submission


def _reasons(res):
    return {(e.field, e.reason) for e in res.errors}


def test_valid_submission_is_normalized(valid_raw):
    """Form strings become typed values"""
    res = validate_submission(valid_raw)
    assert res.ok
    assert res.errors == []
    rec = res.record
    assert rec.network == "polygon"
    assert rec.enable_auto_connect is False
    assert rec.nonce_lifetime == 600
    assert rec.authentication_methods == ["email", "social"]
    assert rec.allowed_socials == ["google", "discord"]
    assert rec.redirect_on_success == "/dashboard"


def test_unknown_network_rejected(valid_raw):
    valid_raw["network"] = "dogecoin"
    res = validate_submission(valid_raw)
    assert not res.ok
    assert res.record is None
    assert _reasons(res) == {("network", ErrorReason.INVALID_ENUM)}


@pytest.mark.parametrize("value", [59, 3601, "59", "3601", "abc", "", None, True, 300.5])
def test_nonce_lifetime_out_of_range(valid_raw, value):
    """Out-of-range values fail instead of being clamped"""
    valid_raw["nonce_lifetime"] = value
    res = validate_submission(valid_raw)
    assert _reasons(res) == {("nonce_lifetime", ErrorReason.OUT_OF_RANGE)}


@pytest.mark.parametrize("value,expected", [(60, 60), (3600, 3600), ("60", 60), (" 3600 ", 3600)])
def test_nonce_lifetime_bounds_inclusive(valid_raw, value, expected):
    valid_raw["nonce_lifetime"] = value
    res = validate_submission(valid_raw)
    assert res.ok
    assert res.record.nonce_lifetime == expected


def test_unchecked_options_are_dropped(valid_raw):
    valid_raw["authentication_methods"] = {"email": True, "social": False}
    res = validate_submission(valid_raw)
    assert res.ok
    assert res.record.authentication_methods == ["email"]


def test_multi_value_order_follows_schema(valid_raw):
    """Submission order never leaks into the record"""
    valid_raw["authentication_methods"] = {"social": True, "email": True}
    valid_raw["allowed_socials"] = ["bluesky", "google", "twitter"]
    res = validate_submission(valid_raw)
    assert res.record.authentication_methods == ["email", "social"]
    assert res.record.allowed_socials == ["google", "twitter", "bluesky"]


def test_required_multi_value_empty(valid_raw):
    valid_raw["authentication_methods"] = {"email": False, "social": False}
    res = validate_submission(valid_raw)
    assert _reasons(res) == {("authentication_methods", ErrorReason.REQUIRED_EMPTY)}


def test_multi_value_unknown_option(valid_raw):
    valid_raw["allowed_socials"] = {"google": True, "myspace": True}
    res = validate_submission(valid_raw)
    assert _reasons(res) == {("allowed_socials", ErrorReason.INVALID_ENUM)}


def test_unknown_option_ignored_when_unchecked(valid_raw):
    valid_raw["allowed_socials"] = {"google": "google", "myspace": 0}
    res = validate_submission(valid_raw)
    assert res.ok
    assert res.record.allowed_socials == ["google"]


@pytest.mark.parametrize("value", ["", "   ", None])
def test_redirect_path_required(valid_raw, value):
    valid_raw["redirect_on_success"] = value
    res = validate_submission(valid_raw)
    assert _reasons(res) == {("redirect_on_success", ErrorReason.EMPTY_STRING)}


def test_redirect_path_without_slash_is_a_hint(valid_raw):
    """Still valid, only reported"""
    valid_raw["redirect_on_success"] = "  dashboard "
    res = validate_submission(valid_raw)
    assert res.ok
    assert res.record.redirect_on_success == "dashboard"
    assert len(res.hints) == 1
    assert "redirect_on_success" in res.hints[0]


@pytest.mark.parametrize(
    "value,expected",
    [(True, True), (False, False), ("1", True), ("on", True), ("yes", True), ("0", False), ("", False), (0, False)],
)
def test_boolean_coercion(valid_raw, value, expected):
    valid_raw["enable_auto_connect"] = value
    res = validate_submission(valid_raw)
    assert res.record.enable_auto_connect is expected


def test_absent_boolean_uses_default(valid_raw):
    del valid_raw["enable_auto_connect"]
    res = validate_submission(valid_raw)
    assert res.record.enable_auto_connect is True


def test_all_errors_reported_together():
    """Validation is not fail-fast"""
    res = validate_submission({})
    assert not res.ok
    assert _reasons(res) == {
        ("network", ErrorReason.INVALID_ENUM),
        ("nonce_lifetime", ErrorReason.OUT_OF_RANGE),
        ("authentication_methods", ErrorReason.REQUIRED_EMPTY),
        ("allowed_socials", ErrorReason.REQUIRED_EMPTY),
        ("redirect_on_success", ErrorReason.EMPTY_STRING),
    }


def test_result_to_dict(valid_raw):
    valid_raw["network"] = "dogecoin"
    d = validate_submission(valid_raw).to_dict()
    assert d["ok"] is False
    assert "values" not in d
    assert d["errors"][0]["field"] == "network"
    assert d["errors"][0]["reason"] == "invalid_enum"

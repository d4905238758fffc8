import pytest

from config.settings import Settings
from helpers.errors import InvalidAmountError
from helpers.payment_helper import resolve_payment_amount
from schemas.transaction_schema import PaymentIntentRequest


@pytest.mark.parametrize("amount", [None, 0, -1, -5000])
def test_invalid_amount_defaults(settings, amount):
    assert resolve_payment_amount(amount, settings) == 50


def test_configured_default_amount():
    settings = Settings(stripe_secret_key="sk_test_dummy", default_payment_amount=100)
    assert resolve_payment_amount(None, settings) == 100


@pytest.mark.parametrize("amount", [1, 50, 123456])
def test_valid_amount_passes_through(settings, amount):
    assert resolve_payment_amount(amount, settings) == amount


def test_reject_policy_raises():
    settings = Settings(stripe_secret_key="sk_test_dummy", invalid_amount_policy="reject")
    with pytest.raises(InvalidAmountError):
        resolve_payment_amount(0, settings)
    assert resolve_payment_amount(10, settings) == 10


@pytest.mark.parametrize("raw, expected", [
    ("abc", None),
    ("", None),
    (True, None),
    ("250", 250),
    (99.9, 99.9),
    ([1], None),
])
def test_request_amount_coercion(raw, expected):
    assert PaymentIntentRequest(amount=raw).amount == expected


@pytest.mark.parametrize("amount", [0.5, 1999.99])
def test_fractional_amount_is_not_truncated(settings, amount):
    assert resolve_payment_amount(amount, settings) == 50


def test_fractional_amount_rejected_under_reject_policy():
    settings = Settings(stripe_secret_key="sk_test_dummy", invalid_amount_policy="reject")
    with pytest.raises(InvalidAmountError):
        resolve_payment_amount(1999.99, settings)


def test_whole_float_amount_is_charged_exactly(settings):
    assert resolve_payment_amount(2000.0, settings) == 2000

import pytest

from helpers.checkout_helper import PaymentConfirmation, build_return_url, complete_checkout
from helpers.purchase_helper import record_purchase
from models.course import Course


@pytest.fixture
def course(store):
    return store.get_course("course-1")


def recorder(store):
    return lambda request: record_purchase(store, request)


def test_build_return_url():
    assert build_return_url("https://example.com", "course-1") == "https://example.com/checkout?step=3&id=course-1"


def test_succeeded_payment_is_recorded(store, course):
    outcome = complete_checkout(
        PaymentConfirmation(status="succeeded", paymentIntentId="pi_1"), "user-1", course, recorder(store)
    )
    assert outcome.recorded is True
    assert outcome.step == 3
    assert outcome.message == "Payment successful!"
    assert outcome.transaction.transactionId == "pi_1"
    assert outcome.transaction.paymentProvider == "stripe"
    assert outcome.transaction.amount == 4999
    assert len(store.transactions) == 1


def test_course_without_price_records_zero_amount(store):
    free_course = Course(courseId="course-1", sections=[])
    outcome = complete_checkout(
        PaymentConfirmation(status="succeeded", paymentIntentId="pi_1"), "user-1", free_course, recorder(store)
    )
    assert outcome.transaction.amount == 0


@pytest.mark.parametrize("status", ["processing", "requires_action", "canceled", None])
def test_other_statuses_record_nothing(store, course, status):
    outcome = complete_checkout(
        PaymentConfirmation(status=status, paymentIntentId="pi_1"), "user-1", course, recorder(store)
    )
    assert outcome.recorded is False
    assert outcome.step == 2
    assert outcome.level == "warning"
    assert outcome.message == f"Payment not completed. Status: {status}"
    assert store.transactions == []
    assert store.progress == {}


def test_processor_error_records_nothing(store, course):
    outcome = complete_checkout(
        PaymentConfirmation(errorMessage="Your card was declined."), "user-1", course, recorder(store)
    )
    assert outcome.recorded is False
    assert outcome.level == "error"
    assert outcome.message == "Payment failed: Your card was declined."
    assert store.transactions == []


def test_recorder_failure_keeps_user_on_payment_step(store, course):
    store.fail_on.add("put_transaction")
    outcome = complete_checkout(
        PaymentConfirmation(status="succeeded", paymentIntentId="pi_1"), "user-1", course, recorder(store)
    )
    assert outcome.recorded is False
    assert outcome.step == 2
    assert outcome.message == "An unexpected error occurred. Please try again."


def test_build_return_url_without_base_url():
    assert build_return_url(None, "course-1") is None


def test_charged_amount_must_match_price(store, course):
    outcome = complete_checkout(
        PaymentConfirmation(status="succeeded", paymentIntentId="pi_1", amount=50), "user-1", course, recorder(store)
    )
    assert outcome.recorded is False
    assert outcome.step == 2
    assert store.transactions == []


def test_records_charged_amount(store, course):
    outcome = complete_checkout(
        PaymentConfirmation(status="succeeded", paymentIntentId="pi_1", amount=4999), "user-1", course, recorder(store)
    )
    assert outcome.recorded is True
    assert outcome.transaction.amount == 4999

from typing import Callable, Optional, Tuple
import logging

from pydantic import BaseModel

from helpers.purchase_helper import PurchaseRequest
from models.course import Course
from models.transaction import Transaction
from models.user_course_progress import UserCourseProgress

logger = logging.getLogger(__name__)

SUCCEEDED = "succeeded"
PAYMENT_STEP = 2
COMPLETION_STEP = 3


class PaymentConfirmation(BaseModel):
    """What the processor reported after the client confirmed the payment"""
    status: Optional[str] = None
    paymentIntentId: Optional[str] = None
    amount: Optional[float] = None  # charged amount, when known
    errorMessage: Optional[str] = None


class CheckoutOutcome(BaseModel):
    recorded: bool
    step: int
    level: str  # "success" | "warning" | "error"
    message: str
    transaction: Optional[Transaction] = None
    courseProgress: Optional[UserCourseProgress] = None


def build_return_url(base_url: Optional[str], course_id: str) -> Optional[str]:
    """Where the processor sends the user back to after a redirect-based confirmation"""
    if not base_url:
        return None
    return f"{base_url}/checkout?step=3&id={course_id}"


def complete_checkout(
    confirmation: PaymentConfirmation,
    user_id: str,
    course: Course,
    record: Callable[[PurchaseRequest], Tuple[Transaction, UserCourseProgress]],
    provider: str = "stripe",
) -> CheckoutOutcome:
    """
    Record the purchase only when the processor says the payment succeeded.
    Anything else leaves the user on the payment step with a message.
    """
    if confirmation.errorMessage:
        logger.warning(f"Payment confirmation error for course {course.courseId}: {confirmation.errorMessage}")
        return CheckoutOutcome(
            recorded=False,
            step=PAYMENT_STEP,
            level="error",
            message=f"Payment failed: {confirmation.errorMessage}",
        )

    if confirmation.status != SUCCEEDED:
        logger.warning(f"Payment intent status: {confirmation.status}")
        return CheckoutOutcome(
            recorded=False,
            step=PAYMENT_STEP,
            level="warning",
            message=f"Payment not completed. Status: {confirmation.status}",
        )

    price = course.price or 0
    if confirmation.amount is not None and confirmation.amount != price:
        logger.warning(
            f"Charged amount {confirmation.amount} does not match price {price} of course {course.courseId}"
        )
        return CheckoutOutcome(
            recorded=False,
            step=PAYMENT_STEP,
            level="error",
            message="Payment amount does not match the course price.",
        )

    try:
        request = PurchaseRequest(
            transactionId=confirmation.paymentIntentId,
            userId=user_id,
            courseId=course.courseId,
            paymentProvider=provider,
            amount=confirmation.amount if confirmation.amount is not None else price,
        )
        transaction, progress = record(request)
    except Exception as e:
        logger.error(f"Unexpected error during payment: {str(e)}", exc_info=True)
        return CheckoutOutcome(
            recorded=False,
            step=PAYMENT_STEP,
            level="error",
            message="An unexpected error occurred. Please try again.",
        )

    return CheckoutOutcome(
        recorded=True,
        step=COMPLETION_STEP,
        level="success",
        message="Payment successful!",
        transaction=transaction,
        courseProgress=progress,
    )

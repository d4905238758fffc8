"""
Purchase Recorder

Records a confirmed payment as three writes: the Transaction, the initial
UserCourseProgress, and the user's enrollment on the course.

DynamoDB gives no atomicity across these writes, so the sequence runs as a
saga: when a step fails, the writes that already succeeded are undone in
reverse order. If an undo fails too, the purchase is reported as pending
reconciliation together with the records left behind.
"""

from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple
import logging

from pydantic import BaseModel

from helpers.errors import CourseNotFoundError, PurchaseError
from models.transaction import Transaction
from models.user_course_progress import UserCourseProgress

logger = logging.getLogger(__name__)


class PurchaseRequest(BaseModel):
    userId: str
    courseId: str
    transactionId: str
    amount: Optional[float] = None
    paymentProvider: str


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _compensate(undo_steps: List[Tuple[str, Callable[[], None]]]) -> List[str]:
    """Run undo steps newest first; return the names of those that failed"""
    failed = []
    for name, undo in reversed(undo_steps):
        try:
            undo()
            logger.info(f"Rolled back {name}")
        except Exception as e:
            logger.error(f"Failed to roll back {name}: {str(e)}", exc_info=True)
            failed.append(name)
    return failed


def record_purchase(store, request: PurchaseRequest, now: Optional[str] = None) -> Tuple[Transaction, UserCourseProgress]:
    """
    Persist a purchase for (request.userId, request.courseId).

    Raises CourseNotFoundError before writing anything when the course is
    unknown, and PurchaseError when a write fails.
    """
    now = now or utc_now()
    logger.info(
        f"Recording purchase: user={request.userId} course={request.courseId} "
        f"transaction={request.transactionId} amount={request.amount} provider={request.paymentProvider}"
    )

    course = store.get_course(request.courseId)
    if course is None:
        raise CourseNotFoundError(request.courseId)

    transaction = Transaction(
        dateTime=now,
        userId=request.userId,
        courseId=request.courseId,
        transactionId=request.transactionId,
        amount=request.amount,
        paymentProvider=request.paymentProvider,
    )
    progress = UserCourseProgress.initial(request.userId, course, now)

    undo_steps: List[Tuple[str, Callable[[], None]]] = []

    def write(name: str, apply: Callable[[], Any]) -> Any:
        try:
            return apply()
        except Exception as e:
            logger.error(f"Purchase failed at {name}: {str(e)}", exc_info=True)
            failed = _compensate(undo_steps)
            if failed:
                raise PurchaseError(
                    f"Failed to write {name}; rollback incomplete",
                    cause=e,
                    pending_reconciliation=True,
                    orphans=failed,
                ) from e
            raise PurchaseError(f"Failed to write {name}", cause=e) from e

    # Records that existed before this request are reused, never undone
    name = f"transaction {transaction.transactionId}"
    if write(name, lambda: store.put_transaction(transaction)):
        undo_steps.append((name, lambda t=transaction: store.delete_transaction(t)))
    else:
        logger.info(f"Transaction {transaction.transactionId} already recorded")
        transaction = write(name, lambda: store.get_transaction(request.userId, request.transactionId)) or transaction

    name = f"course progress {request.userId}/{request.courseId}"
    if write(name, lambda: store.put_course_progress(progress)):
        undo_steps.append((name, lambda p=progress: store.delete_course_progress(p)))
    else:
        logger.info(f"Keeping existing course progress for {request.userId}/{request.courseId}")
        progress = write(name, lambda: store.get_course_progress(request.userId, request.courseId)) or progress

    name = f"enrollment {request.userId} in {request.courseId}"
    if not write(name, lambda: store.add_enrollment(request.courseId, request.userId)):
        logger.info(f"User {request.userId} already enrolled in {request.courseId}")

    logger.info(f"Purchase recorded: transaction={transaction.transactionId}")
    return transaction, progress

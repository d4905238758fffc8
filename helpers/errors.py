from typing import List, Optional


class CheckoutError(Exception):
    """Base class for checkout errors"""


class ConfigurationError(CheckoutError):
    """Required configuration is missing or invalid"""


class InvalidAmountError(CheckoutError):
    """Payment amount rejected under the 'reject' amount policy"""


class CourseNotFoundError(CheckoutError):
    def __init__(self, course_id: str):
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


class PurchaseError(CheckoutError):
    """
    A purchase could not be recorded.

    When pending_reconciliation is set, compensation did not finish and
    `orphans` names the records that were left behind.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 pending_reconciliation: bool = False, orphans: Optional[List[str]] = None):
        super().__init__(message)
        self.cause = cause
        self.pending_reconciliation = pending_reconciliation
        self.orphans = orphans or []

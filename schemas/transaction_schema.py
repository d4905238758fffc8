from typing import Any, List, Optional
from pydantic import BaseModel, field_validator


class PaymentIntentRequest(BaseModel):
    amount: Optional[float] = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Optional[float]:
        """Malformed amounts become None and are handled by the amount policy"""
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if number != number or number in (float("inf"), float("-inf")):
            return None
        return number


class CreateTransactionRequest(BaseModel):
    userId: str
    courseId: str
    transactionId: str
    amount: Optional[float] = None
    paymentProvider: str


class ConfirmPaymentRequest(BaseModel):
    paymentIntentId: str
    userId: str
    courseId: str


# Response Models
class TransactionsResponse(BaseModel):
    message: str
    data: List[dict]


class PaymentIntentResponse(BaseModel):
    message: str
    data: dict


class PurchaseResponse(BaseModel):
    message: str
    data: dict

from typing import Optional
from pydantic import BaseModel, ConfigDict


class Transaction(BaseModel):
    """A completed payment. Written once, never updated."""
    model_config = ConfigDict(frozen=True)

    userId: str
    transactionId: str
    dateTime: str
    courseId: str
    paymentProvider: str  # "stripe"
    amount: Optional[float] = None

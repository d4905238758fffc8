"""
Transaction Controller

Checkout endpoints: listing transactions, creating Stripe payment intents,
and recording purchased courses.

Environment Variables Required:
- STRIPE_SECRET_KEY: Stripe secret key (checked at startup)
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from helpers.checkout_helper import PaymentConfirmation, build_return_url, complete_checkout
from helpers.errors import CourseNotFoundError, InvalidAmountError, PurchaseError
from helpers.payment_helper import resolve_payment_amount
from helpers.purchase_helper import PurchaseRequest, record_purchase
from schemas.transaction_schema import (
    ConfirmPaymentRequest,
    CreateTransactionRequest,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PurchaseResponse,
    TransactionsResponse,
)

# Set up logging
logger = logging.getLogger(__name__)

# Initialize router
router = APIRouter(tags=["Transactions"])


def get_settings(request: Request):
    return request.app.state.settings


def get_store(request: Request):
    return request.app.state.store


def get_payment_processor(request: Request):
    return request.app.state.payment_processor


def error_response(message: str, error: Exception, status_code: int = 500, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "error": str(error), **extra},
    )


@router.get("", response_model=TransactionsResponse)
async def list_transactions(userId: Optional[str] = None, store=Depends(get_store)):
    """List transactions, optionally only those of one user"""
    try:
        transactions = store.list_transactions(userId)
        logger.info(f"Retrieved {len(transactions)} transactions for userId={userId}")
        return {
            "message": "Transactions retrieved successfully",
            "data": [transaction.model_dump(mode="json") for transaction in transactions],
        }
    except Exception as e:
        logger.error(f"Error retrieving transactions: {str(e)}", exc_info=True)
        return error_response("Error retrieving transactions", e)


@router.post("/stripe/payment-intent", response_model=PaymentIntentResponse)
async def create_stripe_payment_intent(
    body: PaymentIntentRequest,
    settings=Depends(get_settings),
    processor=Depends(get_payment_processor),
):
    """Create a Stripe payment intent and hand its client secret to the client"""
    try:
        amount = resolve_payment_amount(body.amount, settings)
    except InvalidAmountError as e:
        return error_response("Invalid payment amount", e, status_code=400)

    try:
        client_secret = processor.create_payment_intent(amount)
        return {
            "message": "Payment intent created successfully",
            "data": {"clientSecret": client_secret},
        }
    except Exception as e:
        logger.error(f"Error creating Stripe payment intent: {str(e)}", exc_info=True)
        return error_response("Error creating Stripe payment intent", e)


@router.post("", response_model=PurchaseResponse)
async def create_transaction(body: CreateTransactionRequest, store=Depends(get_store)):
    """Record a purchased course: transaction, initial progress, enrollment"""
    try:
        transaction, progress = record_purchase(store, PurchaseRequest(**body.model_dump()))
        return {
            "message": "Purchased Course successfully",
            "data": {
                "transaction": transaction.model_dump(mode="json"),
                "courseProgress": progress.model_dump(mode="json"),
            },
        }
    except PurchaseError as e:
        logger.error(f"Error creating transaction and enrollment for request {body.model_dump()}: {str(e)}")
        return error_response(
            "Error creating transaction and enrollment",
            e.cause or e,
            pendingReconciliation=e.pending_reconciliation,
            orphans=e.orphans,
        )
    except Exception as e:
        logger.error(f"Error creating transaction and enrollment for request {body.model_dump()}: {str(e)}", exc_info=True)
        return error_response("Error creating transaction and enrollment", e)


@router.post("/confirm", response_model=PurchaseResponse)
async def confirm_payment(
    body: ConfirmPaymentRequest,
    settings=Depends(get_settings),
    store=Depends(get_store),
    processor=Depends(get_payment_processor),
):
    """
    Check a payment intent with Stripe and record the purchase if it succeeded.
    Mirrors what the checkout page does after confirming a payment.
    """
    try:
        course = store.get_course(body.courseId)
        if course is None:
            raise CourseNotFoundError(body.courseId)
        payment_intent = processor.retrieve_payment_intent(body.paymentIntentId)
    except CourseNotFoundError as e:
        return error_response("Course not found", e, status_code=404)
    except Exception as e:
        logger.error(f"Error confirming payment {body.paymentIntentId}: {str(e)}", exc_info=True)
        return error_response("Error confirming payment", e)

    outcome = complete_checkout(
        PaymentConfirmation(
            status=payment_intent["status"],
            paymentIntentId=payment_intent["id"],
            amount=payment_intent.get("amount"),
            errorMessage=payment_intent.get("error"),
        ),
        body.userId,
        course,
        lambda request: record_purchase(store, request),
        provider=settings.payment_provider,
    )
    data = {"recorded": outcome.recorded, "step": outcome.step}
    return_url = build_return_url(settings.client_base_url, body.courseId)
    if return_url:
        data["returnUrl"] = return_url
    if outcome.recorded:
        data["transaction"] = outcome.transaction.model_dump(mode="json")
        data["courseProgress"] = outcome.courseProgress.model_dump(mode="json")
    return {"message": outcome.message, "data": data}

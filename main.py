import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.db_config import get_dynamodb_resource
from config.settings import load_settings
from config.stripe_config import PaymentProcessor
from controllers.transaction_controller import router as transaction_router
from helpers.dynamodb_helper import DynamoDBStore

logger = logging.getLogger(__name__)


def create_app(settings=None, payment_processor=None, store=None) -> FastAPI:
    """
    Build the FastAPI app.

    Settings are loaded from the environment when not given, which raises
    ConfigurationError if STRIPE_SECRET_KEY is missing so the process never
    starts half-configured.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    # Initialize FastAPI app
    app = FastAPI()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.payment_processor = payment_processor or PaymentProcessor(
        settings.stripe_secret_key, currency=settings.payment_currency
    )
    app.state.store = store or DynamoDBStore(get_dynamodb_resource(settings), settings)

    app.include_router(transaction_router, prefix="/transactions", tags=["Transactions"])

    logger.info("Checkout server configured")
    return app


app = create_app()

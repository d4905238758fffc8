import os
from typing import Optional
from pydantic import BaseModel
from dotenv import load_dotenv

from helpers.errors import ConfigurationError

# Load environment variables
load_dotenv()

AMOUNT_POLICIES = ("default", "reject")


class Settings(BaseModel):
    """Runtime configuration, read from the environment once at startup"""
    stripe_secret_key: str
    client_base_url: Optional[str] = None
    payment_currency: str = "usd"
    default_payment_amount: int = 50
    invalid_amount_policy: str = "default"
    payment_provider: str = "stripe"

    dynamodb_endpoint_url: Optional[str] = "http://localhost:8000"
    aws_region: str = "local"
    aws_access_key_id: Optional[str] = "dummy"
    aws_secret_access_key: Optional[str] = "dummy"

    courses_table: str = "Courses"
    transactions_table: str = "Transactions"
    user_course_progress_table: str = "UserCourseProgress"

    log_level: str = "INFO"


def resolve_client_base_url(base_url: Optional[str], local_url: Optional[str], vercel_url: Optional[str]) -> Optional[str]:
    """Pick the client base URL: explicit URL, then local host over http, then deployed host over https"""
    if base_url:
        return base_url.rstrip("/")
    if local_url:
        return f"http://{local_url}"
    if vercel_url:
        return f"https://{vercel_url}"
    return None


def load_settings() -> Settings:
    """
    Build Settings from environment variables.
    Raises ConfigurationError when the Stripe secret key is absent.
    """
    secret_key = (os.getenv("STRIPE_SECRET_KEY") or "").strip()
    if not secret_key:
        raise ConfigurationError(
            "STRIPE_SECRET_KEY is required but was not found in env variables"
        )

    policy = os.getenv("INVALID_AMOUNT_POLICY", "default").strip().lower()
    if policy not in AMOUNT_POLICIES:
        raise ConfigurationError(
            f"INVALID_AMOUNT_POLICY must be one of {', '.join(AMOUNT_POLICIES)}, got '{policy}'"
        )

    try:
        default_amount = int(os.getenv("DEFAULT_PAYMENT_AMOUNT", "50"))
    except ValueError:
        raise ConfigurationError("DEFAULT_PAYMENT_AMOUNT must be an integer")
    if default_amount <= 0:
        raise ConfigurationError("DEFAULT_PAYMENT_AMOUNT must be greater than 0")

    return Settings(
        stripe_secret_key=secret_key,
        client_base_url=resolve_client_base_url(
            os.getenv("CLIENT_BASE_URL"),
            os.getenv("CLIENT_LOCAL_URL"),
            os.getenv("CLIENT_VERCEL_URL"),
        ),
        payment_currency=os.getenv("PAYMENT_CURRENCY", "usd"),
        default_payment_amount=default_amount,
        invalid_amount_policy=policy,
        payment_provider=os.getenv("PAYMENT_PROVIDER", "stripe"),
        dynamodb_endpoint_url=os.getenv("DYNAMODB_ENDPOINT_URL", "http://localhost:8000") or None,
        aws_region=os.getenv("AWS_REGION", "local"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "dummy"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "dummy"),
        courses_table=os.getenv("COURSES_TABLE", "Courses"),
        transactions_table=os.getenv("TRANSACTIONS_TABLE", "Transactions"),
        user_course_progress_table=os.getenv("USER_COURSE_PROGRESS_TABLE", "UserCourseProgress"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

"""
API routes - Registration and email verification endpoints.

This module defines the HTTP endpoints:
- POST /api/register - Create an account and send the verification link
- GET /api/verify-email - Redeem a verification link

Handlers are plain ``def`` functions: the services block on bcrypt,
psycopg and SMTP, so FastAPI runs them in its threadpool.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_registration_service, get_verification_service
from src.api.models import ErrorResponse, MessageResponse, RegisterRequest, RegisterResponse
from src.domain.exceptions import (
    AlreadyVerified,
    InvalidToken,
    MailDeliveryFailed,
    MissingFields,
    MissingToken,
    PasswordTooLong,
    PasswordTooShort,
    UserAlreadyExists,
    UserNotFound,
)
from src.domain.registration import RegistrationService
from src.domain.verification import EmailVerificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SERVER_ERROR = "Server error"


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _server_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, user exists, or mail failure"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    summary="Register a new user",
    description="Submit email and password to create an account. "
    "When verification is enabled, a verification link is emailed to the address.",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user and send the verification link.

    - **email**: Email address to register
    - **password**: Password (minimum 6 characters)
    """
    try:
        user = service.register(request_data.email, request_data.password)
    except MissingFields:
        raise _bad_request("Please enter all fields") from None
    except PasswordTooShort:
        raise _bad_request("Password must be at least 6 characters") from None
    except PasswordTooLong:
        raise _bad_request("Password must be at most 72 bytes") from None
    except UserAlreadyExists:
        raise _bad_request("User already exists") from None
    except MailDeliveryFailed:
        raise _bad_request("Failed to send verification email") from None
    except Exception:
        logger.exception("Unexpected error during registration")
        raise _server_error() from None

    if service.send_verification:
        msg = "User registered. Please check your email to verify your account."
    else:
        msg = "User registered successfully"
    return RegisterResponse(msg=msg, user_id=user.id)


@router.get(
    "/verify-email",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, invalid or expired token, or already verified"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    summary="Verify email address",
    description="Redeem the token from the emailed verification link.",
)
def verify_email(
    token: str | None = Query(default=None, description="Verification token from the email link"),
    service: EmailVerificationService = Depends(get_verification_service),
) -> MessageResponse:
    """
    Mark the account bound into the token as verified.

    Invalid and expired tokens share one message so the response does not
    reveal which check failed.
    """
    try:
        service.verify_email(token)
    except MissingToken:
        raise _bad_request("Missing token") from None
    except InvalidToken:
        raise _bad_request("Invalid or expired token") from None
    except UserNotFound:
        raise _bad_request("User not found") from None
    except AlreadyVerified:
        raise _bad_request("User is already verified") from None
    except Exception:
        logger.exception("Unexpected error during email verification")
        raise _server_error() from None

    return MessageResponse(msg="Email successfully verified")

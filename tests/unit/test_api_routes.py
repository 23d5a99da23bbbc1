"""
Unit tests for API routes.

Tests endpoint responses with mocked services.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_registration_service, get_verification_service
from src.api.main import app as main_app
from src.domain.exceptions import (
    AlreadyVerified,
    DuplicateEmail,
    ExpiredToken,
    InvalidToken,
    MailDeliveryFailed,
    MissingFields,
    MissingToken,
    PasswordTooLong,
    PasswordTooShort,
    UserAlreadyExists,
    UserNotFound,
)
from src.domain.passwords import PasswordHasher
from src.domain.registration import RegistrationService
from src.domain.verification import EmailVerificationService


@pytest.fixture
def app() -> FastAPI:
    """The application with services overridden per test."""
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def registration(app: FastAPI, make_user) -> MagicMock:
    service = MagicMock(spec=RegistrationService)
    service.send_verification = True
    service.register.side_effect = lambda email, password: make_user(email=email)
    app.dependency_overrides[get_registration_service] = lambda: service
    return service


@pytest.fixture
def verification(app: FastAPI, make_user) -> MagicMock:
    service = MagicMock(spec=EmailVerificationService)
    service.verify_email.return_value = make_user(is_verified=True)
    app.dependency_overrides[get_verification_service] = lambda: service
    return service


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestRegisterEndpoint:
    """Tests for POST /api/register."""

    def test_register_success_returns_201(
        self, client: TestClient, registration: MagicMock, make_user
    ) -> None:
        user = make_user(email="a@b.com")
        registration.register.side_effect = None
        registration.register.return_value = user

        response = client.post("/api/register", json={"email": "a@b.com", "password": "secret1"})

        assert response.status_code == 201
        assert response.json() == {
            "msg": "User registered. Please check your email to verify your account.",
            "userId": str(user.id),
        }
        registration.register.assert_called_once_with("a@b.com", "secret1")

    def test_register_without_verification_message(
        self, client: TestClient, registration: MagicMock
    ) -> None:
        registration.send_verification = False

        response = client.post("/api/register", json={"email": "a@b.com", "password": "secret1"})

        assert response.status_code == 201
        assert response.json()["msg"] == "User registered successfully"

    def test_email_is_trimmed_before_service(
        self, client: TestClient, registration: MagicMock
    ) -> None:
        client.post("/api/register", json={"email": "  a@b.com  ", "password": "secret1"})

        registration.register.assert_called_once_with("a@b.com", "secret1")

    @pytest.mark.parametrize(
        "body",
        [{}, {"email": "a@b.com"}, {"password": "secret1"}, {"email": "   ", "password": "secret1"}],
    )
    def test_missing_fields_reach_service_as_none(
        self, client: TestClient, registration: MagicMock, body: dict
    ) -> None:
        registration.register.side_effect = MissingFields("missing")

        response = client.post("/api/register", json=body)

        assert response.status_code == 400
        assert response.json() == {"detail": "Please enter all fields"}
        args = registration.register.call_args[0]
        assert None in args

    def test_short_password_returns_400(self, client: TestClient, registration: MagicMock) -> None:
        registration.register.side_effect = PasswordTooShort("short")

        response = client.post("/api/register", json={"email": "a@b.com", "password": "123"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Password must be at least 6 characters"}

    @pytest.mark.parametrize("password", ["p" * 73, "é" * 40])
    def test_long_password_returns_400_with_real_hasher(
        self, app: FastAPI, client: TestClient, make_user, password: str
    ) -> None:
        """Passwords over bcrypt's 72-byte input are a client error, not a 500."""
        repo = MagicMock()
        repo.find_by_email.return_value = None
        repo.create.side_effect = lambda email, password_hash: make_user(email=email)
        service = RegistrationService(
            repository=repo,
            hasher=PasswordHasher(rounds=4),
            tokens=MagicMock(),
            email_sender=MagicMock(),
            verification_url="http://localhost:5000/api/verify-email",
        )
        app.dependency_overrides[get_registration_service] = lambda: service

        response = client.post("/api/register", json={"email": "a@b.com", "password": password})

        assert response.status_code == 400
        assert response.json() == {"detail": "Password must be at most 72 bytes"}
        repo.create.assert_not_called()

    @pytest.mark.parametrize("error", [UserAlreadyExists("a@b.com"), DuplicateEmail("a@b.com")])
    def test_existing_user_returns_400(
        self, client: TestClient, registration: MagicMock, error: Exception
    ) -> None:
        registration.register.side_effect = error

        response = client.post("/api/register", json={"email": "a@b.com", "password": "secret1"})

        assert response.status_code == 400
        assert response.json() == {"detail": "User already exists"}

    def test_mail_failure_returns_400(self, client: TestClient, registration: MagicMock) -> None:
        registration.register.side_effect = MailDeliveryFailed("a@b.com")

        response = client.post("/api/register", json={"email": "a@b.com", "password": "secret1"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Failed to send verification email"}

    def test_unexpected_error_returns_generic_500(
        self, client: TestClient, registration: MagicMock
    ) -> None:
        """Internal details never reach the client."""
        registration.register.side_effect = RuntimeError("connection to 10.0.0.5 refused")

        response = client.post("/api/register", json={"email": "a@b.com", "password": "secret1"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}
        assert "10.0.0.5" not in response.text

    def test_invalid_email_format_returns_400(
        self, client: TestClient, registration: MagicMock
    ) -> None:
        response = client.post("/api/register", json={"email": "not-an-email", "password": "secret1"})

        assert response.status_code == 400
        registration.register.assert_not_called()

    def test_malformed_body_returns_400(self, client: TestClient, registration: MagicMock) -> None:
        response = client.post(
            "/api/register", content="{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        registration.register.assert_not_called()


class TestVerifyEmailEndpoint:
    """Tests for GET /api/verify-email."""

    def test_verify_success_returns_200(self, client: TestClient, verification: MagicMock) -> None:
        response = client.get("/api/verify-email", params={"token": "abc"})

        assert response.status_code == 200
        assert response.json() == {"msg": "Email successfully verified"}
        verification.verify_email.assert_called_once_with("abc")

    def test_missing_token_returns_400(self, client: TestClient, verification: MagicMock) -> None:
        verification.verify_email.side_effect = MissingToken("missing")

        response = client.get("/api/verify-email")

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing token"}
        verification.verify_email.assert_called_once_with(None)

    @pytest.mark.parametrize("error", [InvalidToken("bad"), ExpiredToken("old")])
    def test_invalid_and_expired_share_one_message(
        self, client: TestClient, verification: MagicMock, error: Exception
    ) -> None:
        verification.verify_email.side_effect = error

        response = client.get("/api/verify-email", params={"token": "abc"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid or expired token"}

    def test_user_not_found_returns_400(self, client: TestClient, verification: MagicMock) -> None:
        verification.verify_email.side_effect = UserNotFound(str(uuid4()))

        response = client.get("/api/verify-email", params={"token": "abc"})

        assert response.status_code == 400
        assert response.json() == {"detail": "User not found"}

    def test_already_verified_returns_400(self, client: TestClient, verification: MagicMock) -> None:
        verification.verify_email.side_effect = AlreadyVerified("id")

        response = client.get("/api/verify-email", params={"token": "abc"})

        assert response.status_code == 400
        assert response.json() == {"detail": "User is already verified"}

    def test_unexpected_error_returns_generic_500(
        self, client: TestClient, verification: MagicMock
    ) -> None:
        verification.verify_email.side_effect = RuntimeError("boom")

        response = client.get("/api/verify-email", params={"token": "abc"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}

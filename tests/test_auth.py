"""
Tests for account endpoints
"""
from datetime import timedelta

import pytest
from fastapi import status

from clinic_admin.core.security import (
    create_access_token,
    decode_access_token,
    validate_password_strength,
)
from clinic_admin.models.user import UserRole

from tests.conftest import TEST_PASSWORD


@pytest.fixture
def signup_data():
    """Sample customer signup data"""
    return {
        "username": "jsmith",
        "email": "john.smith@clinic.com",
        "password": TEST_PASSWORD,
        "full_name": "John Smith",
        "phone": "+15551234",
        "date_of_birth": "1990-01-01",
        "gender": "male",
        "blood_group": "O+",
        "height": 180,
        "weight": 80,
    }


class TestSignup:
    """Customer signup"""

    async def test_signup_success(self, client, signup_data):
        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "Registration successful"
        assert data["email"] == signup_data["email"]
        assert "user_id" in data

    async def test_signup_creates_profile(self, client, store, signup_data):
        response = await client.post("/api/auth/signup", json=signup_data)
        user_id = response.json()["user_id"]

        customer = await store.get_customer_by_user_id(user_id)
        assert customer.blood_group == "O+"
        assert customer.height == 180

    async def test_signup_duplicate_email(self, client, signup_data):
        await client.post("/api/auth/signup", json=signup_data)

        signup_data["username"] = "another"
        signup_data["phone"] = "+15559999"
        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already registered" in response.json()["detail"].lower()

    async def test_signup_duplicate_phone(self, client, signup_data):
        await client.post("/api/auth/signup", json=signup_data)

        signup_data["username"] = "another"
        signup_data["email"] = "another@clinic.com"
        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Phone already registered"

    async def test_signup_invalid_email(self, client, signup_data):
        signup_data["email"] = "invalid-email"

        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error"] == "Validation error"

    async def test_signup_weak_password(self, client, signup_data):
        signup_data["password"] = "weakpassword"

        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_signup_invalid_blood_group(self, client, signup_data):
        signup_data["blood_group"] = "C+"

        response = await client.post("/api/auth/signup", json=signup_data)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestCurrentUser:
    """Token handling and /me"""

    async def test_me(self, client, make_user, headers_for):
        doctor = await make_user(UserRole.DOCTOR)

        response = await client.get("/api/auth/me", headers=headers_for(doctor))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == doctor.id
        assert data["role"] == "doctor"
        assert data["status"] == "active"
        assert "password_hash" not in data

    async def test_invalid_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_expired_token(self, client, make_user):
        user = await make_user()
        token = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(minutes=-1))

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_token_for_missing_user(self, client):
        token = create_access_token({"sub": "31337"})

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestChangePassword:
    """Password change"""

    async def test_change_password(self, client, store, make_user, headers_for):
        user = await make_user()

        response = await client.post(
            "/api/auth/change-password",
            json={"old_password": TEST_PASSWORD, "new_password": "Another@Pass2"},
            headers=headers_for(user),
        )

        assert response.status_code == status.HTTP_200_OK

    async def test_wrong_old_password(self, client, make_user, headers_for):
        user = await make_user()

        response = await client.post(
            "/api/auth/change-password",
            json={"old_password": "Wrong@Pass99", "new_password": "Another@Pass2"},
            headers=headers_for(user),
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSecurityHelpers:
    """Token and password helpers"""

    def test_token_round_trip(self):
        payload = decode_access_token(create_access_token({"sub": "7"}))

        assert payload["sub"] == "7"
        assert payload["type"] == "access"

    @pytest.mark.parametrize(
        "password, valid",
        [
            ("Secure@Pass1", True),
            ("short1!", False),
            ("nouppercase1!", False),
            ("NOLOWERCASE1!", False),
            ("NoDigits!!", False),
            ("NoSpecial123", False),
        ],
    )
    def test_password_strength(self, password, valid):
        is_valid, _ = validate_password_strength(password)

        assert is_valid is valid

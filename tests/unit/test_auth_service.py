"""Tests for AuthService."""
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId


def mock_database():
    mock_db = MagicMock()
    mock_users = AsyncMock()
    mock_db.__getitem__.return_value = mock_users
    return mock_db, mock_users


@pytest.mark.asyncio
class TestAuthServiceRegister:
    """Tests for user registration."""

    async def test_register_user_success(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = None
        mock_users.insert_one.return_value = AsyncMock(inserted_id=ObjectId())

        user = await AuthService(mock_db).register_user(
            email="dana@example.com",
            password="securepassword123",
            name="Dana",
            base_currency="uzs",
        )

        assert user.email == "dana@example.com"
        assert user.base_currency == "UZS"
        assert not hasattr(user, "hashed_password")

        stored = mock_users.insert_one.call_args[0][0]
        assert stored["hashed_password"].startswith("$2b$")
        assert stored["hashed_password"] != "securepassword123"

    async def test_register_without_base_currency(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = None
        mock_users.insert_one.return_value = AsyncMock(inserted_id=ObjectId())

        user = await AuthService(mock_db).register_user(
            email="dana@example.com",
            password="pw",
            name="Dana",
        )

        assert user.base_currency is None

    async def test_register_duplicate_email(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = {"_id": ObjectId(), "email": "dana@example.com"}

        with pytest.raises(ValueError, match="Email already registered"):
            await AuthService(mock_db).register_user(
                email="dana@example.com",
                password="password123",
                name="Dana",
            )
        mock_users.insert_one.assert_not_called()


@pytest.mark.asyncio
class TestAuthServiceLogin:
    """Tests for user login."""

    async def test_login_success(self):
        from planner.services.auth_service import AuthService
        from planner.utils.auth import hash_password, verify_access_token

        mock_db, mock_users = mock_database()
        user_id = ObjectId()
        mock_users.find_one.return_value = {
            "_id": user_id,
            "email": "dana@example.com",
            "hashed_password": hash_password("correctpassword"),
        }

        token = await AuthService(mock_db).login(email="dana@example.com", password="correctpassword")

        assert verify_access_token(token) == str(user_id)

    async def test_login_user_not_found(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = None

        with pytest.raises(ValueError, match="Invalid email or password"):
            await AuthService(mock_db).login(email="nobody@example.com", password="pw")

    async def test_login_wrong_password(self):
        from planner.services.auth_service import AuthService
        from planner.utils.auth import hash_password

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = {
            "_id": ObjectId(),
            "email": "dana@example.com",
            "hashed_password": hash_password("correctpassword"),
        }

        with pytest.raises(ValueError, match="Invalid email or password"):
            await AuthService(mock_db).login(email="dana@example.com", password="wrongpassword")


@pytest.mark.asyncio
class TestAuthServiceGetUser:
    """Tests for getting user by ID."""

    async def test_get_user_by_id_found(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        user_id = ObjectId()
        mock_users.find_one.return_value = {
            "_id": user_id,
            "email": "dana@example.com",
            "name": "Dana",
            "base_currency": "EUR",
            "hashed_password": "$2b$12$...",
            "created_at": datetime.now(),
            "updated_at": datetime.now(),
        }

        user = await AuthService(mock_db).get_user_by_id(str(user_id))

        assert user.id == str(user_id)
        assert user.base_currency == "EUR"

    async def test_get_user_by_id_not_found(self):
        from planner.services.auth_service import AuthService

        mock_db, mock_users = mock_database()
        mock_users.find_one.return_value = None

        with pytest.raises(ValueError, match="User not found"):
            await AuthService(mock_db).get_user_by_id(str(ObjectId()))

    async def test_get_user_invalid_id(self):
        from planner.services.auth_service import AuthService

        mock_db, _ = mock_database()

        with pytest.raises(ValueError, match="Invalid user ID format"):
            await AuthService(mock_db).get_user_by_id("not-an-id")

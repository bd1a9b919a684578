"""
Unit tests for authentication endpoints.

Tests:
- User registration
- Login
- Credential error uniformity
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.database import get_db
from app.core.exceptions import ConflictError, InternalError
from app.core.security import verify_password, verify_token
from app.models.user import User
from app.services.auth_service import AuthService
from main import app


class TestUserRegistration:
    """Test user registration endpoint"""

    def test_register_success(self, client):
        """Test successful user registration returns id and email only"""
        response = client.post(
            "/auth/register",
            json={"email": "test@example.com", "password": "secret1"}
        )

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"id", "email"}
        assert data["email"] == "test@example.com"
        assert isinstance(data["id"], int)

    def test_register_stores_hash_not_plaintext(self, client, db_session):
        """Test the stored credential is a bcrypt hash of the password"""
        client.post("/auth/register", json={"email": "hash@example.com", "password": "secret1"})

        user = db_session.query(User).filter(User.email == "hash@example.com").one()
        assert user.hashed_password != "secret1"
        assert "secret1" not in user.hashed_password
        assert user.hashed_password.startswith("$2")
        assert verify_password("secret1", user.hashed_password)

    def test_register_duplicate_email(self, client):
        """Test registration with duplicate email fails with 409"""
        payload = {"email": "existing@example.com", "password": "secret1"}
        assert client.post("/auth/register", json=payload).status_code == 201

        response = client.post(
            "/auth/register",
            json={"email": "existing@example.com", "password": "different"}
        )

        assert response.status_code == 409
        assert response.json() == {"message": "User already exists"}

    def test_register_email_is_case_sensitive(self, client):
        """Test emails are stored and compared exactly as given"""
        assert client.post("/auth/register", json={"email": "Case@example.com", "password": "secret1"}).status_code == 201

        response = client.post("/auth/register", json={"email": "case@example.com", "password": "secret1"})
        assert response.status_code == 201

    def test_register_missing_password(self, client):
        """Test registration without a password fails"""
        response = client.post("/auth/register", json={"email": "test@example.com"})

        assert response.status_code == 400
        assert response.json() == {"message": "Email and password required"}

    def test_register_empty_fields(self, client):
        """Test registration with empty strings fails"""
        response = client.post("/auth/register", json={"email": "", "password": ""})

        assert response.status_code == 400

    def test_register_malformed_json(self, client):
        """Test a body that is not JSON is a 400"""
        response = client.post(
            "/auth/register",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "message" in response.json()


class TestUserLogin:
    """Test user login endpoint"""

    def test_login_success(self, client):
        """Test successful login returns a token for the user"""
        register = client.post("/auth/register", json={"email": "test@example.com", "password": "secret1"})
        user_id = register.json()["id"]

        response = client.post("/auth/login", json={"email": "test@example.com", "password": "secret1"})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"token"}
        assert verify_token(data["token"]) == user_id

    def test_login_wrong_password(self, client):
        """Test login with wrong password fails"""
        client.post("/auth/register", json={"email": "test@example.com", "password": "secret1"})

        response = client.post("/auth/login", json={"email": "test@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_login_nonexistent_user(self, client):
        """Test login with nonexistent user fails"""
        response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret1"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_login_failures_are_indistinguishable(self, client):
        """Unknown email and wrong password produce identical responses"""
        client.post("/auth/register", json={"email": "real@example.com", "password": "secret1"})

        wrong_password = client.post("/auth/login", json={"email": "real@example.com", "password": "nope"})
        unknown_email = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.headers.get("www-authenticate") == unknown_email.headers.get("www-authenticate")

    def test_login_missing_fields(self, client):
        """Test login without credentials is a validation error"""
        response = client.post("/auth/login", json={"email": "test@example.com"})

        assert response.status_code == 400


class TestNullBytePasswords:
    """Passwords bcrypt cannot hash must not cause server errors"""

    def test_register_password_with_null_byte(self, client):
        response = client.post("/auth/register", json={"email": "nul@example.com", "password": "abc\u0000def"})

        assert response.status_code == 400
        assert response.json() == {"message": "Password cannot contain null characters"}

    def test_login_with_null_byte_looks_like_any_bad_password(self, client):
        """Known and unknown emails give the same 401 for a NUL-containing password"""
        client.post("/auth/register", json={"email": "real@x.com", "password": "secret1"})

        known = client.post("/auth/login", json={"email": "real@x.com", "password": "a\u0000b"})
        unknown = client.post("/auth/login", json={"email": "ghost@x.com", "password": "a\u0000b"})

        assert known.status_code == unknown.status_code == 401
        assert known.json() == unknown.json() == {"message": "Invalid credentials"}


def session_with_lookup(found=None):
    """A mock session whose user lookup returns `found`"""
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = found
    return db


class TestAuthStoreFailures:
    """Database failures in registration and login"""

    def test_concurrent_duplicate_registration_is_conflict(self):
        """A unique violation at commit time means another request registered the email first"""
        db = session_with_lookup(None)
        db.commit.side_effect = IntegrityError("INSERT INTO users", {}, Exception("duplicate key value"))

        with pytest.raises(ConflictError):
            AuthService(db).register("race@example.com", "secret1")

        db.rollback.assert_called_once()

    def test_concurrent_duplicate_registration_response(self, client):
        db = session_with_lookup(None)
        db.commit.side_effect = IntegrityError("INSERT INTO users", {}, Exception("duplicate key value"))

        def racing_db():
            yield db

        app.dependency_overrides[get_db] = racing_db

        response = client.post("/auth/register", json={"email": "race@example.com", "password": "secret1"})

        assert response.status_code == 409
        assert response.json() == {"message": "User already exists"}

    def test_register_store_failure_is_masked(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT users.id", {}, Exception("server at 10.9.8.7 closed the connection"))

        with pytest.raises(InternalError) as exc_info:
            AuthService(db).register("a@example.com", "secret1")

        assert exc_info.value.message == "Server error"
        db.rollback.assert_called_once()

    def test_login_store_failure_is_masked(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT users.id", {}, Exception("server at 10.9.8.7 closed the connection"))

        with pytest.raises(InternalError):
            AuthService(db).login("a@example.com", "secret1")

        db.rollback.assert_called_once()

    @pytest.mark.parametrize("path", ["/auth/register", "/auth/login"])
    def test_store_failure_response(self, client, path):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT users.id", {}, Exception("server at 10.9.8.7 closed the connection"))

        def broken_db():
            yield db

        app.dependency_overrides[get_db] = broken_db

        response = client.post(path, json={"email": "a@example.com", "password": "secret1"})

        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}
        assert "10.9.8.7" not in response.text

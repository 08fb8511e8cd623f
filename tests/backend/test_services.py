"""
Tests for service helpers.

These tests cover:
- Password hashing
- Lookup criteria classification
- Filter preparation
"""

import hashlib

import pytest


# =============================================================================
# Password Hashing Tests (user_service.core.security)
# =============================================================================

class TestPasswordHashing:
    """Tests for password hashing functions in user_service.core.security."""

    def test_hash_password_returns_sha256_hex_digest(self):
        """hash_password should return the hex sha256 digest."""
        from user_service.core.security import hash_password
        
        password = "TestPassword123!"
        hashed = hash_password(password)
        
        assert hashed == hashlib.sha256(password.encode()).hexdigest()
        assert hashed != password

    def test_hash_password_same_each_time(self):
        """hash_password should be deterministic."""
        from user_service.core.security import hash_password
        
        assert hash_password("TestPassword123!") == hash_password("TestPassword123!")

    def test_verify_password_correct_returns_true(self):
        """verify_password with correct password should return True."""
        from user_service.core.security import hash_password, verify_password
        
        hashed = hash_password("TestPassword123!")
        
        assert verify_password("TestPassword123!", hashed) is True

    def test_verify_password_wrong_returns_false(self):
        """verify_password with wrong password should return False."""
        from user_service.core.security import hash_password, verify_password
        
        hashed = hash_password("TestPassword123!")
        
        assert verify_password("WrongPassword123!", hashed) is False


# =============================================================================
# Criteria Classification Tests
# =============================================================================

class TestClassifyCriteria:
    """Tests for telling e-mails from identifiers."""

    @pytest.mark.parametrize("criteria", ["a@b.com", "john.doe@example.com", "@"])
    def test_strings_with_at_sign_are_emails(self, criteria):
        from user_service.services.user_service import classify_criteria, EMAIL_CRITERIA
        
        assert classify_criteria(criteria) == EMAIL_CRITERIA

    @pytest.mark.parametrize("criteria", ["507f1f77bcf86cd799439011", "not-an-id", ""])
    def test_other_strings_are_identifiers(self, criteria):
        from user_service.services.user_service import classify_criteria, ID_CRITERIA
        
        assert classify_criteria(criteria) == ID_CRITERIA


# =============================================================================
# Filter Preparation Tests
# =============================================================================

class TestPrepare:
    """Tests for turning user filters into queries."""

    def test_empty_filters_match_everything(self):
        from user_service.services.user_service import prepare
        
        assert prepare(None) == {}
        assert prepare({}) == {}

    def test_flags_are_passed_through(self):
        from user_service.services.user_service import prepare
        
        query = prepare({"isActive": True, "isAdmin": False})
        
        assert query == {"isActive": True, "isAdmin": False}

    def test_text_fields_become_case_insensitive_partial_matches(self):
        from user_service.services.user_service import prepare
        
        query = prepare({"email": "john", "firstName": "Jo", "lastName": "Do"})
        
        assert query == {
            "email": {"$regex": "john", "$options": "i"},
            "firstName": {"$regex": "Jo", "$options": "i"},
            "lastName": {"$regex": "Do", "$options": "i"},
        }

    def test_regex_characters_are_escaped(self):
        from user_service.services.user_service import prepare
        
        query = prepare({"email": "a.b+c"})
        
        assert query["email"]["$regex"] == r"a\.b\+c"

    def test_none_values_are_skipped(self):
        from user_service.services.user_service import prepare
        
        assert prepare({"email": None, "isActive": True}) == {"isActive": True}

    def test_unknown_field_is_rejected(self):
        from user_service.core.errors import InvalidFilterError
        from user_service.services.user_service import prepare
        
        with pytest.raises(InvalidFilterError):
            prepare({"$where": "sleep(1000)"})

    @pytest.mark.parametrize("filters", [
        {"isActive": {"$ne": None}},
        {"isAdmin": {"$exists": True}},
        {"email": {"$regex": ".*"}},
    ])
    def test_operator_values_are_rejected(self, filters):
        from user_service.core.errors import InvalidFilterError
        from user_service.services.user_service import prepare
        
        with pytest.raises(InvalidFilterError):
            prepare(filters)

    def test_accepts_user_filters_model(self):
        from user_service.schemas.user import UserFilters
        from user_service.services.user_service import prepare
        
        filters = UserFilters(isActive=True, lastName="doe")
        
        assert prepare(filters) == {
            "isActive": True,
            "lastName": {"$regex": "doe", "$options": "i"},
        }

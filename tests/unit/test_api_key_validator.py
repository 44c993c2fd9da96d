"""Unit tests for API key validation."""

import pytest
from fastapi import HTTPException

from kitchenpos.auth.api_dependencies import require_api_key
from kitchenpos.auth.api_key_validator import APIKeyValidator


@pytest.mark.unit
class TestAPIKeyValidator:
    """Test suite for APIKeyValidator."""

    def test_requires_at_least_one_key(self) -> None:
        """Test that an empty key list is a configuration error."""
        with pytest.raises(ValueError):
            APIKeyValidator(api_keys=[])

    def test_validate(self) -> None:
        """Test accepting configured keys and rejecting others."""
        validator = APIKeyValidator(api_keys=["key-1", "key-2"])

        assert validator.validate("key-2") is True
        assert validator.validate("key-3") is False
        assert validator.validate("") is False

    def test_validate_non_ascii_key(self) -> None:
        """Test that non-ASCII keys are compared instead of raising TypeError."""
        validator = APIKeyValidator(api_keys=["key-1", "café"])

        assert validator.validate("cafÃ©") is False
        assert validator.validate("café") is True


@pytest.mark.unit
class TestRequireApiKey:
    """Test suite for the require_api_key dependency helper."""

    def test_missing_key_raises_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_api_key(None, APIKeyValidator(api_keys=["key-1"]))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Missing API key"

    def test_invalid_key_raises_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_api_key("wrong", APIKeyValidator(api_keys=["key-1"]))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid API key"

    def test_valid_key_is_returned(self) -> None:
        assert require_api_key("key-1", APIKeyValidator(api_keys=["key-1"])) == "key-1"

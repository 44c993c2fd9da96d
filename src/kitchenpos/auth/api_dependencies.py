"""FastAPI dependency helpers for API key authentication."""

from fastapi import HTTPException

from kitchenpos.auth.api_key_validator import APIKeyValidator


def require_api_key(x_api_key: str | None, validator: APIKeyValidator) -> str:
    """Validate the X-API-Key header value.

    Args:
        x_api_key: Header value, None when the header is absent
        validator: Validator holding the accepted keys

    Returns:
        str: The validated API key

    Raises:
        HTTPException: 401 if the key is missing or not accepted
    """
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key

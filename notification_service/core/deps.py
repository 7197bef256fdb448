import hmac
from typing import Optional

from fastapi import Header, Request

from notification_service.core.config import Settings
from notification_service.core.errors import ServiceAuthError


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def verify_service_auth(
    request: Request,
    x_api_key: Optional[str] = Header(None, alias="x-api-key"),
) -> None:
    """
    Shared-secret gate for machine-to-machine calls.
    The header must equal SERVICE_API_KEY exactly; anything else is rejected
    before the request body is looked at.
    """
    expected = get_app_settings(request).SERVICE_API_KEY
    if not x_api_key or not hmac.compare_digest(x_api_key.encode("utf-8"), expected.encode("utf-8")):
        raise ServiceAuthError()

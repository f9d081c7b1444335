"""Provider token and service dependencies.

The caller's provider token travels as a Bearer credential and is forwarded
to the provider as-is; nothing here stores or validates it beyond presence.
"""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from repolens.core.exceptions import UnauthorizedError
from repolens.services.providers import ProviderKind, ProviderService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_provider_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Return the Bearer token or raise 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


async def get_provider_service(
    provider: ProviderKind,
    token: str = Depends(get_provider_token),
) -> ProviderService:
    """ProviderService for the provider named in the path."""
    return ProviderService(provider, token)


Provider = Annotated[ProviderService, Depends(get_provider_service)]

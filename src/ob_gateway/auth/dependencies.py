"""FastAPI dependency: require_indexer_service.

Usage in any protected router:
    from src.ob_gateway.auth.dependencies import require_indexer_service

    @router.post("/protected")
    async def protected(service: str = Depends(require_indexer_service)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import settings
from src.ob_common.errors import InvalidServiceTokenError, ServiceNotAllowedError
from src.ob_gateway.auth.jwt_handler import decode_service_token

bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def require_indexer_service(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Validate the bearer service token and return the calling service name.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    Raises HTTP 403 (ServiceNotAllowedError) for any service other than the indexer.
    """
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        payload = decode_service_token(credentials.credentials)
    except InvalidServiceTokenError:
        raise _CREDENTIALS_EXCEPTION from None

    service = payload["sub"]
    if service != settings.INDEXER_SERVICE_NAME:
        raise ServiceNotAllowedError(service)
    return service

"""Service-to-service JWT creation and verification.

Only the upstream chain indexer calls this service, so tokens identify a
service (sub = service name) rather than a user. HS256 with the shared
JWT_SECRET.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.ob_common.errors import InvalidServiceTokenError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_SERVICE_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_TOKEN_TYPE = "service"


def create_service_token(service_name: str) -> str:
    """Issue a service token (default: 60 min)."""
    now = datetime.now(UTC)
    payload = {
        "sub": service_name,
        "type": _TOKEN_TYPE,
        "iat": now,
        "exp": now + _SERVICE_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_service_token(token: str) -> dict[str, str]:
    """Decode and validate a service token.

    Raises:
        InvalidServiceTokenError: signature/expiry invalid, or the token is
            not a service token.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidServiceTokenError() from None

    if payload.get("type") != _TOKEN_TYPE or not payload.get("sub"):
        raise InvalidServiceTokenError()

    return payload

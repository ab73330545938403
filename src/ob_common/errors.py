"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  3xxx: Pool
  4xxx: Order
  6xxx: External collaborators (oracle, chain config)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidServiceTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Service token is invalid or expired", 401)


class ServiceNotAllowedError(AppError):
    def __init__(self, service: str) -> None:
        super().__init__(1002, f"Service not allowed: {service}", 403)


# --- 3xxx: Pool ---

class PoolDetailsNotFoundError(AppError):
    def __init__(self, pool: str) -> None:
        super().__init__(3001, f"Could not fetch pool details: {pool}", 404)


# --- 4xxx: Order ---

class NoTokenSetAvailableError(AppError):
    def __init__(self, token_set_id: str) -> None:
        super().__init__(4001, f"No token set available: {token_set_id}", 422)


# --- 6xxx: External ---

class PricingOracleUnavailableError(AppError):
    def __init__(self, pool: str, detail: str) -> None:
        super().__init__(6001, f"Pricing oracle unavailable for pool {pool}: {detail}", 502)


class UnsupportedChainError(AppError):
    def __init__(self, chain_id: int) -> None:
        super().__init__(6002, f"Unsupported chain id: {chain_id}", 500)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)

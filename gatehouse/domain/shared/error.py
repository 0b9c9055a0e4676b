"""Error hierarchy for Gatehouse.

Error layers:
- GatehouseError: Base class for all Gatehouse errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage/network issues (503 responses)

Membership checks never raise for "not found" conditions. They answer False.
Errors raised by a backing store propagate unchanged.
"""

from typing import Any


class GatehouseError(Exception):
    """Base class for all Gatehouse errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(GatehouseError):
    """Base class for domain/business errors."""

    status_code = 400


class ValidationError(DomainError):
    """Input validation failed.

    ``codes`` names the violated rules for ``field`` (e.g. ``["uniqueness"]``)
    and is exposed as ``details["codes"][field]``.
    """

    status_code = 422

    def __init__(
        self,
        message: str,
        field: str | None = None,
        codes: list[str] | None = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.codes = list(codes or [])

    @property
    def details(self) -> dict[str, Any]:
        if self.field is None:
            return {"codes": {}}
        return {"codes": {self.field: list(self.codes)}}


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(GatehouseError):
    """Base class for infrastructure/system errors."""

    status_code = 503


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""

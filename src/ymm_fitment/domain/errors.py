"""Domain errors.

Raised by use cases and adapters, independent of any transport. The HTTP
layer turns them into responses by ``error_code``.
"""

from typing import Any


class DomainError(Exception):
    """Root of every business failure.

    ``message`` is meant for humans; ``error_code`` is stable and safe to
    branch on. Keyword arguments are kept as structured context.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """Input breaks a business rule (inverted year range, blank make, unknown vehicle id).

    Carries optional per-field entries shaped like
    ``{"field": "make", "message": "Must not be empty", "code": "REQUIRED"}``.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class PagingValidationError(ValidationError):
    """Offset or limit outside the accepted bounds."""


class NotFoundError(DomainError):
    """A vehicle range, store or other resource does not exist."""

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """The store rejected a write because of a constraint."""

    error_code: str = "CONFLICT"


class InternalError(DomainError):
    """An invariant the code relies on did not hold."""

    error_code: str = "INTERNAL_ERROR"


class UpstreamGatewayError(DomainError):
    """The external product catalog failed: transport error, timeout or non-2xx reply."""

    error_code: str = "UPSTREAM_GATEWAY_ERROR"


class ProductResolutionError(DomainError):
    """Compatible product ids could not be turned into display data.

    Usually chained from an UpstreamGatewayError raised for one batch; the
    whole search fails with it.
    """

    error_code: str = "PRODUCT_RESOLUTION_ERROR"

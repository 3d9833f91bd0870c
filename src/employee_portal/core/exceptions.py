class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateError(ValidationError):
    """Raised when a unique value (email, username, invoice number, ...) is already taken."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""


class AuthenticationError(DomainError):
    """Raised when a request carries no valid credentials."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class IdentityProviderError(DomainError):
    """Raised when the external identity provider cannot be reached."""

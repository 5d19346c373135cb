class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotRegisteredError(DomainError):
    """Raised when a student or registration cannot be found."""


class DuplicateCheckinError(DomainError):
    """Raised when a student is already checked in for an event (and day)."""


class StoreUnavailableError(DomainError):
    """Raised when the persistence layer cannot be read or written."""


class AuthRequiredError(DomainError):
    """Raised when a guarded operation is attempted without an identity."""


class AuthenticationError(DomainError):
    """Raised when credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DocumentShapeError(DomainError):
    """Raised when a stored document does not have the shape of its entity."""

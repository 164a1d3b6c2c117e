"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when a ledger rule rejects the input; nothing has changed."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised for an unknown account, category or transaction id."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class PersistenceError(AppError):
    """
    Raised when a backing store rejects a read or a write.

    Adapters wrap driver errors (SQLAlchemy, HTTP, document store) in this
    type so the ledger service can roll back without knowing the backend.
    """

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_ERROR")

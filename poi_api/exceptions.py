from typing import Any, Optional


class AppException(Exception):
    """
    Base class for all application errors.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """
    Referenced entity does not exist (or was deleted concurrently).
    """

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} with ID {entity_id} not found",
            details={"entity": entity, "id": entity_id},
        )


class ValidationFailedError(AppException):
    """
    Payload failed validation. ``field_errors`` holds one
    ``{"field": ..., "message": ...}`` entry per problem.
    """

    def __init__(self, field_errors: list[dict[str, str]]):
        self.field_errors = field_errors
        super().__init__("Validation failed", details={"errors": field_errors})


class PersistenceError(AppException):
    """
    Store-level failure: constraint violation, lost connection, rollback.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)

from typing import Any, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from poi_api.exceptions import ValidationFailedError

ModelT = TypeVar("ModelT", bound=BaseModel)


def field_errors(exc: ValidationError | RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to ``{"field": "address.zipCode", "message": ...}``."""
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.append({"field": field, "message": err["msg"]})
    return errors


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    """Validate a raw JSON payload into ``model`` or raise ValidationFailedError."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailedError(field_errors(e)) from e

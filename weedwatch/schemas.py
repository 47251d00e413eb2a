"""Boundary schemas for request bodies and upstream responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from weedwatch.errors import UpstreamError, ValidationError


class Credentials(BaseModel):
    """Body of ``POST /signup`` and ``POST /login``."""

    email: str = Field(min_length=1, max_length=120)
    password: str = Field(min_length=1)


class DetectionResult(BaseModel):
    """JSON returned by the detection service's ``/detect/`` endpoint."""

    model_config = ConfigDict(extra="ignore")

    original_image_url: str
    processed_image_url: str
    weedCount: int = Field(ge=0)
    weedsEliminated: int = Field(ge=0)
    successRate: float = Field(allow_inf_nan=False)


def parse_credentials(payload):
    if not isinstance(payload, dict):
        raise ValidationError("Email and password required")
    try:
        return Credentials.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Email and password required")


def parse_detection_result(payload):
    try:
        return DetectionResult.model_validate(payload)
    except PydanticValidationError as e:
        raise UpstreamError(f"Malformed detection response: {e.error_count()} invalid field(s)") from e

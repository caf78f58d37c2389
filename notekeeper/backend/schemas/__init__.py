# Pydantic schemas package
from notekeeper.backend.schemas.base import (
    ApiModel,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)

__all__ = [
    "ApiModel",
    "ErrorDetail",
    "ErrorResponse",
    "ResponseMetadata",
]

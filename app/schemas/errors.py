"""
Error schema models for the API.

This module contains Pydantic models for the error envelope returned by
every failing operation: ``{"error": "<message>"}``, with the offending
fields listed under ``detail`` for validation failures.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

class ValidationErrorItem(BaseModel):
    """A single validation error details."""
    field: Optional[str] = Field(
        None, 
        description="The field path that caused the error",
        examples=["body.scenario"]
    )
    message: str = Field(
        ..., 
        description="Human-readable error message",
        examples=["Field required"]
    )
    type: str = Field(
        ..., 
        description="The error type identifier",
        examples=["missing"]
    )

class ErrorDetail(BaseModel):
    """Details of an API error."""
    errors: List[ValidationErrorItem] = Field(
        ..., 
        description="List of validation errors"
    )

class ErrorResponse(BaseModel):
    """Standard error envelope."""
    error: str = Field(
        ..., 
        description="Short human-readable error message",
        examples=["failed creating alert"]
    )
    detail: Optional[ErrorDetail] = Field(
        None, 
        description="Detailed error information if available"
    )
    
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "Validation error",
                    "detail": {
                        "errors": [
                            {
                                "field": "body.scenario",
                                "message": "Field required",
                                "type": "missing"
                            }
                        ]
                    }
                }
            ]
        }
    }

def validation_errors_to_items(errors) -> List[ValidationErrorItem]:
    """Convert pydantic error dicts into ValidationErrorItem entries."""
    return [
        ValidationErrorItem(
            field=".".join(str(loc) for loc in error["loc"]) if error.get("loc") else None,
            message=error.get("msg", "Validation error"),
            type=error.get("type", "unknown_error")
        )
        for error in errors
    ]

#!/usr/bin/env python3
"""
Response Schemas for Screen Vision CLI

This module provides the Pydantic models for structured CLI output and the
helper that builds ``--json`` responses from them.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- format_cli_response(True, data={"file": "/tmp/screen-vision/monitor1_...png"})
- format_cli_response(False, error="Region exceeds monitor bounds", error_type="invalid_region")

Expected output:
- {"success": True, "data": {"file": "/tmp/screen-vision/monitor1_...png"}}
- {"success": False, "error": "Region exceeds monitor bounds", "error_type": "invalid_region"}
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response model"""
    success: bool = False
    error: str
    error_type: str = "error"
    details: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseModel):
    """Success response model"""
    success: bool = True
    data: Dict[str, Any]


def format_cli_response(
    success: bool,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    error_type: str = "error",
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Format a standardized CLI response.

    Args:
        success: Whether the operation was successful
        data: Response data (for successful operations)
        error: Error message (for failed operations)
        error_type: Machine-checkable error category
        details: Extra error context such as available monitors or bounds

    Returns:
        Dict[str, Any]: Formatted response
    """
    if success and data is not None:
        return SuccessResponse(data=data).model_dump()
    elif not success and error is not None:
        response = ErrorResponse(error=error, error_type=error_type, details=details).model_dump()
        if response.get("details") is None:
            del response["details"]
        return response
    else:
        return {"success": success}

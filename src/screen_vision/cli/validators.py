#!/usr/bin/env python3
"""
Validators for Screen Vision CLI

This module provides Typer callbacks that validate CLI inputs with the
same rules the MCP tools apply, printing a friendly error and exiting on
bad input.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- CLI parameter values

Expected output:
- Validated and processed parameter values
- Friendly error messages
"""

import os
from typing import Optional

import typer
from loguru import logger

from screen_vision.core.utils import validate_delay, validate_format, validate_quality, validate_resize
from screen_vision.cli.formatters import print_error


def validate_quality_option(ctx: typer.Context, value: int) -> int:
    """
    Typer callback for validating quality option.

    Args:
        ctx: Typer context
        value: Quality value from CLI

    Returns:
        int: Quality clamped to 1-100
    """
    return validate_quality(value)


def validate_format_option(ctx: typer.Context, value: str) -> str:
    """Typer callback normalising the output format ("jpg" becomes "jpeg")."""
    try:
        return validate_format(value)
    except ValueError as e:
        logger.debug(f"Format validation error: {str(e)}")
        print_error(str(e))
        raise typer.Exit(1)


def validate_resize_option(ctx: typer.Context, value: Optional[int]) -> Optional[int]:
    """Typer callback for the maximum dimension option."""
    try:
        return validate_resize(value)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def validate_delay_option(ctx: typer.Context, value: Optional[float]) -> float:
    """Typer callback for the pre-capture delay in seconds."""
    try:
        return validate_delay(value)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)


def validate_file_exists(ctx: typer.Context, value: str) -> str:
    """
    Typer callback for validating a file exists.

    Args:
        ctx: Typer context
        value: File path from CLI

    Returns:
        str: Validated file path
    """
    if not os.path.exists(value):
        print_error(f"File not found: {value}")
        raise typer.Exit(1)

    if not os.path.isfile(value):
        print_error(f"Not a file: {value}")
        raise typer.Exit(1)

    return value


def validate_json_output(ctx: typer.Context, value: bool) -> bool:
    """
    Typer callback for validating JSON output option.

    Args:
        ctx: Typer context
        value: JSON output flag from CLI

    Returns:
        bool: Validated JSON output flag
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = value
    return value

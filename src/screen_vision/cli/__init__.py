"""
CLI Layer for Screen Vision

This package contains the CLI (Command Line Interface) layer, providing a
rich interface for human users on top of the core capture functions.

The CLI layer is designed to:
1. Handle user interaction concerns
2. Format outputs for human readability
3. Parse and validate command-line arguments
4. Implement CLI-specific error handling

Usage:
    from screen_vision.cli import app
    app()

    # Alternative: use formatters directly
    from screen_vision.cli.formatters import print_capture_result
    result = capture_screenshot(monitor="primary")
    print_capture_result(result)
"""

# CLI application
from screen_vision.cli.cli import app

# Formatters for rich output
from screen_vision.cli.formatters import (
    print_monitors_table,
    print_capture_result,
    print_ocr_result,
    print_screenshots_table,
    print_error,
    print_warning,
    print_info,
    print_json,
    console
)

# CLI validators
from screen_vision.cli.validators import (
    validate_quality_option,
    validate_format_option,
    validate_resize_option,
    validate_delay_option,
    validate_file_exists,
    validate_json_output
)

# Response schemas
from screen_vision.cli.schemas import (
    ErrorResponse,
    SuccessResponse,
    format_cli_response
)

__all__ = [
    'app',
    'print_monitors_table',
    'print_capture_result',
    'print_ocr_result',
    'print_screenshots_table',
    'print_error',
    'print_warning',
    'print_info',
    'print_json',
    'console',
    'validate_quality_option',
    'validate_format_option',
    'validate_resize_option',
    'validate_delay_option',
    'validate_file_exists',
    'validate_json_output',
    'ErrorResponse',
    'SuccessResponse',
    'format_cli_response',
]

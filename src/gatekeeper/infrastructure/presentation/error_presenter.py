"""
ErrorPresenter - User-friendly error message generation.

Turns startup and dependency failures into messages an operator can act on.
Supports verbose mode for technical details.
"""

import traceback
from typing import Tuple, List

from ...domain.exceptions import ConfigurationError, DependencyUnavailable


class ErrorPresenter:
    """
    Presents errors to operators with helpful messages and actions.

    Provides two modes:
    - Normal: User-friendly message with actionable suggestions
    - Verbose: Technical details including stack trace
    """

    @staticmethod
    def present(error: BaseException, verbose: bool = False) -> str:
        """
        Present error with user-friendly message.

        Args:
            error: Exception to present
            verbose: Show technical details (stack trace, error type)

        Returns:
            Formatted error message
        """
        message, suggestions = ErrorPresenter._get_friendly_message(error)

        if verbose:
            return ErrorPresenter._format_verbose(error, message, suggestions)
        return ErrorPresenter._format_friendly(message, suggestions)

    @staticmethod
    def _get_friendly_message(error: BaseException) -> Tuple[str, List[str]]:
        """Get friendly message and actionable suggestions for an error."""
        error_str = str(error)

        if isinstance(error, ConfigurationError):
            suggestions = []
            if error.property_name:
                suggestions.append(
                    f"Check the value of '{error.property_name}' (must be an integer >= 0, 0 = unlimited)"
                )
            suggestions.extend([
                "Validate the configuration: `gatekeeper config --show`",
                "Restart the gateway after fixing the configuration",
            ])
            return (f"Invalid concurrency limit configuration: {error_str}", suggestions)

        if isinstance(error, DependencyUnavailable):
            dependency = error.dependency or "a dependency"
            return (
                f"Could not check connection limits: {dependency} is unavailable",
                [
                    "Connection attempts are denied until it recovers",
                    f"Check that {dependency} is reachable",
                ]
            )

        if isinstance(error, FileNotFoundError):
            file_path = error_str.replace("Configuration file not found: ", "").replace(
                "[Errno 2] No such file or directory: ", "").strip("'\"")
            return (
                f"File not found: {file_path}",
                [
                    "Check the file path is correct",
                    "Create a default configuration: `gatekeeper config --init`",
                ]
            )

        if isinstance(error, PermissionError):
            path = error_str.replace("[Errno 13] Permission denied: ", "").strip("'\"")
            return (
                f"Permission denied: {path}",
                [
                    f"Check file permissions: `ls -la {path}`",
                    "Ensure the gateway user has read access to the file",
                ]
            )

        if isinstance(error, KeyboardInterrupt):
            return ("Operation cancelled by user", [])

        error_type = type(error).__name__
        error_msg = error_str if error_str else "No details available"

        return (
            f"An error occurred: {error_type}",
            [
                f"Error details: {error_msg}",
                "Run with --verbose for more information",
            ]
        )

    @staticmethod
    def _format_friendly(message: str, suggestions: List[str]) -> str:
        output = [f"Error: {message}"]

        if suggestions:
            output.append("")
            output.append("Suggestions:")
            for suggestion in suggestions:
                output.append(f"  - {suggestion}")

        return "\n".join(output)

    @staticmethod
    def _format_verbose(error: BaseException, message: str, suggestions: List[str]) -> str:
        output = [ErrorPresenter._format_friendly(message, suggestions)]

        output.append("")
        output.append("Technical Details:")
        output.append(f"  Error Type: {type(error).__name__}")
        output.append(f"  Error Message: {str(error)}")

        if error.__cause__:
            output.append(f"  Caused by: {type(error.__cause__).__name__}: {str(error.__cause__)}")

        output.append("")
        output.append("Traceback:")
        for line in traceback.format_exception(type(error), error, error.__traceback__):
            for sub_line in line.rstrip().split('\n'):
                output.append(f"  {sub_line}")

        return "\n".join(output)

"""Exception types and human-readable messages for hq failures.

Only two things can go wrong before any output is produced: acquiring the
input text, and compiling the selector. Parsing, extraction and rendering are
total over their inputs and never raise.
"""

from __future__ import annotations


class HQError(Exception):
    """Base class for all errors raised by hq."""


class SelectorError(HQError, ValueError):
    """Raised when a CSS selector is empty or invalid."""


class InputError(HQError):
    """Raised when the HTML input cannot be acquired.

    `code` is one of the kebab-case keys understood by
    `generate_error_message`.
    """

    code: str
    path: str | None

    def __init__(self, code: str, path: str | None = None, detail: str | None = None) -> None:
        self.code = code
        self.path = path
        super().__init__(generate_error_message(code, path=path, detail=detail))


def generate_error_message(code: str, path: str | None = None, detail: str | None = None) -> str:
    """Generate a human-readable error message from an error code.

    Args:
        code: The error code string (kebab-case format)
        path: Optional input path to include in the message
        detail: Optional underlying error text (e.g. from an OSError)

    Returns:
        Human-readable error message string
    """
    messages = {
        # Input acquisition
        "no-input": "No input provided (pass a file path or pipe HTML on stdin)",
        "no-file": f"No such file: {path}",
        "file-error": f"Error reading from file {path}: {detail}",
        "stdin-error": f"Error reading from stdin: {detail}",
    }

    # Return message or fall back to the code itself if not found
    return messages.get(code, code)

"""Error types raised by the admin client, and structured CLI error output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class AdminError(Exception):
    """Base class for failures surfaced by the admin client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(AdminError):
    """The backend answered with a non-2xx status."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status})"


class TransportError(AdminError):
    """The request never got a response (DNS, refused connection, timeout)."""

    def __init__(self, message: str, timeout: bool = False) -> None:
        super().__init__(message)
        self.timeout = timeout


_LOGIN_HINT = "Session expired or missing — run `agentcost-admin auth login`"
_URL_HINT = "Check AGENTCOST_API_URL and network connectivity"

_STATUS_CODES: dict[int, str] = {
    400: "INVALID_ARGUMENT",
    401: "AUTH_ERROR",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    422: "INVALID_ARGUMENT",
    429: "RATE_LIMITED",
}

_STATUS_HINTS: dict[int, str] = {
    401: _LOGIN_HINT,
    403: "This account does not have admin privileges",
    404: "The specified resource does not exist — verify the ID",
    422: "Invalid argument — check parameter values and types",
    429: "Rate limited — wait a moment and retry",
}


def error_code(error: Exception) -> str:
    """Classify an error into a stable machine-readable code."""
    if isinstance(error, TransportError):
        return "TIMEOUT" if error.timeout else "CONNECTION_ERROR"
    if isinstance(error, ApiError):
        if error.status in _STATUS_CODES:
            return _STATUS_CODES[error.status]
        if 500 <= error.status < 600:
            return "SERVER_ERROR"
        return "API_ERROR"
    return "RUNTIME_ERROR"


def _get_hint(error: Exception) -> str | None:
    """Match an error to an actionable hint."""
    if isinstance(error, TransportError):
        return _URL_HINT
    if isinstance(error, ApiError):
        if 500 <= error.status < 600:
            return "Backend error — check system health or try again later"
        return _STATUS_HINTS.get(error.status)
    return None


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for scripts:
    {"error": true, "code": "AUTH_ERROR", "message": "...", "status": 401, "hint": "..."}
    """
    message = getattr(error, "message", None) or str(error)
    hint = _get_hint(error)

    error_obj: dict[str, object] = {
        "error": True,
        "code": error_code(error),
        "message": message,
    }
    if isinstance(error, ApiError):
        error_obj["status"] = error.status
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {error}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")

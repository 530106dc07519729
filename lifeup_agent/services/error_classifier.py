"""Map LifeUp transport failures and response envelopes to domain errors."""

import socket
from dataclasses import dataclass
from typing import Any, Optional

import httpx

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

CONNECTION_REFUSED = "CONNECTION_REFUSED"
HOSTNAME_RESOLUTION_FAILED = "HOSTNAME_RESOLUTION_FAILED"
REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
NETWORK_ERROR = "NETWORK_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
SERVER_ERROR = "SERVER_ERROR"
CONTENT_PROVIDER_ERROR = "CONTENT_PROVIDER_ERROR"
API_ERROR = "API_ERROR"
SERVER_UNREACHABLE = "SERVER_UNREACHABLE"
OPERATION_BLOCKED = "OPERATION_BLOCKED"
ACHIEVEMENT_NOT_FOUND = "ACHIEVEMENT_NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"

# LifeUp envelope codes
SUCCESS_CODE = 200
CONTENT_PROVIDER_CODE = 10002


@dataclass
class LifeUpError:
    code: str
    # Technical detail, for logs only
    message: str
    user_message: str
    recoverable: bool = True

    def to_dict(self) -> dict:
        return {
            "success": False,
            "code": self.code,
            "message": self.user_message,
            "recoverable": self.recoverable,
        }


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


def _causes(exc: BaseException):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def _is_dns_failure(exc: BaseException) -> bool:
    for cause in _causes(exc):
        if isinstance(cause, socket.gaierror):
            return True
        text = str(cause).lower()
        if "name or service not known" in text or "nodename nor servname" in text or "getaddrinfo" in text:
            return True
    return False


def _is_refused(exc: BaseException) -> bool:
    for cause in _causes(exc):
        if isinstance(cause, ConnectionRefusedError) or "refused" in str(cause).lower():
            return True
    return False


def classify_transport_error(exc: Exception, host: str, port: int) -> LifeUpError:
    base_url = f"http://{host}:{port}"

    if isinstance(exc, httpx.TimeoutException):
        return LifeUpError(
            REQUEST_TIMEOUT,
            f"Request timeout to {base_url}",
            "LifeUp server is taking too long to respond. It may be under heavy load or the "
            "connection may be unstable. Try again in a moment.",
        )

    if isinstance(exc, httpx.ConnectError) and _is_dns_failure(exc):
        return LifeUpError(
            HOSTNAME_RESOLUTION_FAILED,
            f"Cannot resolve hostname {host}: {exc}",
            f"Cannot resolve the LifeUp server address: {host}. Please check that the IP "
            "address is correct or try using a different hostname.",
        )

    if isinstance(exc, httpx.ConnectError) and _is_refused(exc):
        return LifeUpError(
            CONNECTION_REFUSED,
            f"Connection refused at {base_url}",
            f"LifeUp server is not reachable at {base_url}. Please ensure:\n"
            "1. LifeUp app is running on your Android device\n"
            "2. Your devices are connected to the same WiFi network\n"
            f"3. The IP address is correct (current: {host}:{port})\n\n"
            "You can update the IP by setting environment variables:\n"
            "  LIFEUP_HOST=<new-ip>\n"
            "  LIFEUP_PORT=<port>",
        )

    return LifeUpError(
        NETWORK_ERROR,
        f"Network error: {exc!r}",
        "Network error connecting to LifeUp. Please check your connection and try again.",
    )


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


def classify_response(status_code: int, body: Any, context: str) -> Optional[LifeUpError]:
    """Return None for a successful envelope, otherwise the matching LifeUpError."""
    envelope = body if isinstance(body, dict) else {}
    remote_message = envelope.get("message") or ""

    if status_code == 401:
        return LifeUpError(
            UNAUTHORIZED,
            "Unauthorized: Invalid API token",
            "API token is invalid. Please check your LifeUp settings and ensure the API token "
            "matches the LIFEUP_API_TOKEN environment variable.",
        )

    if status_code == 500:
        detail = remote_message or "Internal server error"
        return LifeUpError(
            SERVER_ERROR,
            f"LifeUp server error in {context}: {detail}",
            "LifeUp server encountered an internal error. This may be a temporary issue. "
            "Try again later.",
        )

    if envelope.get("code") == CONTENT_PROVIDER_CODE:
        detail = remote_message or "Content provider error"
        return LifeUpError(
            CONTENT_PROVIDER_ERROR,
            f"Content provider error in {context}: {detail}",
            "This LifeUp feature is not available. It may not be supported by your LifeUp "
            "version or is not properly configured.",
            recoverable=False,
        )

    if not 200 <= status_code < 300:
        return LifeUpError(
            API_ERROR,
            f"API error in {context}: HTTP {status_code} {remote_message}".rstrip(),
            f"Error communicating with LifeUp ({context}). Please try again.",
        )

    if not isinstance(body, dict):
        return LifeUpError(
            API_ERROR,
            f"API error in {context}: malformed response body {body!r}",
            f"LifeUp returned an unexpected response ({context}). Please try again.",
        )

    if envelope.get("code") != SUCCESS_CODE:
        return LifeUpError(
            API_ERROR,
            f"API error in {context}: code={envelope.get('code')} {remote_message}".rstrip(),
            f"LifeUp rejected the request ({context}). Please check the values and try again.",
        )

    return None


def server_unreachable(host: str, attempts: int) -> LifeUpError:
    return LifeUpError(
        SERVER_UNREACHABLE,
        f"LifeUp health check failed after {attempts} attempts",
        "The LifeUp server is not responding. Please:\n"
        "1. Ensure LifeUp is running on your Android device\n"
        "2. Check your WiFi connection\n"
        f"3. Verify the IP address is correct (current: {host})\n\n"
        "If the IP has changed, update it with:\n"
        "  LIFEUP_HOST=<new-ip>",
    )

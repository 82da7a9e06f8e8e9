from typing import Optional

from deepseek_client.schemas.chat import ErrorResponse


class DeepSeekError(Exception):
    """Base class for every failure raised by the client.

    Each subclass is one disjoint outcome of a single call, so callers can
    branch on the exception type (or on the stable `kind` string, which is
    also used as the metrics outcome label).
    """

    kind = "error"


class EncodeError(DeepSeekError):
    """Raised when the request body cannot be serialized to JSON.

    No network call has been attempted when this is raised.
    """

    kind = "encode_error"


class RequestBuildError(DeepSeekError):
    """Raised when the outbound HTTP request cannot be constructed."""

    kind = "request_build_error"


class ExecuteError(DeepSeekError):
    """Raised on transport failures (DNS, refused, reset, timeout, deadline)."""

    kind = "execute_error"


class APIError(DeepSeekError):
    """Raised when the API answers with a status code >= 400.

    Carries the status captured from the transport and the `code`/`message`
    pair supplied in the `{"error": {...}}` body.
    """

    kind = "api_error"

    def __init__(self, response: ErrorResponse):
        self.response = response
        self.status_code = response.http_status_code
        self.code = response.error.code
        self.message = response.error.message
        super().__init__(
            f"api error: [{self.code}] {self.message} (status {self.status_code})"
        )


class DecodeErrorResponseError(DeepSeekError):
    """Raised when a >= 400 response body is not a decodable error object.

    The status code is still available for coarse classification.
    """

    kind = "decode_error_response_error"

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        message = f"failed to decode error response (status {status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DecodeResponseError(DeepSeekError):
    """Raised when a successful response body cannot be decoded."""

    kind = "decode_response_error"

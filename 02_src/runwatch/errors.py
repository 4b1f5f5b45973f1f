"""Error types shared by the service and the client primitives.

Routes map these to HTTP status codes:

    try:
        result = await service.list_messages(run_id)
    except InvalidRequest as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
"""


class RunwatchError(Exception):
    """Base exception for all runwatch errors."""


class InvalidRequest(RunwatchError):
    """A required parameter is missing or malformed. Maps to HTTP 400."""


class TransportFailure(RunwatchError):
    """Network or connectivity error while fetching."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class UpstreamFailure(RunwatchError):
    """The server answered with a non-success status or an unreadable body."""

    def __init__(self, url: str, status_code: int, message: str | None = None):
        super().__init__(message or f"HTTP {status_code}")
        self.url = url
        self.status_code = status_code

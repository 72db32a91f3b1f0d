"""
Addon Errors
Error taxonomy for request routing and resource resolution
"""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AddonError(Exception):
    """Base class for every error the addon turns into an HTTP response"""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class DecodeError(AddonError):
    """Raised when an extra-parameter path segment cannot be decoded"""

    status_code = 404
    public_message = "Not found"


class MalformedSegment(DecodeError):
    """Segment is missing the `key=` prefix or the `.json` suffix"""


class EmptyQuery(DecodeError):
    """Segment decoded to an empty identifier list"""


class NoSupportedIds(AddonError):
    """None of the requested identifiers match the manifest prefixes"""

    status_code = 404
    public_message = "Not found"


class UnresolvedCapability(AddonError):
    """A declared resource/type combination has no resolver"""

    status_code = 501
    public_message = "Not implemented"


class ResolverFailure(AddonError):
    """The backing resolver failed or timed out"""

    status_code = 500
    public_message = "Failed to resolve resource"


async def addon_error_handler(request: Request, exc: AddonError) -> JSONResponse:
    """Render an AddonError as a JSON response without leaking resolver internals"""
    if exc.status_code >= 500 and not isinstance(exc, UnresolvedCapability):
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            exc_info=exc.__cause__ or exc,
        )
        detail = exc.public_message
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        detail = exc.message

    return JSONResponse(status_code=exc.status_code, content={"detail": detail})

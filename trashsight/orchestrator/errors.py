ERR_CAPTURE_UNAVAILABLE = "CAPTURE_UNAVAILABLE"
ERR_TRANSPORT = "TRANSPORT_FAILURE"
ERR_SERVICE = "SERVICE_ERROR"
ERR_STALE = "STALE_RESPONSE"
ERR_NO_IMAGE = "NO_IMAGE_SELECTED"
ERR_IN_FLIGHT = "REQUEST_IN_FLIGHT"
ERR_PREVIEW = "PREVIEW_ERROR"

GENERIC_ANALYZE_ERROR = "Failed to analyze image. Please try again."
GENERIC_CAPTURE_ERROR = "Camera unavailable. Check permissions or connect a camera."


class TrashSightError(Exception):
    code = "UNKNOWN"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class CaptureUnavailable(TrashSightError):
    """Camera permission denied or no device."""
    code = ERR_CAPTURE_UNAVAILABLE


class TransportFailure(TrashSightError):
    """No response from the classification service."""
    code = ERR_TRANSPORT


class ServiceError(TrashSightError):
    """Service answered, but with an error (non-2xx or error payload)."""
    code = ERR_SERVICE

    def __init__(self, message: str = "", status_code: int | None = None, service_message: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        # message supplied by the remote service itself, if any
        self.service_message = service_message


class StaleResponse(TrashSightError):
    code = ERR_STALE


class NoImageSelected(TrashSightError):
    code = ERR_NO_IMAGE


class RequestInFlight(TrashSightError):
    code = ERR_IN_FLIGHT


class PreviewError(TrashSightError):
    """Preview reference released twice or never issued."""
    code = ERR_PREVIEW


def user_message(err: Exception) -> str:
    """Human-readable text for the error panel."""
    if isinstance(err, ServiceError) and err.service_message:
        return err.service_message
    if isinstance(err, CaptureUnavailable):
        return err.message or GENERIC_CAPTURE_ERROR
    return GENERIC_ANALYZE_ERROR

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Union

FacingMode = Literal["environment", "user"]
ImageOrigin = Literal["file", "camera"]

CAPTURE_FILENAME = "camera-capture.jpg"
CAPTURE_MIME = "image/jpeg"


@dataclass(frozen=True)
class ImageFile:
    """File-like image blob: what a file picker or a camera capture hands over."""
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageFile":
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content_type=content_type, data=path.read_bytes())


@dataclass(frozen=True)
class SelectedImage:
    image_id: int              # monotonic, identifies the image a request was issued for
    file: ImageFile
    preview_url: str           # display-only handle from the preview store
    origin: ImageOrigin = "file"


@dataclass
class CaptureSession:
    stream: object             # VideoStream owned by this session
    facing: FacingMode = "environment"
    active: bool = True


@dataclass(frozen=True)
class ClassificationResult:
    detected_object: str
    disposal_bin: str
    labeled_image: Optional[str] = None   # e.g. data:image/jpeg;base64,...


class RequestStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# ClassificationRequest as a tagged union: each variant only carries the
# fields valid for its status.

@dataclass(frozen=True)
class Idle:
    status = RequestStatus.IDLE


@dataclass(frozen=True)
class Pending:
    image_id: int
    status = RequestStatus.PENDING


@dataclass(frozen=True)
class Succeeded:
    image_id: int
    result: ClassificationResult
    status = RequestStatus.SUCCEEDED


@dataclass(frozen=True)
class Failed:
    image_id: int
    message: str
    error_code: str
    status = RequestStatus.FAILED


RequestState = Union[Idle, Pending, Succeeded, Failed]

IDLE = Idle()


class SubmitOutcome(str, Enum):
    COMPLETED = "completed"        # response applied (success or failure)
    NO_IMAGE = "no_image"          # nothing selected, no network call
    IN_FLIGHT = "in_flight"        # another request pending, no network call
    STALE = "stale"                # response arrived for an image no longer selected

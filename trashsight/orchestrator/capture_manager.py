"""
Capture Source Manager: owns the single CaptureSession.

  Idle --start ok--> Active --capture_frame--> Idle (frame handed off)
  Active --stop--> Idle
  Idle --start fails--> Idle (last_error set)

The device stream is released on every exit path.
"""
import asyncio
import cv2
from trashsight.orchestrator.contracts import (
    CaptureSession, ImageFile, CAPTURE_FILENAME, CAPTURE_MIME,
)
from trashsight.orchestrator.errors import CaptureUnavailable, GENERIC_CAPTURE_ERROR

IDEAL_WIDTH = 640
IDEAL_HEIGHT = 480
JPEG_QUALITY = 90   # 0.9 on a 0..1 scale
PREVIEW_JPEG_QUALITY = 70


class CaptureSourceManager:
    def __init__(self, camera, status_store, facing: str = "environment",
                 width: int = IDEAL_WIDTH, height: int = IDEAL_HEIGHT):
        self.camera = camera
        self.status = status_store
        self.facing = facing
        self.width = width
        self.height = height
        self.session: CaptureSession | None = None
        self.last_error: str | None = None
        self._starting = False
        self._abort_start = False

    @property
    def active(self) -> bool:
        return self.session is not None

    @property
    def starting(self) -> bool:
        return self._starting

    async def start_camera(self) -> bool:
        if self.session is not None:
            self.status.log("capture: start ignored, session already active")
            return True
        if self._starting:
            self.status.log("capture: start ignored, acquisition in progress")
            return False

        self._starting = True
        self._abort_start = False
        self.last_error = None
        self.status.log(f"capture: requesting {self.facing} camera {self.width}x{self.height}")
        opening = asyncio.ensure_future(asyncio.to_thread(
            self.camera.open_stream, self.facing, self.width, self.height
        ))
        try:
            stream = await asyncio.shield(opening)
        except asyncio.CancelledError:
            # the worker thread cannot be interrupted; release whatever it opens
            self._abort_start = True
            opening.add_done_callback(self._release_abandoned)
            self.status.log("capture: start cancelled, stream will be released on arrival")
            raise
        except CaptureUnavailable as e:
            self.last_error = e.message or GENERIC_CAPTURE_ERROR
            self.status.log(f"capture: unavailable: {self.last_error}")
            return False
        except Exception as e:
            # driver-level failures (OpenCV backends raise cv2.error etc.)
            self.last_error = GENERIC_CAPTURE_ERROR
            self.status.log(f"capture: device error {type(e).__name__}: {e}")
            return False
        finally:
            self._starting = False

        if self._abort_start:
            stream.stop()
            self.status.log("capture: stop requested during acquisition, stream released")
            return False

        self.session = CaptureSession(stream=stream, facing=self.facing)
        self.status.log("capture: session active")
        return True

    def _release_abandoned(self, opening) -> None:
        if opening.cancelled() or opening.exception() is not None:
            return
        opening.result().stop()
        self.status.log("capture: abandoned stream released")

    def stop_camera(self) -> None:
        if self._starting:
            self._abort_start = True
        session = self.session
        if session is None:
            return
        self.session = None
        session.active = False
        session.stream.stop()
        self.status.log("capture: session stopped")

    def capture_frame(self) -> ImageFile | None:
        """Still frame as camera-capture.jpg. Caller stops the camera on success."""
        data = self._encode_current(JPEG_QUALITY)
        if data is None:
            self.status.log("capture: no ready video source")
            return None
        self.status.log(f"capture: frame captured ({len(data)} bytes)")
        return ImageFile(name=CAPTURE_FILENAME, content_type=CAPTURE_MIME, data=data)

    def preview_frame(self) -> bytes | None:
        """Live preview snapshot for the presentation layer."""
        return self._encode_current(PREVIEW_JPEG_QUALITY)

    def _encode_current(self, quality: int) -> bytes | None:
        session = self.session
        if session is None or not session.stream.ready:
            return None
        frame = session.stream.read_frame()
        if frame is None:
            return None
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, quality])
        if not ok:
            self.status.log("capture: jpeg encode failed")
            return None
        return bytes(buf)

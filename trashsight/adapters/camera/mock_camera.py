"""Mock camera: synthetic frames for tests and machines without a webcam."""
import numpy as np
from trashsight.adapters.camera.base import CameraAdapter, VideoStream
from trashsight.orchestrator.errors import CaptureUnavailable


class MockStream(VideoStream):
    def __init__(self, status_store, width: int, height: int, ready: bool = True):
        self.status = status_store
        self.width = width
        self.height = height
        self._ready = ready
        self.stopped = False
        self.frames_read = 0

    @property
    def ready(self) -> bool:
        return self._ready and not self.stopped

    def read_frame(self):
        if not self.ready:
            return None
        self.frames_read += 1
        # horizontal gradient so the JPEG is not a flat colour
        row = np.linspace(0, 255, self.width, dtype=np.uint8)
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        frame[:, :, 1] = row
        return frame

    def stop(self) -> None:
        if not self.stopped:
            self.stopped = True
            self.status.log("mock_camera: stream stopped")


class MockCamera(CameraAdapter):
    """
    fail: None for a working camera, otherwise the reason surfaced by
    open_stream (e.g. "permission denied").
    """

    def __init__(self, status_store, fail: str | None = None, ready: bool = True):
        self.status = status_store
        self.fail = fail
        self.ready = ready
        self.streams: list[MockStream] = []

    def open_stream(self, facing: str, width: int, height: int) -> MockStream:
        if self.fail:
            self.status.log(f"mock_camera: open failed ({self.fail})")
            raise CaptureUnavailable(self.fail)
        stream = MockStream(self.status, width, height, ready=self.ready)
        self.streams.append(stream)
        self.status.log(f"mock_camera: serving {width}x{height} facing={facing}")
        return stream

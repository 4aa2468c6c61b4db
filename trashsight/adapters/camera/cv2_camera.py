"""
OpenCV webcam capture adapter.
CAMERA_INDEX env var (default 0) selects the webcam device.
CAMERA_ENVIRONMENT_INDEX / CAMERA_USER_INDEX map facing modes to devices
(rear camera vs selfie camera on machines that have both).
"""
import os
import cv2
from trashsight.adapters.camera.base import CameraAdapter, VideoStream
from trashsight.orchestrator.errors import CaptureUnavailable


class CV2Stream(VideoStream):
    def __init__(self, status_store, cap, index: int):
        self.status = status_store
        self._cap = cap
        self._index = index

    @property
    def ready(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    def read_frame(self):
        if not self.ready:
            return None
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log(f"cv2_camera: frame read failed on device {self._index}")
            return None
        return frame

    def stop(self) -> None:
        if self._cap is not None:
            if self._cap.isOpened():
                self._cap.release()
            self._cap = None
            self.status.log(f"cv2_camera: device {self._index} released")


class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None):
        self.status = status_store
        default = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._indexes = {
            "environment": int(os.getenv("CAMERA_ENVIRONMENT_INDEX", str(default))),
            "user": int(os.getenv("CAMERA_USER_INDEX", str(default))),
        }

    def open_stream(self, facing: str, width: int, height: int) -> CV2Stream:
        index = self._indexes.get(facing, self._indexes["environment"])
        cap = cv2.VideoCapture(index)
        if not cap.isOpened():
            cap.release()
            self.status.log(f"cv2_camera: failed to open device {index}")
            raise CaptureUnavailable(f"camera device {index} unavailable")
        # "ideal" resolution: the driver may pick the nearest supported mode
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        actual = (int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
        self.status.log(f"cv2_camera: device {index} open facing={facing} {actual[0]}x{actual[1]}")
        return CV2Stream(self.status, cap, index)

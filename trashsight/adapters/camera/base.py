from abc import ABC, abstractmethod


class VideoStream(ABC):
    """A live device stream. Owned by exactly one CaptureSession."""

    @property
    @abstractmethod
    def ready(self) -> bool:
        """True once the stream is delivering frames."""
        ...

    @abstractmethod
    def read_frame(self):
        """Current frame as a BGR numpy array at native size, or None."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Halt all device tracks. Safe to call more than once."""
        ...


class CameraAdapter(ABC):
    @abstractmethod
    def open_stream(self, facing: str, width: int, height: int) -> VideoStream:
        """Acquire a stream. Blocking; raises CaptureUnavailable on failure."""
        ...

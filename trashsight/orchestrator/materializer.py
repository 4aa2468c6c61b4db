"""
Image Materializer: owns the single SelectedImage and its preview reference.

A preview URL is revoked exactly once: when its image is replaced or cleared.
Listeners (the request controller) run after every select and clear so that
a new image always invalidates prior results.
"""
import itertools
from typing import Callable
from trashsight.orchestrator.contracts import ImageFile, SelectedImage, ImageOrigin

MAX_ADVISORY_BYTES = 10 * 1024 * 1024  # "up to 10MB" hint, not enforced


class ImageMaterializer:
    def __init__(self, previews, status_store):
        self.previews = previews
        self.status = status_store
        self.current: SelectedImage | None = None
        self._ids = itertools.count(1)
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    @property
    def current_id(self) -> int | None:
        return self.current.image_id if self.current else None

    def select_file(self, file: ImageFile) -> SelectedImage:
        return self._select(file, origin="file")

    def select_captured(self, frame: ImageFile) -> SelectedImage:
        return self._select(frame, origin="camera")

    def clear(self) -> None:
        if self.current is None:
            return
        self._release_current()
        self.status.log("image: cleared")
        self._notify()

    def _select(self, file: ImageFile, origin: ImageOrigin) -> SelectedImage:
        self._warn_advisory(file)
        self._release_current()
        preview_url = self.previews.create(file.data, file.content_type)
        self.current = SelectedImage(
            image_id=next(self._ids), file=file, preview_url=preview_url, origin=origin,
        )
        self.status.log(
            f"image: selected #{self.current.image_id} {file.name} "
            f"({file.content_type}, {file.size} bytes, from {origin})"
        )
        self._notify()
        return self.current

    def _release_current(self) -> None:
        image = self.current
        if image is None:
            return
        self.current = None
        self.previews.revoke(image.preview_url)

    def _warn_advisory(self, file: ImageFile) -> None:
        if file.size > MAX_ADVISORY_BYTES:
            self.status.log(f"image: warning {file.name} is {file.size} bytes, over the advised 10MB")
        if not file.content_type.startswith("image/"):
            self.status.log(f"image: warning {file.name} has non-image type {file.content_type}")

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

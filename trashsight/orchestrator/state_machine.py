from trashsight.orchestrator.capture_manager import CaptureSourceManager
from trashsight.orchestrator.classification import ClassificationController
from trashsight.orchestrator.contracts import ImageFile, SelectedImage, SubmitOutcome
from trashsight.orchestrator.materializer import ImageMaterializer
from trashsight.orchestrator.view_state import ViewState, build_view_state


class Pipeline:
    """
    One method per UI event, wired in data-flow order:
    capture/file -> materializer -> classification -> view state.
    """

    def __init__(self, camera, classifier, previews, status_store, facing: str = "environment"):
        self.status = status_store
        self.previews = previews
        self.capture = CaptureSourceManager(camera, status_store, facing=facing)
        self.images = ImageMaterializer(previews, status_store)
        self.requests = ClassificationController(classifier, self.images, status_store)
        self.classifier = classifier

    # ── camera ──────────────────────────────────────────────────────────────

    async def start_camera(self) -> bool:
        return await self.capture.start_camera()

    def stop_camera(self) -> None:
        self.capture.stop_camera()

    def capture_photo(self) -> SelectedImage | None:
        """Take a still, stop the camera, hand the frame to the materializer."""
        frame = self.capture.capture_frame()
        if frame is None:
            return None
        self.capture.stop_camera()
        return self.images.select_captured(frame)

    # ── image ───────────────────────────────────────────────────────────────

    def select_file(self, file: ImageFile) -> SelectedImage:
        self.capture.last_error = None
        return self.images.select_file(file)

    def clear(self) -> None:
        self.images.clear()

    # ── request ─────────────────────────────────────────────────────────────

    async def analyze(self) -> SubmitOutcome:
        return await self.requests.submit()

    def view_state(self) -> ViewState:
        return build_view_state(
            camera_active=self.capture.active,
            image=self.images.current,
            request=self.requests.state,
            capture_error=self.capture.last_error,
        )

    async def aclose(self) -> None:
        self.capture.stop_camera()
        self.images.clear()
        await self.classifier.aclose()
        self.status.log("pipeline: closed")

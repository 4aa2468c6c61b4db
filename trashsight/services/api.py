import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response
from dotenv import load_dotenv
from trashsight.services.models import (
    AnalyzeResponse, CameraResponse, HealthResponse, ResultOut, SelectResponse, ViewStateResponse,
)
from trashsight.services.status_store import StatusStore
from trashsight.orchestrator.contracts import ImageFile, SubmitOutcome
from trashsight.orchestrator.state_machine import Pipeline
from trashsight.orchestrator.view_state import ViewState
from trashsight.adapters.preview.memory_store import MemoryPreviewStore

load_dotenv(dotenv_path="trashsight/.env", override=False)


def build_pipeline(status: StatusStore) -> Pipeline:
    # Classifier adapter: CLASSIFIER_ADAPTER = http | mock  (default: http)
    classifier_adapter = os.getenv("CLASSIFIER_ADAPTER", "http").lower()
    if classifier_adapter == "mock":
        from trashsight.adapters.classifier.mock_classifier import MockClassifier
        classifier = MockClassifier(status)
    else:
        from trashsight.adapters.classifier.http_classifier import HttpClassifier
        classifier = HttpClassifier(status)
        status.log(f"classifier adapter: http -> {classifier.url}")

    # Camera adapter: CAMERA_ADAPTER = cv2 | mock  (default: cv2)
    camera_adapter = os.getenv("CAMERA_ADAPTER", "cv2").lower()
    if camera_adapter == "mock":
        from trashsight.adapters.camera.mock_camera import MockCamera
        camera = MockCamera(status)
    else:
        from trashsight.adapters.camera.cv2_camera import CV2Camera
        camera = CV2Camera(status)

    status.log(f"camera adapter: {type(camera).__name__}, classifier adapter: {type(classifier).__name__}")
    return Pipeline(camera=camera, classifier=classifier, previews=MemoryPreviewStore(status), status_store=status)


def _state_out(view: ViewState, status: StatusStore) -> ViewStateResponse:
    result = None
    if view.result is not None:
        result = ResultOut(
            detected_object=view.result.detected_object,
            disposal_bin=view.result.disposal_bin,
            bin_description=view.result.bin_description,
            labeled_image=view.result.labeled_image,
        )
    return ViewStateResponse(
        mode=view.mode.value,
        show_preview=view.show_preview,
        preview_url=view.preview_url,
        analyze_enabled=view.analyze_enabled,
        result=result,
        error=view.error,
        capture_error=view.capture_error,
        logs=status.tail(50),
    )


def create_app(pipeline: Pipeline) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await pipeline.aclose()

    app = FastAPI(title="trash-sight client", lifespan=lifespan)
    app.state.pipeline = pipeline
    status = pipeline.status

    # All handlers are async: UI events and network completions share one event loop.

    @app.get("/state", response_model=ViewStateResponse)
    async def get_state():
        return _state_out(pipeline.view_state(), status)

    @app.post("/camera/start", response_model=CameraResponse)
    async def camera_start():
        ok = await pipeline.start_camera()
        return CameraResponse(ok=ok, active=pipeline.capture.active, error=pipeline.capture.last_error)

    @app.post("/camera/stop", response_model=CameraResponse)
    async def camera_stop():
        pipeline.stop_camera()
        return CameraResponse(ok=True, active=pipeline.capture.active)

    @app.post("/camera/capture", response_model=SelectResponse)
    async def camera_capture():
        image = pipeline.capture_photo()
        if image is None:
            status.log("CAPTURE: no frame available")
            return SelectResponse(ok=False, error="no active camera frame")
        return SelectResponse(ok=True, image_id=image.image_id, preview_url=image.preview_url, origin=image.origin)

    @app.get("/camera/frame")
    async def camera_frame():
        """Live preview snapshot; poll it while mode is camera_active."""
        frame = pipeline.capture.preview_frame()
        if frame is None:
            raise HTTPException(status_code=404, detail="camera not active")
        return Response(content=frame, media_type="image/jpeg")

    @app.post("/image", response_model=SelectResponse)
    async def select_image(image: UploadFile = File(...)):
        data = await image.read()
        file = ImageFile(
            name=image.filename or "upload",
            content_type=image.content_type or "application/octet-stream",
            data=data,
        )
        selected = pipeline.select_file(file)
        return SelectResponse(ok=True, image_id=selected.image_id, preview_url=selected.preview_url, origin=selected.origin)

    @app.delete("/image", response_model=ViewStateResponse)
    async def clear_image():
        pipeline.clear()
        return _state_out(pipeline.view_state(), status)

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze():
        outcome = await pipeline.analyze()
        view = pipeline.view_state()
        return AnalyzeResponse(
            ok=outcome is SubmitOutcome.COMPLETED and view.error is None,
            outcome=outcome.value,
            state=_state_out(view, status),
        )

    @app.get("/preview/{preview_id}")
    async def preview(preview_id: str):
        entry = pipeline.previews.get(preview_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="preview released")
        return Response(content=entry.data, media_type=entry.content_type)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            api=True,
            camera_adapter=type(pipeline.capture.camera).__name__,
            classifier_adapter=type(pipeline.classifier).__name__,
            classifier_url=getattr(pipeline.classifier, "url", None),
            camera_active=pipeline.capture.active,
            live_previews=pipeline.previews.live,
        )

    return app


status = StatusStore()
app = create_app(build_pipeline(status))

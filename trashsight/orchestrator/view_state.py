"""
View State Aggregator. Pure functions, no owned state.

RESULT_READY and ERROR_STATE sit underneath IMAGE_READY: the preview stays
visible (show_preview) while the result or error is shown below it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from trashsight.orchestrator import bins
from trashsight.orchestrator.contracts import (
    IDLE, Failed, RequestState, RequestStatus, SelectedImage, Succeeded,
)


class ViewMode(str, Enum):
    NO_IMAGE = "no_image"            # source selection controls
    CAMERA_ACTIVE = "camera_active"  # live preview + capture/cancel
    IMAGE_READY = "image_ready"      # preview + clear/analyze
    LOADING = "loading"              # analyze disabled, pending indicator
    RESULT_READY = "result_ready"
    ERROR_STATE = "error_state"


@dataclass(frozen=True)
class ResultView:
    detected_object: str
    disposal_bin: str
    bin_description: str = ""
    labeled_image: Optional[str] = None


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode
    show_preview: bool = False
    preview_url: Optional[str] = None
    analyze_enabled: bool = False
    result: Optional[ResultView] = None
    error: Optional[str] = None
    capture_error: Optional[str] = None


def derive_mode(camera_active: bool, has_image: bool, status: RequestStatus) -> ViewMode:
    if camera_active:
        return ViewMode.CAMERA_ACTIVE
    if not has_image:
        return ViewMode.NO_IMAGE
    if status is RequestStatus.PENDING:
        return ViewMode.LOADING
    if status is RequestStatus.SUCCEEDED:
        return ViewMode.RESULT_READY
    if status is RequestStatus.FAILED:
        return ViewMode.ERROR_STATE
    return ViewMode.IMAGE_READY


def build_view_state(camera_active: bool, image: SelectedImage | None,
                     request: RequestState, capture_error: str | None = None) -> ViewState:
    # a request only ever describes the image currently on screen
    if image is None or getattr(request, "image_id", None) != image.image_id:
        request = IDLE
    mode = derive_mode(camera_active, image is not None, request.status)
    result = None
    error = None
    if request is not IDLE:
        if isinstance(request, Succeeded):
            r = request.result
            result = ResultView(
                detected_object=r.detected_object,
                disposal_bin=r.disposal_bin,
                bin_description=bins.describe(r.disposal_bin),
                labeled_image=r.labeled_image,
            )
        elif isinstance(request, Failed):
            error = request.message

    show_preview = image is not None and mode is not ViewMode.CAMERA_ACTIVE
    return ViewState(
        mode=mode,
        show_preview=show_preview,
        preview_url=image.preview_url if image is not None else None,
        analyze_enabled=show_preview and mode is not ViewMode.LOADING,
        result=result,
        error=error,
        capture_error=capture_error,
    )

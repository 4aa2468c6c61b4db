from pydantic import BaseModel
from typing import Literal, Optional

ViewModeName = Literal["no_image", "camera_active", "image_ready", "loading", "result_ready", "error_state"]


class ResultOut(BaseModel):
    detected_object: str
    disposal_bin: str
    bin_description: str = ""
    labeled_image: Optional[str] = None   # omitted section when None


class ViewStateResponse(BaseModel):
    mode: ViewModeName
    show_preview: bool
    preview_url: Optional[str] = None
    analyze_enabled: bool
    result: Optional[ResultOut] = None
    error: Optional[str] = None
    capture_error: Optional[str] = None
    logs: list[str] = []


class CameraResponse(BaseModel):
    ok: bool
    active: bool
    error: Optional[str] = None


class SelectResponse(BaseModel):
    ok: bool
    image_id: Optional[int] = None
    preview_url: Optional[str] = None
    origin: Optional[Literal["file", "camera"]] = None
    error: Optional[str] = None


class AnalyzeResponse(BaseModel):
    ok: bool
    outcome: Literal["completed", "no_image", "in_flight", "stale"]
    state: ViewStateResponse


class HealthResponse(BaseModel):
    api: bool
    camera_adapter: str
    classifier_adapter: str
    classifier_url: Optional[str] = None
    camera_active: bool
    live_previews: int

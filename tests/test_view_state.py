"""Tests for the pure view-mode derivation."""

from __future__ import annotations

import pytest

from trashsight.orchestrator.contracts import (
    IDLE, ClassificationResult, Failed, ImageFile, Pending, RequestStatus, SelectedImage, Succeeded,
)
from trashsight.orchestrator.view_state import ViewMode, build_view_state, derive_mode


@pytest.mark.parametrize(
    ("camera_active", "has_image", "status", "expected"),
    [
        (False, False, RequestStatus.IDLE, ViewMode.NO_IMAGE),
        (True, False, RequestStatus.IDLE, ViewMode.CAMERA_ACTIVE),
        (True, True, RequestStatus.SUCCEEDED, ViewMode.CAMERA_ACTIVE),
        (False, True, RequestStatus.IDLE, ViewMode.IMAGE_READY),
        (False, True, RequestStatus.PENDING, ViewMode.LOADING),
        (False, True, RequestStatus.SUCCEEDED, ViewMode.RESULT_READY),
        (False, True, RequestStatus.FAILED, ViewMode.ERROR_STATE),
    ],
)
def test_derive_mode(camera_active: bool, has_image: bool, status: RequestStatus, expected: ViewMode) -> None:
    assert derive_mode(camera_active, has_image, status) is expected


def _image(image_id: int = 3) -> SelectedImage:
    return SelectedImage(
        image_id=image_id,
        file=ImageFile("bottle.jpg", "image/jpeg", b"jpeg"),
        preview_url="/preview/abc",
    )


class TestBuildViewState:
    def test_result_keeps_preview_visible(self) -> None:
        request = Succeeded(image_id=3, result=ClassificationResult("plastic bottle", "yellow"))

        view = build_view_state(False, _image(), request)

        assert view.mode is ViewMode.RESULT_READY
        assert view.show_preview
        assert view.preview_url == "/preview/abc"
        assert view.analyze_enabled
        assert view.result.detected_object == "plastic bottle"
        assert view.result.bin_description.startswith("Recyclables")
        assert view.result.labeled_image is None

    def test_error_retains_image(self) -> None:
        view = build_view_state(False, _image(), Failed(image_id=3, message="boom", error_code="SERVICE_ERROR"))

        assert view.mode is ViewMode.ERROR_STATE
        assert view.show_preview
        assert view.error == "boom"

    def test_loading_disables_analyze(self) -> None:
        view = build_view_state(False, _image(), Pending(image_id=3))

        assert view.mode is ViewMode.LOADING
        assert not view.analyze_enabled

    def test_result_for_other_image_is_hidden(self) -> None:
        request = Succeeded(image_id=2, result=ClassificationResult("mug", "purple"))

        view = build_view_state(False, _image(3), request)

        assert view.result is None
        assert view.mode is ViewMode.IMAGE_READY
        assert view.analyze_enabled

    @pytest.mark.parametrize(
        "request_state",
        [
            Pending(image_id=2),
            Failed(image_id=2, message="Request timed out", error_code="timeout"),
        ],
    )
    def test_request_for_other_image_reads_as_idle(self, request_state) -> None:
        view = build_view_state(False, _image(3), request_state)

        assert view.mode is ViewMode.IMAGE_READY
        assert view.error is None
        assert view.analyze_enabled

    def test_no_image_shows_capture_error(self) -> None:
        view = build_view_state(False, None, IDLE, capture_error="permission denied")

        assert view.mode is ViewMode.NO_IMAGE
        assert not view.show_preview
        assert not view.analyze_enabled
        assert view.capture_error == "permission denied"

    def test_unknown_bin_has_empty_description(self) -> None:
        request = Succeeded(image_id=3, result=ClassificationResult("battery", "red"))

        assert build_view_state(False, _image(), request).result.bin_description == ""

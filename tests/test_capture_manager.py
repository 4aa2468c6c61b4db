"""Tests for the camera session lifecycle and still capture."""

from __future__ import annotations

import asyncio
import threading

import cv2
import numpy as np
import pytest

from trashsight.adapters.camera.mock_camera import MockCamera
from trashsight.orchestrator.capture_manager import CaptureSourceManager


class TestStartCamera:
    async def test_start_creates_single_session(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)

        assert await manager.start_camera() is True
        assert manager.active
        assert manager.session.facing == "environment"
        assert (camera.streams[0].width, camera.streams[0].height) == (640, 480)

        # second start keeps the existing session
        assert await manager.start_camera() is True
        assert len(camera.streams) == 1

    async def test_permission_denied_leaves_no_session(self, status) -> None:
        manager = CaptureSourceManager(MockCamera(status, fail="permission denied"), status)

        assert await manager.start_camera() is False
        assert manager.session is None
        assert manager.last_error == "permission denied"
        assert not manager.starting

    async def test_driver_exception_is_recoverable(self, status) -> None:
        class BrokenCamera(MockCamera):
            def open_stream(self, facing, width, height):
                raise cv2.error("backend exploded")

        manager = CaptureSourceManager(BrokenCamera(status), status)

        assert await manager.start_camera() is False
        assert manager.session is None
        assert manager.last_error

    async def test_successful_start_clears_previous_error(self, status) -> None:
        camera = MockCamera(status, fail="no device")
        manager = CaptureSourceManager(camera, status)
        await manager.start_camera()

        camera.fail = None
        assert await manager.start_camera() is True
        assert manager.last_error is None

    async def test_stop_during_acquisition_releases_stream(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)

        task = asyncio.create_task(manager.start_camera())
        await asyncio.sleep(0)
        assert manager.starting
        manager.stop_camera()

        assert await task is False
        assert manager.session is None
        assert all(s.stopped for s in camera.streams)

    async def test_cancelled_start_releases_stream(self, status) -> None:
        gate = threading.Event()

        class SlowCamera(MockCamera):
            def open_stream(self, facing, width, height):
                gate.wait(5)
                return super().open_stream(facing, width, height)

        camera = SlowCamera(status)
        manager = CaptureSourceManager(camera, status)

        task = asyncio.create_task(manager.start_camera())
        while not manager.starting:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        gate.set()
        for _ in range(200):
            if camera.streams and camera.streams[0].stopped:
                break
            await asyncio.sleep(0.01)

        assert len(camera.streams) == 1
        assert camera.streams[0].stopped
        assert manager.session is None
        assert not manager.starting
        assert any("abandoned stream released" in line for line in status.logs)


class TestStopCamera:
    async def test_stop_releases_stream(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        await manager.start_camera()
        stream = camera.streams[0]

        manager.stop_camera()

        assert manager.session is None
        assert stream.stopped

    def test_stop_without_session_is_noop(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        manager.stop_camera()
        manager.stop_camera()
        assert manager.session is None


class TestCaptureFrame:
    async def test_capture_returns_jpeg_at_native_size(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        await manager.start_camera()

        frame = manager.capture_frame()

        assert frame is not None
        assert frame.name == "camera-capture.jpg"
        assert frame.content_type == "image/jpeg"
        assert frame.data[:2] == b"\xff\xd8"
        decoded = cv2.imdecode(np.frombuffer(frame.data, dtype=np.uint8), cv2.IMREAD_COLOR)
        assert decoded.shape == (480, 640, 3)

    def test_capture_without_session_returns_none(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        assert manager.capture_frame() is None

    async def test_capture_with_unready_stream_returns_none(self, status) -> None:
        manager = CaptureSourceManager(MockCamera(status, ready=False), status)
        await manager.start_camera()

        assert manager.capture_frame() is None
        assert manager.active

    async def test_preview_frame_only_while_active(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        assert manager.preview_frame() is None

        await manager.start_camera()
        assert manager.preview_frame()[:2] == b"\xff\xd8"

    def test_idle_preview_polling_does_not_log(self, camera: MockCamera, status) -> None:
        manager = CaptureSourceManager(camera, status)
        before = len(status.logs)

        for _ in range(50):
            assert manager.preview_frame() is None

        assert len(status.logs) == before
        assert manager.capture_frame() is None
        assert status.logs[-1].endswith("capture: no ready video source")

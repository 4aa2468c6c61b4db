"""Shared fixtures: mock camera, gated classifier, wired pipeline."""

from __future__ import annotations

import asyncio

import pytest

from trashsight.adapters.camera.mock_camera import MockCamera
from trashsight.adapters.classifier.base import ClassifierAdapter
from trashsight.adapters.preview.memory_store import MemoryPreviewStore
from trashsight.orchestrator.contracts import ClassificationResult, ImageFile
from trashsight.orchestrator.state_machine import Pipeline
from trashsight.services.status_store import StatusStore


class GatedClassifier(ClassifierAdapter):
    """Classifier double that holds every call until `gate` is set."""

    def __init__(self) -> None:
        self.calls: list[ImageFile] = []
        self.gate = asyncio.Event()
        self.gate.set()
        self.result = ClassificationResult(detected_object="plastic bottle", disposal_bin="yellow")
        self.error: Exception | None = None
        self.closed = False

    def hold(self) -> None:
        self.gate.clear()

    def release(self) -> None:
        self.gate.set()

    async def classify(self, image: ImageFile) -> ClassificationResult:
        self.calls.append(image)
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def aclose(self) -> None:
        self.closed = True


def _make_image(name: str = "bottle.png", content_type: str = "image/png", data: bytes = b"\x89PNG fake") -> ImageFile:
    return ImageFile(name=name, content_type=content_type, data=data)


@pytest.fixture()
def make_image():
    """Factory for file-picker style images."""
    return _make_image


@pytest.fixture()
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture()
def previews(status: StatusStore) -> MemoryPreviewStore:
    return MemoryPreviewStore(status)


@pytest.fixture()
def camera(status: StatusStore) -> MockCamera:
    return MockCamera(status)


@pytest.fixture()
def classifier() -> GatedClassifier:
    return GatedClassifier()


@pytest.fixture()
def pipeline(camera: MockCamera, classifier: GatedClassifier, previews: MemoryPreviewStore, status: StatusStore) -> Pipeline:
    return Pipeline(camera=camera, classifier=classifier, previews=previews, status_store=status)

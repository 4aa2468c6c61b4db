import asyncio
import random
from trashsight.adapters.classifier.base import ClassifierAdapter
from trashsight.orchestrator import bins
from trashsight.orchestrator.contracts import ClassificationResult

# Simulated service latency, keep fast for mock testing
_LATENCY_S = 0.3


class MockClassifier(ClassifierAdapter):
    def __init__(self, status_store, latency: float = _LATENCY_S):
        self.status = status_store
        self.latency = latency

    async def classify(self, image) -> ClassificationResult:
        await asyncio.sleep(self.latency)
        disposal_bin = random.choice(list(bins.SAMPLE_OBJECTS))
        detected = random.choice(bins.SAMPLE_OBJECTS[disposal_bin])
        self.status.log(f"mock_classifier: {image.name} → {detected} / {disposal_bin}")
        return ClassificationResult(detected_object=detected, disposal_bin=disposal_bin)

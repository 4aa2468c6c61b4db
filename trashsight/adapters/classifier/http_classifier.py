"""
HTTP adapter for the remote classification service.

Contract:
  Request:  POST <CLASSIFIER_URL>  multipart/form-data, field "image"
  Response: {"detected_object": "...", "disposal_bin": "...", "labeled_image": "data:..."}
            (labeled_image optional)
  Failure:  non-2xx, optionally {"error": "..."}
"""
import os
import httpx
from pydantic import BaseModel, ValidationError
from trashsight.adapters.classifier.base import ClassifierAdapter
from trashsight.orchestrator.contracts import ClassificationResult
from trashsight.orchestrator.errors import ServiceError, TransportFailure

DEFAULT_URL = "https://refathex-trash-sight.hf.space/classify_image"
IMAGE_FIELD = "image"


class ClassifyResponse(BaseModel):
    detected_object: str
    disposal_bin: str
    labeled_image: str | None = None


class HttpClassifier(ClassifierAdapter):
    def __init__(self, status_store, url: str | None = None, timeout: float | None = None,
                 client: httpx.AsyncClient | None = None):
        self.status = status_store
        self.url = url or os.getenv("CLASSIFIER_URL", DEFAULT_URL)
        self.timeout = timeout if timeout is not None else float(os.getenv("CLASSIFIER_TIMEOUT", "30"))
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def classify(self, image) -> ClassificationResult:
        files = {IMAGE_FIELD: (image.name, image.data, image.content_type)}
        self.status.log(f"http_classifier: POST {self.url} ({image.name}, {image.size} bytes)")
        try:
            resp = await self._get_client().post(self.url, files=files, timeout=self.timeout)
        except httpx.HTTPError as e:
            self.status.log(f"http_classifier: transport error {type(e).__name__}: {e}")
            raise TransportFailure(str(e)) from e

        body = self._json(resp)
        error = body.get("error") if isinstance(body, dict) else None
        if not resp.is_success:
            self.status.log(f"http_classifier: HTTP {resp.status_code} — {resp.text[:300]}")
            raise ServiceError(
                f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                service_message=error if isinstance(error, str) and error else None,
            )
        if error:
            self.status.log(f"http_classifier: error payload '{error}'")
            raise ServiceError(str(error), status_code=resp.status_code, service_message=str(error))

        try:
            parsed = ClassifyResponse.model_validate(body)
        except ValidationError as e:
            self.status.log(f"http_classifier: unexpected response {resp.text[:300]}")
            raise ServiceError("malformed response", status_code=resp.status_code) from e

        self.status.log(
            f"http_classifier: → {parsed.detected_object} / {parsed.disposal_bin}"
            + (" (+labeled image)" if parsed.labeled_image else "")
        )
        return ClassificationResult(
            detected_object=parsed.detected_object,
            disposal_bin=parsed.disposal_bin,
            labeled_image=parsed.labeled_image or None,
        )

    def _json(self, resp: httpx.Response):
        try:
            return resp.json()
        except ValueError:
            return None

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

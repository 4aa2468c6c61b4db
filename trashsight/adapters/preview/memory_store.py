"""
In-memory preview store: the object-URL equivalent for the local API.

create() registers a copy of the image bytes and returns a display-only URL
(/preview/<id>); revoke() drops it. Revoking an unknown or already revoked
URL raises PreviewError.
"""
import uuid
from dataclasses import dataclass, field
from trashsight.orchestrator.errors import PreviewError

URL_PREFIX = "/preview/"


@dataclass
class PreviewEntry:
    content_type: str
    data: bytes


@dataclass
class MemoryPreviewStore:
    status: object = None
    entries: dict[str, PreviewEntry] = field(default_factory=dict)
    created: int = 0
    revoked: int = 0

    def create(self, data: bytes, content_type: str) -> str:
        preview_id = uuid.uuid4().hex
        self.entries[preview_id] = PreviewEntry(content_type=content_type, data=data)
        self.created += 1
        url = f"{URL_PREFIX}{preview_id}"
        self._log(f"preview: created {url}")
        return url

    def revoke(self, url: str) -> None:
        preview_id = self._id(url)
        if self.entries.pop(preview_id, None) is None:
            raise PreviewError(f"preview {url} is not live")
        self.revoked += 1
        self._log(f"preview: revoked {url}")

    def get(self, preview_id: str) -> PreviewEntry | None:
        return self.entries.get(preview_id)

    @property
    def live(self) -> int:
        return len(self.entries)

    def _id(self, url: str) -> str:
        return url[len(URL_PREFIX):] if url.startswith(URL_PREFIX) else url

    def _log(self, msg: str):
        if self.status is not None:
            self.status.log(msg)

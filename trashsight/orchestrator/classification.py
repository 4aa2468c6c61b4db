"""
Classification Request Controller: owns the single ClassificationRequest.

  Idle / Succeeded / Failed --submit--> Pending --response--> Succeeded | Failed
  any --image replaced or cleared--> Idle

Every request is tagged with the id of the image it was issued for. A
response is applied only if that image is still selected and the request is
still the pending one; otherwise it is dropped as stale.
"""
import asyncio
from trashsight.orchestrator.contracts import (
    IDLE, Pending, Succeeded, Failed, RequestState, RequestStatus, SubmitOutcome,
)
from trashsight.orchestrator.errors import (
    NoImageSelected, RequestInFlight, StaleResponse, TrashSightError, ERR_SERVICE, user_message,
)


class ClassificationController:
    def __init__(self, classifier, materializer, status_store):
        self.classifier = classifier
        self.materializer = materializer
        self.status = status_store
        self.state: RequestState = IDLE
        self.calls_issued = 0
        materializer.subscribe(self.reset)

    @property
    def request_status(self) -> RequestStatus:
        return self.state.status

    @property
    def pending(self) -> bool:
        return isinstance(self.state, Pending)

    def reset(self) -> None:
        if self.state is not IDLE:
            self.status.log(f"classify: reset from {self.state.status.value}")
        self.state = IDLE

    async def submit(self) -> SubmitOutcome:
        image = self.materializer.current
        if image is None:
            self.status.log(f"classify: ignored ({NoImageSelected.code})")
            return SubmitOutcome.NO_IMAGE
        if self.pending:
            self.status.log(f"classify: ignored ({RequestInFlight.code})")
            return SubmitOutcome.IN_FLIGHT

        tag = Pending(image_id=image.image_id)
        self.state = tag
        self.calls_issued += 1
        self.status.log(f"classify: submit image #{image.image_id}")
        try:
            result = await self.classifier.classify(image.file)
        except asyncio.CancelledError:
            # teardown only; the request slot must not stay pending
            if self.state is tag:
                self.state = IDLE
            raise
        except TrashSightError as e:
            return self._apply(tag, Failed(image_id=tag.image_id, message=user_message(e), error_code=e.code))
        except Exception as e:
            self.status.log(f"classify: unexpected {type(e).__name__}: {e}")
            return self._apply(tag, Failed(image_id=tag.image_id, message=user_message(e), error_code=ERR_SERVICE))
        return self._apply(tag, Succeeded(image_id=tag.image_id, result=result))

    def _apply(self, tag: Pending, outcome: RequestState) -> SubmitOutcome:
        if self.state is not tag or self.materializer.current_id != tag.image_id:
            self.status.log(f"classify: {StaleResponse.code} for image #{tag.image_id}, discarded")
            return SubmitOutcome.STALE
        self.state = outcome
        if isinstance(outcome, Failed):
            self.status.log(f"classify: failed {outcome.error_code}: {outcome.message}")
        else:
            self.status.log(f"classify: succeeded for image #{tag.image_id}")
        return SubmitOutcome.COMPLETED

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from portfolio.core.mailer import DeliveryError, NotificationSender
from portfolio.core.rate_limit import RATE_LIMIT_MESSAGE, RateLimiter
from portfolio.lib.validation import ErrorSet, Submission, validate

log = logging.getLogger("uvicorn.error")

DELIVERY_FAILED_MESSAGE = "Failed to send message. Please try again or contact me directly."


class Stage(str, Enum):
    RECEIVED = "received"
    RATE_CHECKED = "rate_checked"
    VALIDATED = "validated"
    SENT = "sent"
    RESPONDED = "responded"


class Status(str, Enum):
    RATE_LIMITED = "rate_limited"
    VALIDATION_FAILED = "validation_failed"
    DELIVERY_FAILED = "delivery_failed"
    SUCCESS = "success"


HTTP_STATUS = {
    Status.RATE_LIMITED: 429,
    Status.VALIDATION_FAILED: 400,
    Status.DELIVERY_FAILED: 200,
    Status.SUCCESS: 200,
}


@dataclass
class Outcome:
    status: Status
    # last stage reached before responding
    stage: Stage
    form: Dict[str, str] = field(default_factory=dict)
    errors: ErrorSet = field(default_factory=dict)
    notice: Optional[str] = None
    retry_after: int = 0

    @property
    def success(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def http_status(self) -> int:
        return HTTP_STATUS[self.status]


class SubmissionPipeline:
    """Rate check, validate, then deliver one contact submission."""

    def __init__(self,
                 sender: NotificationSender,
                 limiter: Optional[RateLimiter] = None,
                 validator: Callable[[Submission], ErrorSet] = validate):
        self.sender = sender
        self.limiter = limiter
        self.validator = validator

    def run(self, submission: Submission, client_address: str) -> Outcome:
        if self.limiter is not None:
            decision = self.limiter.hit(client_address)
            if not decision.allowed:
                log.info(f"[contact] rate limit exceeded for {client_address}")
                return Outcome(
                    status=Status.RATE_LIMITED,
                    stage=Stage.RATE_CHECKED,
                    notice=RATE_LIMIT_MESSAGE,
                    retry_after=decision.retry_after,
                )

        errors = self.validator(submission)
        if errors:
            return Outcome(
                status=Status.VALIDATION_FAILED,
                stage=Stage.VALIDATED,
                form=submission.as_form(),
                errors=errors,
            )

        try:
            self.sender.send(submission)
        except DeliveryError as exc:
            log.error(f"[contact] email sending failed: {exc}")
            return Outcome(
                status=Status.DELIVERY_FAILED,
                stage=Stage.VALIDATED,
                form=submission.as_form(),
                errors={"general": DELIVERY_FAILED_MESSAGE},
            )

        log.info("[contact] contact form email sent successfully")
        return Outcome(status=Status.SUCCESS, stage=Stage.SENT)

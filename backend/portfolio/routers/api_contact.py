# portfolio/routers/api_contact.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio.dependencies import get_client_address, get_pipeline
from portfolio.lib.pipeline import Status, SubmissionPipeline
from portfolio.lib.validation import Submission

API_PREFIX = "/api"

router = APIRouter(prefix=API_PREFIX, tags=["contact"])

SENT_MESSAGE = "Message sent successfully!"
FAILED_MESSAGE = "Failed to send message. Please try again."


@router.post("/contact")
def api_contact(
    payload: Submission,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
    client_address: str = Depends(get_client_address),
):
    """JSON variant of the contact form, used by the statically built site."""
    outcome = pipeline.run(payload, client_address)

    if outcome.status is Status.RATE_LIMITED:
        return JSONResponse(
            {"error": outcome.notice, "retry_after": outcome.retry_after},
            status_code=429,
            headers={"Retry-After": str(outcome.retry_after)},
        )
    if outcome.status is Status.VALIDATION_FAILED:
        return JSONResponse({"errors": outcome.errors}, status_code=400)
    if outcome.status is Status.DELIVERY_FAILED:
        return JSONResponse({"error": FAILED_MESSAGE}, status_code=500)
    return {"success": True, "message": SENT_MESSAGE}

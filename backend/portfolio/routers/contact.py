from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from portfolio.core.profile import Profile
from portfolio.core.rendering import contact_context, page_template, templates
from portfolio.dependencies import get_client_address, get_pipeline, get_site_profile
from portfolio.lib.pipeline import SubmissionPipeline
from portfolio.lib.validation import Submission

router = APIRouter(tags=["contact"])


@router.post("/contact", response_class=HTMLResponse)
def submit_contact(
    request: Request,
    name: str = Form(default=""),
    mobile: str = Form(default=""),
    email: str = Form(default=""),
    message: str = Form(default=""),
    profile: Profile = Depends(get_site_profile),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
    client_address: str = Depends(get_client_address),
):
    submission = Submission(name=name, mobile=mobile, email=email, message=message)
    outcome = pipeline.run(submission, client_address)

    headers = {"Retry-After": str(outcome.retry_after)} if outcome.retry_after else None
    return templates.TemplateResponse(
        request,
        page_template("contact"),
        {
            "profile": profile,
            **contact_context(
                form=outcome.form,
                errors=outcome.errors,
                success=outcome.success,
                notice=outcome.notice,
            ),
        },
        status_code=outcome.http_status,
        headers=headers,
    )

# portfolio/dependencies.py
from fastapi import Request

from portfolio.core.profile import Profile
from portfolio.lib.pipeline import SubmissionPipeline


def get_site_profile(request: Request) -> Profile:
    return request.app.state.profile


def get_pipeline(request: Request) -> SubmissionPipeline:
    return request.app.state.pipeline


def get_client_address(request: Request) -> str:
    if request.app.state.settings.trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            first = forwarded.split(",")[0].strip()
            if first:
                return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"

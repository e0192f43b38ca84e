# portfolio/routers/pages.py
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, Response

from portfolio.core.profile import Profile
from portfolio.core.rendering import contact_context, page_template, templates
from portfolio.dependencies import get_site_profile
from portfolio.lib.vcard import build_vcard, vcard_filename

router = APIRouter(tags=["pages"])


def _page(request: Request, page: str, profile: Profile, **context):
    return templates.TemplateResponse(
        request,
        page_template(page),
        {"profile": profile, **context},
    )


@router.get("/", response_class=HTMLResponse)
def home(request: Request, profile: Profile = Depends(get_site_profile)):
    return _page(request, "home", profile)


@router.get("/experience", response_class=HTMLResponse)
def experience(request: Request, profile: Profile = Depends(get_site_profile)):
    return _page(request, "experience", profile)


@router.get("/projects", response_class=HTMLResponse)
def projects(request: Request, profile: Profile = Depends(get_site_profile)):
    return _page(request, "projects", profile)


@router.get("/contact", response_class=HTMLResponse)
def contact_page(request: Request, profile: Profile = Depends(get_site_profile)):
    return _page(request, "contact", profile, **contact_context())


@router.get("/resume")
def resume(request: Request, profile: Profile = Depends(get_site_profile)):
    path = Path(request.app.state.static_root) / "resume.pdf"
    if not path.is_file():
        raise HTTPException(status_code=404, detail="resume not found")
    return FileResponse(
        path,
        media_type="application/pdf",
        filename=f"{profile.file_stem}_Resume.pdf",
    )


@router.get("/vcard")
def vcard(profile: Profile = Depends(get_site_profile)):
    return Response(
        content=build_vcard(profile),
        media_type="text/vcard",
        headers={"Content-Disposition": f'attachment; filename="{vcard_filename(profile)}"'},
    )

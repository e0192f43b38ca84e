from pathlib import Path
from typing import Any, Dict

from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parents[1]
TEMPLATES_DIR = PACKAGE_DIR / "templates"

PAGES = ("home", "experience", "projects", "contact", "404")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def page_template(page: str) -> str:
    if page not in PAGES:
        raise KeyError(f"unknown page: {page}")
    return f"pages/{page}.html"


def contact_context(**overrides: Any) -> Dict[str, Any]:
    context: Dict[str, Any] = {"form": {}, "errors": {}, "success": False, "notice": None}
    context.update(overrides)
    return context


def render_page(page: str, **context: Any) -> str:
    """Render a page to a string outside of a request (static build)."""
    template = templates.get_template(page_template(page))
    return template.render(**context)

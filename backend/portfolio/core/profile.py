import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from portfolio.core.settings import settings

log = logging.getLogger("uvicorn.error")

PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_PROFILE_PATH = PACKAGE_DIR / "data" / "profile.json"

_profile: Optional["Profile"] = None


@dataclass(frozen=True)
class Experience:
    role: str
    company: str
    period: str = ""
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    name: str
    description: str = ""
    url: str = ""
    tech: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Profile:
    """Identity and contact data of the site owner. Never mutated after load."""

    name: str
    email: str
    phone: str
    location: str
    links: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    headline: str = ""
    summary: str = ""
    note: str = ""
    experience: Tuple[Experience, ...] = ()
    projects: Tuple[Project, ...] = ()
    skills: Tuple[str, ...] = ()

    @property
    def file_stem(self) -> str:
        return "_".join(self.name.split()) or "profile"


def profile_from_dict(data: Dict[str, Any]) -> Profile:
    missing = [k for k in ("name", "email", "phone", "location") if not data.get(k)]
    if missing:
        raise ValueError(f"profile is missing required fields: {', '.join(missing)}")

    experience = tuple(
        Experience(
            role=item.get("role", ""),
            company=item.get("company", ""),
            period=item.get("period", ""),
            highlights=tuple(item.get("highlights") or ()),
        )
        for item in data.get("experience") or ()
    )
    projects = tuple(
        Project(
            name=item.get("name", ""),
            description=item.get("description", ""),
            url=item.get("url", ""),
            tech=tuple(item.get("tech") or ()),
        )
        for item in data.get("projects") or ()
    )
    return Profile(
        name=data["name"],
        email=data["email"],
        phone=data["phone"],
        location=data["location"],
        links=MappingProxyType(dict(data.get("links") or {})),
        headline=data.get("headline", ""),
        summary=data.get("summary", ""),
        note=data.get("note", ""),
        experience=experience,
        projects=projects,
        skills=tuple(data.get("skills") or ()),
    )


def load_profile(path: Optional[Path] = None) -> Profile:
    source = Path(path) if path else DEFAULT_PROFILE_PATH
    with source.open(encoding="utf-8") as fh:
        data = json.load(fh)
    return profile_from_dict(data)


def get_profile() -> Profile:
    """Return the process-wide profile, loading it on first use."""
    global _profile
    if _profile is None:
        path = Path(settings.profile_path) if settings.profile_path else None
        _profile = load_profile(path)
        log.info(f"[profile] loaded profile for {_profile.name}")
    return _profile

import re
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

ErrorSet = Dict[str, str]

FIELDS = ("name", "mobile", "email", "message")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class Submission(BaseModel):
    """Raw contact form values for one attempt."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    mobile: str = ""
    email: str = ""
    message: str = ""

    def as_form(self) -> Dict[str, str]:
        return {f: getattr(self, f) for f in FIELDS}


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def validate(submission: Submission) -> ErrorSet:
    errors: ErrorSet = {}
    if is_blank(submission.name):
        errors["name"] = "Name is required"
    if is_blank(submission.mobile):
        errors["mobile"] = "Mobile is required"
    if is_blank(submission.email):
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.fullmatch(submission.email):
        errors["email"] = "Email is invalid"
    if is_blank(submission.message):
        errors["message"] = "Please enter a message"
    return errors

import dataclasses
import json

import pytest

from portfolio.core.profile import load_profile, profile_from_dict


def test_packaged_profile_loads():
    profile = load_profile()
    assert profile.name
    assert "github" in profile.links
    assert profile.file_stem == profile.name.replace(" ", "_")


def test_profile_is_read_only():
    profile = load_profile()
    with pytest.raises(dataclasses.FrozenInstanceError):
        profile.name = "Someone Else"
    with pytest.raises(TypeError):
        profile.links["github"] = "https://example.com"
    assert isinstance(profile.skills, tuple)


def test_missing_required_fields_are_rejected():
    with pytest.raises(ValueError, match="phone"):
        profile_from_dict({"name": "A", "email": "a@b.c", "location": "x"})


def test_load_from_custom_path(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "1",
        "location": "Paris",
        "experience": [{"role": "Dev", "company": "Acme", "highlights": ["shipped"]}],
    }), encoding="utf-8")

    profile = load_profile(path)
    assert profile.experience[0].company == "Acme"
    assert profile.experience[0].highlights == ("shipped",)
    assert dict(profile.links) == {}

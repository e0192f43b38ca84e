from typing import List

from portfolio.core.profile import Profile

CRLF = "\r\n"


def escape_text(value: str) -> str:
    """Escape a vCard 3.0 text value (RFC 2426 section 4)."""
    return (
        (value or "")
        .replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def split_name(full_name: str) -> tuple[str, str]:
    parts = full_name.split()
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[-1], " ".join(parts[:-1])


def build_vcard(profile: Profile) -> str:
    family, given = split_name(profile.name)
    lines: List[str] = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{escape_text(family)};{escape_text(given)};;;",
        f"FN:{escape_text(profile.name)}",
    ]
    if profile.headline:
        lines.append(f"ORG:{escape_text(profile.headline)}")
    lines.append(f"TEL:{profile.phone}")
    lines.append(f"EMAIL:{profile.email}")
    for url in profile.links.values():
        lines.append(f"URL:{url}")
    lines.append(f"ADR:;;{escape_text(profile.location)};;;;")
    if profile.note:
        lines.append(f"NOTE:{escape_text(profile.note)}")
    lines.append("END:VCARD")
    return CRLF.join(lines) + CRLF


def vcard_filename(profile: Profile) -> str:
    return f"{profile.file_stem}.vcf"

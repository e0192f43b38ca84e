import argparse
import html
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from portfolio.core.profile import PACKAGE_DIR, Profile, get_profile
from portfolio.core.rendering import PAGES, contact_context, render_page
from portfolio.core.settings import settings

log = logging.getLogger("uvicorn.error")

# built pages live at <page>.html, so links carry the suffix
STATIC_PAGE_EXT = ".html"

FALLBACK_INDEX = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name} - Portfolio</title>
    <link rel="stylesheet" href="/static/css/styles.css">
</head>
<body>
    <div class="container">
        <h1>{name}</h1>
        <p>{headline}</p>
        <nav>
            <a href="/experience.html">Experience</a>
            <a href="/projects.html">Projects</a>
            <a href="/contact.html">Contact</a>
        </nav>
    </div>
</body>
</html>
"""


def _output_name(page: str) -> str:
    return "index.html" if page == "home" else f"{page}.html"


def build(out_dir: Path,
          profile: Optional[Profile] = None,
          static_dir: Optional[Path] = None) -> List[Path]:
    profile = profile or get_profile()
    static_dir = static_dir or (Path(settings.static_root) if settings.static_root else PACKAGE_DIR / "static")
    out_dir.mkdir(parents=True, exist_ok=True)

    if static_dir.exists():
        shutil.copytree(static_dir, out_dir / "static", dirs_exist_ok=True)

    written: List[Path] = []
    for page in PAGES:
        try:
            rendered = render_page(page, profile=profile, page_ext=STATIC_PAGE_EXT, **contact_context())
        except Exception as exc:
            log.error(f"[build] error building {page}: {exc}")
            continue
        target = out_dir / _output_name(page)
        target.write_text(rendered, encoding="utf-8")
        written.append(target)
        log.info(f"[build] built {target}")

    index = out_dir / "index.html"
    if not index.exists():
        index.write_text(
            FALLBACK_INDEX.format(name=html.escape(profile.name), headline=html.escape(profile.headline)),
            encoding="utf-8",
        )
        written.append(index)
        log.info("[build] created simple index.html")

    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render the portfolio into static HTML.")
    parser.add_argument("--out", default=settings.dist_dir, help="Output directory (default: %(default)s).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    written = build(Path(args.out))
    log.info(f"[build] build completed, {len(written)} pages")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

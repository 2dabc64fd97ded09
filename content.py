"""
Flat-file content store.

Reads the files the CMS writes under CONTENT_DIR and returns validated
models. Nothing here writes content.

    profile/main.json           Profile singleton
    projects/<slug>.json        Project collection
    testimonials/<slug>.json    Testimonial collection
    blogs/<slug>.mdoc           BlogPost collection (YAML frontmatter + body)
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

import config
from schemas import (
    BlogPost,
    BlogStatus,
    ContentValidationError,
    FieldViolation,
    Profile,
    Project,
    Testimonial,
    validate_blog_post,
    validate_profile,
    validate_project,
    validate_testimonial,
)

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.S)
BLOG_SUFFIXES = (".mdoc", ".md")


class ContentNotFoundError(LookupError):
    pass


def _unreadable(path: Path, reason: str) -> ContentValidationError:
    return ContentValidationError([FieldViolation(field="<root>", constraint=reason)], source=str(path))


def _dates_to_iso(value: Any) -> Any:
    # YAML turns unquoted 2024-01-31 into a date; the schema expects the string
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _dates_to_iso(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dates_to_iso(v) for v in value]
    return value


def _flatten_series(raw: Dict[str, Any]) -> None:
    # the CMS stores the optional series as {"discriminant": bool, "value": {...}}
    series = raw.get("series")
    if isinstance(series, dict) and "discriminant" in series:
        raw["series"] = series.get("value") if series.get("discriminant") else None


def parse_frontmatter(text: str) -> Tuple[Any, str]:
    """Split a Markdoc/Markdown document into (frontmatter, body)."""
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    meta = yaml.safe_load(match.group(1))
    return (meta if meta is not None else {}), match.group(2)


class ContentStore:
    def __init__(self, root: Optional[str | Path] = None):
        self.root = Path(root or config.CONTENT_DIR)

    # =======
    # Readers
    # =======
    def _read_json(self, path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except UnicodeDecodeError as exc:
            raise _unreadable(path, f"not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise _unreadable(path, f"invalid JSON: {exc}") from exc

    def _read_blog(self, path: Path) -> Any:
        try:
            meta, body = parse_frontmatter(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise _unreadable(path, f"not valid UTF-8: {exc}") from exc
        except yaml.YAMLError as exc:
            raise _unreadable(path, f"invalid frontmatter: {exc}") from exc
        if isinstance(meta, dict):
            meta = _dates_to_iso(meta)
            _flatten_series(meta)
            meta.setdefault("content", body.strip())
        return meta

    def _load_collection(self, folder: str, suffixes: Tuple[str, ...], reader: Callable[[Path], Any], validate) -> list:
        directory = self.root / folder
        if not directory.is_dir():
            return []
        items = []
        for path in sorted(p for p in directory.iterdir() if p.suffix in suffixes and p.is_file()):
            raw = reader(path)
            if isinstance(raw, dict):
                # collection entries are keyed by file name
                raw.setdefault("slug", path.stem)
            items.append(validate(raw, source=str(path)))
        return items

    # =======
    # Profile
    # =======
    def profile(self) -> Profile:
        path = self.root / "profile" / "main.json"
        if not path.is_file():
            raise ContentNotFoundError(f"Profile not found at {path}")
        return validate_profile(self._read_json(path), source=str(path))

    # ========
    # Projects
    # ========
    def projects(self, include_drafts: bool = False) -> List[Project]:
        items = self._load_collection("projects", (".json",), self._read_json, validate_project)
        if include_drafts:
            return items
        return [p for p in items if not p.is_draft]

    def project(self, slug: str) -> Optional[Project]:
        for item in self.projects(include_drafts=True):
            if item.slug == slug:
                return item
        return None

    # ============
    # Testimonials
    # ============
    def testimonials(self) -> List[Testimonial]:
        return self._load_collection("testimonials", (".json",), self._read_json, validate_testimonial)

    def testimonial(self, slug: str) -> Optional[Testimonial]:
        for item in self.testimonials():
            if item.slug == slug:
                return item
        return None

    # =====
    # Blogs
    # =====
    def posts(self, status: Optional[BlogStatus] = BlogStatus.PUBLISHED) -> List[BlogPost]:
        """Blog posts newest first; ``status=None`` returns every status."""
        items = self._load_collection("blogs", BLOG_SUFFIXES, self._read_blog, validate_blog_post)
        if status is not None:
            items = [p for p in items if p.status == status]
        return sorted(items, key=lambda p: p.publish_date, reverse=True)

    def post(self, slug: str, status: Optional[BlogStatus] = BlogStatus.PUBLISHED) -> Optional[BlogPost]:
        for item in self.posts(status=status):
            if item.slug == slug:
                return item
        return None

    # ==========
    # References
    # ==========
    def related_testimonial(self, project: Project) -> Optional[Testimonial]:
        if not project.related_testimonial:
            return None
        found = self.testimonial(project.related_testimonial)
        if found is None:
            logger.debug("Project %s references unknown testimonial %s", project.slug, project.related_testimonial)
        return found

    def related_project(self, testimonial: Testimonial) -> Optional[Project]:
        if not testimonial.related_project:
            return None
        found = self.project(testimonial.related_project)
        if found is None:
            logger.debug("Testimonial %s references unknown project %s", testimonial.slug, testimonial.related_project)
        return found

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from contact import ContactSink, LoggingContactSink, build_submission, validate_contact
from content import ContentNotFoundError, ContentStore
from display import (
    aggregate_skills,
    calculate_duration,
    calculate_total_experience,
    format_date_range,
    format_duration,
    get_availability_display,
    get_project_display_name,
    group_projects_by_year,
    obfuscate_email,
)
from logging_setup import init_logging
from schemas import ContentValidationError, Project, Testimonial
from structured_data import blog_posting_jsonld, breadcrumb_jsonld, person_jsonld, website_jsonld

init_logging()
logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error. Please try again later."

# ==================
# FastAPI app config
# ==================
app = FastAPI(title="Portfolio API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============
# Dependencies
# ============
_default_sink = LoggingContactSink()


def get_store() -> ContentStore:
    return ContentStore()


def get_contact_sink() -> ContactSink:
    return _default_sink

# ===============
# Error handling
# ===============
@app.exception_handler(ContentValidationError)
async def content_validation_handler(request: Request, exc: ContentValidationError):
    logger.error("Content failed validation: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Content failed validation",
            "details": [v.model_dump(mode="json") for v in exc.violations],
        },
    )


@app.exception_handler(ContentNotFoundError)
async def content_not_found_handler(request: Request, exc: ContentNotFoundError):
    logger.warning("%s", exc)
    return JSONResponse(status_code=404, content={"detail": "Not found"})

# =========
# Utilities
# =========

def _project_view(project: Project) -> dict:
    item = project.to_record()
    item["displayName"] = get_project_display_name(project)
    if project.is_confidential:
        # the real client stays out of public output
        item.pop("clientName", None)
    months = calculate_duration(project.start_date, project.end_date)
    item["dateRange"] = format_date_range(project.start_date, project.end_date)
    item["durationMonths"] = months
    item["duration"] = format_duration(months)
    return item


def _testimonial_view(testimonial: Testimonial) -> dict:
    item = testimonial.to_record()
    # search-engine transcription only
    item.pop("textContent", None)
    return item


def _author_name(store: ContentStore) -> str:
    return config.AUTHOR_NAME or store.profile().name

# ======
# Routes
# ======
@app.get("/")
def root():
    return {"status": "ok", "service": "portfolio-api"}

# Contact
@app.post("/api/contact")
async def contact(request: Request, sink: ContactSink = Depends(get_contact_sink)):
    try:
        content_type = request.headers.get("content-type") or ""
        if "application/json" not in content_type:
            return JSONResponse(status_code=400, content={"error": "Content-Type must be application/json"})

        data = await request.json()
        errors = validate_contact(data)
        if errors:
            return JSONResponse(status_code=400, content={"error": "Validation failed", "details": errors})

        submission = build_submission(data, request.headers.get("user-agent"))
        sink.deliver(submission)
    except Exception:
        logger.exception("Contact form error")
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})
    return {"success": True, "message": config.CONTACT_ACK_MESSAGE}

@app.api_route("/api/contact", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"])
def contact_method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers={"Allow": "POST"})

# Profile
@app.get("/api/profile")
def get_profile(store: ContentStore = Depends(get_store)):
    profile = store.profile()
    item = profile.to_record()
    item["email"] = obfuscate_email(profile.email)
    item["availability"] = get_availability_display(profile.availability_status).model_dump(by_alias=True)
    return item

# Projects
@app.get("/api/projects")
def list_projects(featured: Optional[bool] = None, store: ContentStore = Depends(get_store)):
    items = store.projects()
    if featured is not None:
        items = [p for p in items if p.is_featured == featured]
    items.sort(key=lambda p: p.start_date, reverse=True)
    return [_project_view(p) for p in items]

@app.get("/api/projects/{slug}")
def get_project(slug: str, store: ContentStore = Depends(get_store)):
    project = store.project(slug)
    if not project or project.is_draft:
        raise HTTPException(status_code=404, detail="Not found")
    item = _project_view(project)
    testimonial = store.related_testimonial(project)
    item["testimonial"] = _testimonial_view(testimonial) if testimonial else None
    return item

@app.get("/api/timeline")
def get_timeline(store: ContentStore = Depends(get_store)):
    grouped = group_projects_by_year(store.projects())
    return [
        {"year": year, "projects": [_project_view(p) for p in projects]}
        for year, projects in grouped.items()
    ]

@app.get("/api/skills")
def get_skills(store: ContentStore = Depends(get_store)):
    return [s.model_dump(by_alias=True) for s in aggregate_skills(store.projects())]

@app.get("/api/experience")
def get_experience(store: ContentStore = Depends(get_store)):
    return {"years": calculate_total_experience(store.projects())}

# Testimonials
@app.get("/api/testimonials")
def list_testimonials(store: ContentStore = Depends(get_store)):
    return [_testimonial_view(t) for t in store.testimonials()]

# Blog
@app.get("/api/posts")
def list_posts(limit: Optional[int] = None, store: ContentStore = Depends(get_store)):
    items = store.posts()
    if limit is not None:
        items = items[:max(limit, 0)]
    posts = []
    for post in items:
        item = post.to_record()
        item.pop("content", None)
        posts.append(item)
    return posts

@app.get("/api/posts/{slug}")
def get_post(slug: str, store: ContentStore = Depends(get_store)):
    post = store.post(slug)
    if not post:
        raise HTTPException(status_code=404, detail="Not found")
    item = post.to_record()
    item["jsonLd"] = blog_posting_jsonld(post, _author_name(store))
    item["breadcrumbs"] = breadcrumb_jsonld([
        {"name": "Home", "url": "/"},
        {"name": "Blog", "url": "/blog"},
        {"name": post.title, "url": f"/blog/{post.slug}"},
    ])
    return item

# Structured data
@app.get("/api/jsonld/person")
def get_person_jsonld(store: ContentStore = Depends(get_store)):
    return person_jsonld(store.profile(), store.testimonials())

@app.get("/api/jsonld/website")
def get_website_jsonld(store: ContentStore = Depends(get_store)):
    return website_jsonld(store.profile())

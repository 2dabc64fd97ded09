"""
Content Schemas for the Portfolio

Each model mirrors one content kind managed by the CMS: the Profile singleton
and the Project, Testimonial and BlogPost collections. Records are authored
with camelCase keys; attributes are snake_case.
"""

from enum import Enum
from typing import Annotated, Any, Iterable, List, Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

MONTH_PATTERN = r"^\d{4}-\d{2}$"
END_MONTH_PATTERN = r"^(\d{4}-\d{2}|Present)$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
PRESENT = "Present"

# =====
# Enums
# =====
class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    OPEN_TO_DISCUSS = "Open to Discuss"
    BUSY = "Busy"

class OpenTo(str, Enum):
    FULL_TIME = "Full-time"
    CONTRACT = "Contract"
    FREELANCE = "Freelance"
    ADVISORY = "Advisory"

class WorkMode(str, Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ONSITE = "Onsite"

class EngagementType(str, Enum):
    PERMANENT = "Permanent"
    CONTRACT = "Contract"

class AspirationTimeline(str, Enum):
    IMMEDIATE = "Immediate"  # learning now
    STRATEGIC = "Strategic"  # 1-3 years
    VISIONARY = "Visionary"  # long-term

class BlogCategory(str, Enum):
    AI_ENGINEERING = "AI Engineering"
    OFFENSIVE_SECURITY = "Offensive Security"
    SYSTEM_DESIGN = "System Design"
    LEADERSHIP = "Leadership"

class BlogStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

# ======
# Errors
# ======
class FieldViolation(BaseModel):
    field: str
    constraint: str
    value: Any = None


class ContentValidationError(ValueError):
    """Raised when a content record breaks one or more schema constraints.

    ``violations`` lists every broken constraint, not only the first one.
    """

    def __init__(self, violations: Iterable[FieldViolation], source: Optional[str] = None):
        self.violations = list(violations)
        self.source = source
        where = f" in {source}" if source else ""
        summary = "; ".join(f"{v.field}: {v.constraint} (got {v.value!r})" for v in self.violations)
        super().__init__(f"{len(self.violations)} validation error(s){where}: {summary}")

    @classmethod
    def from_pydantic(cls, exc: ValidationError, source: Optional[str] = None) -> "ContentValidationError":
        violations = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "<root>"
            value = None if err["type"] == "missing" else err.get("input")
            violations.append(FieldViolation(field=field, constraint=err["msg"], value=value))
        return cls(violations, source)

# =======
# Helpers
# =======
def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an absolute http(s) URL")
    return value


def _check_email(value: str) -> str:
    if "<" in value or ">" in value:
        raise ValueError("must be a plain e-mail address, without a display name")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"must be a valid e-mail address: {exc}") from exc
    # keep the address exactly as authored
    return value


# Blank strings from empty CMS url fields count as absent
Url = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_url)]
Email = Annotated[str, AfterValidator(_check_email)]


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_record(self) -> dict:
        """Dump back to the authored (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

# ==========
# Components
# ==========
class SocialLinks(ContentModel):
    linkedin: Url = None
    github: Url = None
    twitter: Url = None
    medium: Url = None

class Aspiration(ContentModel):
    goal: str = Field(..., min_length=1, max_length=200)
    timeline: AspirationTimeline
    icon: Optional[str] = None  # emoji or icon name

class SkillRating(ContentModel):
    name: str = Field(..., min_length=1, max_length=50)
    rating: StrictInt = Field(..., ge=0, le=10)

class Series(ContentModel):
    series_name: str = Field(..., min_length=1, max_length=100)
    part_number: StrictInt = Field(..., ge=1)

# =======
# Content
# =======
class Profile(ContentModel):
    name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=150)
    tagline: str = Field(..., min_length=1, max_length=300)
    email: Email
    phone: Optional[str] = None
    avatar_image: Optional[str] = None  # public path, e.g. /images/profile/me.jpg
    location: str = Field(..., min_length=1, max_length=100)  # "City, Country"
    timezone: str = Field(..., min_length=1, max_length=50)
    availability_status: AvailabilityStatus
    open_to: List[OpenTo] = Field(..., min_length=1)
    work_modes: List[WorkMode] = Field(..., min_length=1)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    aspirations: List[Aspiration] = Field(..., min_length=1, max_length=10)
    bio: Optional[str] = None

    @field_validator("open_to", "work_modes")
    @classmethod
    def check_unique(cls, value):
        if len(set(value)) != len(value):
            raise ValueError("must not contain duplicate values")
        return value

class Project(ContentModel):
    slug: str = Field(..., min_length=1, max_length=100)
    client_name: str = Field(..., min_length=1, max_length=150)
    display_name: Optional[str] = None  # shown instead of client_name when confidential
    role: str = Field(..., min_length=1, max_length=100)
    start_date: str = Field(..., pattern=MONTH_PATTERN)
    end_date: str = Field(..., pattern=END_MONTH_PATTERN)
    engagement_type: EngagementType
    work_mode: WorkMode
    team_size: Optional[StrictInt] = Field(default=None, ge=1)
    location: Optional[str] = None
    is_confidential: StrictBool = False
    is_featured: StrictBool = False
    is_draft: StrictBool = False
    company_description: Optional[str] = None
    tech_stack: List[str] = Field(..., min_length=1)
    skills: List[SkillRating] = Field(..., min_length=1)
    achievements: List[str] = Field(default_factory=list)
    impact: Optional[str] = None
    project_reference: Url = None
    related_testimonial: Optional[str] = None  # testimonial slug

class Testimonial(ContentModel):
    slug: str = Field(..., min_length=1, max_length=100)
    screenshot: str
    author_name: str = Field(..., min_length=1, max_length=100)
    author_role: str = Field(..., min_length=1, max_length=150)
    author_company: str = Field(..., min_length=1, max_length=150)
    date: str = Field(..., pattern=DATE_PATTERN)
    text_content: str = Field(..., min_length=1)  # transcription for search engines, never rendered
    related_project: Optional[str] = None  # project slug

class BlogPost(ContentModel):
    slug: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=200)
    publish_date: str = Field(..., pattern=DATE_PATTERN)
    updated_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    seo_description: str = Field(..., min_length=50, max_length=160)
    cover_image: Optional[str] = None
    category: BlogCategory
    tags: List[str] = Field(..., min_length=1, max_length=10)
    series: Optional[Series] = None
    status: BlogStatus = BlogStatus.DRAFT
    reading_time: Optional[StrictInt] = Field(default=None, ge=1)
    content: str = ""

# ==========
# Validation
# ==========
def _parse(model, raw: Any, source: Optional[str] = None):
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise ContentValidationError.from_pydantic(exc, source) from exc


def validate_profile(raw: Any, source: Optional[str] = None) -> Profile:
    return _parse(Profile, raw, source)


def validate_project(raw: Any, source: Optional[str] = None) -> Project:
    return _parse(Project, raw, source)


def validate_testimonial(raw: Any, source: Optional[str] = None) -> Testimonial:
    return _parse(Testimonial, raw, source)


def validate_blog_post(raw: Any, source: Optional[str] = None) -> BlogPost:
    return _parse(BlogPost, raw, source)

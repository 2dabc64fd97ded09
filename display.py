"""
Display helpers for page templates.

All functions expect content that already passed the schema layer
(dates in YYYY-MM / "Present" form, known enum values). They do not
re-validate; malformed input gives unspecified output.
"""

import math
from datetime import date
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schemas import PRESENT, AvailabilityStatus, Project

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class DisplayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AvailabilityDisplay(DisplayModel):
    emoji: str
    color_class: str
    label: str


class SkillSummary(DisplayModel):
    name: str
    max_rating: int
    project_count: int


AVAILABILITY_DISPLAY = {
    AvailabilityStatus.AVAILABLE: AvailabilityDisplay(emoji="🟢", color_class="text-green-400", label="Available for Work"),
    AvailabilityStatus.OPEN_TO_DISCUSS: AvailabilityDisplay(emoji="🟡", color_class="text-yellow-400", label="Open to Discuss"),
    AvailabilityStatus.BUSY: AvailabilityDisplay(emoji="🔴", color_class="text-red-400", label="Currently Busy"),
}
UNKNOWN_AVAILABILITY = AvailabilityDisplay(emoji="⚪", color_class="text-gray-400", label="Status Unknown")

# =======
# Contact
# =======

def obfuscate_email(email: str) -> str:
    """Swap the first '@' and the first '.' for [at] / [dot].

    Only the first occurrence of each is replaced, so this is a light
    anti-scraping measure, not an encoding.
    """
    return email.replace("@", "[at]", 1).replace(".", "[dot]", 1)


def deobfuscate_email(obfuscated: str) -> str:
    # Not an exact inverse of obfuscate_email: "[dot]" is restored at its first
    # occurrence, which need not be where it was introduced.
    return obfuscated.replace("[at]", "@", 1).replace("[dot]", ".", 1)

# ========
# Projects
# ========

def get_project_display_name(project: Project) -> str:
    if project.is_confidential and project.display_name:
        return project.display_name
    return project.client_name


def _split_month(value: str):
    year, month = value.split("-")
    return int(year), int(month)


def _format_month(value: str) -> str:
    if value == PRESENT:
        return PRESENT
    year, month = _split_month(value)
    return f"{MONTH_NAMES[month - 1]} {year}"


def format_date_range(start_date: str, end_date: str) -> str:
    return f"{_format_month(start_date)} – {_format_month(end_date)}"


def calculate_duration(start_date: str, end_date: str, today: Optional[date] = None) -> int:
    """Calendar months between two YYYY-MM values, never less than 1."""
    start_year, start_month = _split_month(start_date)
    if end_date == PRESENT:
        today = today or date.today()
        end_year, end_month = today.year, today.month
    else:
        end_year, end_month = _split_month(end_date)
    months = (end_year - start_year) * 12 + (end_month - start_month)
    return max(1, months)


def format_duration(months: int) -> str:
    if months < 12:
        return f"{months} month{'' if months == 1 else 's'}"
    years, remaining = divmod(months, 12)
    if remaining == 0:
        return f"{years} year{'' if years == 1 else 's'}"
    return f"{years} yr{'' if years == 1 else 's'} {remaining} mo"


def get_availability_display(status) -> AvailabilityDisplay:
    try:
        return AVAILABILITY_DISPLAY[AvailabilityStatus(status)]
    except ValueError:
        return UNKNOWN_AVAILABILITY


def group_projects_by_year(projects: Iterable[Project]) -> Dict[int, List[Project]]:
    """Group projects by start year, newest first.

    Projects are sorted by start date descending before grouping, so both the
    years and the projects inside each year come out most recent first.
    """
    grouped: Dict[int, List[Project]] = {}
    for project in sorted(projects, key=lambda p: p.start_date, reverse=True):
        year = int(project.start_date.split("-")[0])
        grouped.setdefault(year, []).append(project)
    return grouped


def calculate_total_experience(projects: Iterable[Project], today: Optional[date] = None) -> int:
    projects = list(projects)
    if not projects:
        return 0
    earliest = min(p.start_date for p in projects)
    start_year, start_month = _split_month(earliest)
    today = today or date.today()
    years = (today.year - start_year) + (today.month - start_month) / 12
    # half-up, so 2.5 years reads as 3
    return math.floor(years + 0.5)


def aggregate_skills(projects: Iterable[Project]) -> List[SkillSummary]:
    stats: Dict[str, Dict[str, int]] = {}
    for project in projects:
        for skill in project.skills:
            entry = stats.get(skill.name)
            if entry:
                entry["max_rating"] = max(entry["max_rating"], skill.rating)
                entry["project_count"] += 1
            else:
                stats[skill.name] = {"max_rating": skill.rating, "project_count": 1}

    summaries = [SkillSummary(name=name, **entry) for name, entry in stats.items()]
    summaries.sort(key=lambda s: (-s.max_rating, -s.project_count))
    return summaries

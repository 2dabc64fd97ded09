from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'schemas'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    os.environ.setdefault("SITE_URL", "https://shreyansbhatt.com")
    os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def profile_data():
    return {
        "name": "Shreyans Bhatt",
        "title": "Principal Solution Architect",
        "tagline": "I design systems that survive contact with production.",
        "email": "tech.shreyans@gmail.com",
        "phone": "+91 98765 43210",
        "avatarImage": "/images/profile/avatar.jpg",
        "location": "Ahmedabad, India",
        "timezone": "UTC+5:30",
        "availabilityStatus": "Open to Discuss",
        "openTo": ["Contract", "Advisory"],
        "workModes": ["Remote", "Hybrid"],
        "socialLinks": {
            "linkedin": "https://www.linkedin.com/in/shreyans",
            "github": "https://github.com/shreyans",
        },
        "aspirations": [
            {"goal": "Ship an agentic RAG platform", "timeline": "Immediate", "icon": "🤖"},
            {"goal": "Lead a security engineering org", "timeline": "Strategic"},
        ],
        "bio": "Sixteen years of building things.",
    }


def make_project(**overrides):
    data = {
        "slug": "payments-platform",
        "clientName": "Acme Bank",
        "role": "Lead Architect",
        "startDate": "2021-03",
        "endDate": "2022-09",
        "engagementType": "Contract",
        "workMode": "Remote",
        "teamSize": 12,
        "techStack": ["Go", "Kafka"],
        "skills": [{"name": "Go", "rating": 8}],
        "achievements": ["Cut settlement time from days to minutes"],
    }
    data.update(overrides)
    return data


def make_testimonial(**overrides):
    data = {
        "slug": "jane-doe",
        "screenshot": "/images/testimonials/jane.png",
        "authorName": "Jane Doe",
        "authorRole": "CTO",
        "authorCompany": "Acme Bank",
        "date": "2023-02-14",
        "textContent": "Shreyans rebuilt our payments core without a single outage.",
        "relatedProject": "payments-platform",
    }
    data.update(overrides)
    return data


def make_blog_post(**overrides):
    data = {
        "slug": "zero-trust-in-practice",
        "title": "Zero Trust in Practice",
        "publishDate": "2024-05-01",
        "seoDescription": "What it actually takes to roll out zero trust networking inside a regulated bank.",
        "coverImage": "/images/blog/zero-trust.png",
        "category": "Offensive Security",
        "tags": ["Zero Trust", "Networking"],
        "status": "published",
        "content": "Body text.",
    }
    data.update(overrides)
    return data


@pytest.fixture
def project_data():
    return make_project()


@pytest.fixture
def testimonial_data():
    return make_testimonial()


@pytest.fixture
def blog_post_data():
    return make_blog_post()


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path, profile_data):
    """A content tree shaped like the CMS output."""
    root = tmp_path / "content"
    _write_json(root / "profile" / "main.json", profile_data)

    payments = make_project(relatedTestimonial="jane-doe")
    payments.pop("slug")  # taken from the file name
    _write_json(root / "projects" / "payments-platform.json", payments)
    _write_json(
        root / "projects" / "risk-engine.json",
        make_project(
            slug="risk-engine",
            clientName="Secret Insurer",
            displayName="Global Insurance Client",
            isConfidential=True,
            isFeatured=True,
            startDate="2023-01",
            endDate="Present",
            skills=[{"name": "Go", "rating": 9}, {"name": "Python", "rating": 7}],
            relatedTestimonial="nobody",
        ),
    )
    _write_json(
        root / "projects" / "side-quest.json",
        make_project(slug="side-quest", isDraft=True, startDate="2020-01"),
    )

    _write_json(root / "testimonials" / "jane-doe.json", make_testimonial())

    blogs = root / "blogs"
    blogs.mkdir(parents=True)
    (blogs / "zero-trust-in-practice.mdoc").write_text(
        "---\n"
        "title: Zero Trust in Practice\n"
        "publishDate: 2024-05-01\n"
        "updatedDate: 2024-06-10\n"
        "seoDescription: What it actually takes to roll out zero trust networking inside a regulated bank.\n"
        "coverImage: /images/blog/zero-trust.png\n"
        "category: Offensive Security\n"
        "tags:\n"
        "  - Zero Trust\n"
        "  - Networking\n"
        "series:\n"
        "  discriminant: true\n"
        "  value:\n"
        "    seriesName: Security Field Notes\n"
        "    partNumber: 2\n"
        "status: published\n"
        "---\n"
        "\n"
        "Start with identity.\n",
        encoding="utf-8",
    )
    (blogs / "rag-notes.mdoc").write_text(
        "---\n"
        "title: RAG Notes\n"
        "publishDate: 2024-01-20\n"
        "seoDescription: Notes from shipping retrieval augmented generation to a few thousand internal users.\n"
        "category: AI Engineering\n"
        "tags: [RAG]\n"
        "series:\n"
        "  discriminant: false\n"
        "status: published\n"
        "---\n"
        "Chunking matters.\n",
        encoding="utf-8",
    )
    (blogs / "unfinished.mdoc").write_text(
        "---\n"
        "title: Unfinished\n"
        "publishDate: 2024-07-01\n"
        "seoDescription: A draft that should never show up in the public listing of posts at all.\n"
        "category: Leadership\n"
        "tags: [Draft]\n"
        "---\n"
        "TBD\n",
        encoding="utf-8",
    )
    return root

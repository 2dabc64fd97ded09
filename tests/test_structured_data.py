from __future__ import annotations

import config
from conftest import make_blog_post, make_testimonial
from schemas import validate_blog_post, validate_profile, validate_testimonial
from structured_data import breadcrumb_jsonld, blog_posting_jsonld, person_jsonld, website_jsonld

SITE = "https://shreyansbhatt.com"


def test_person_jsonld_core_fields(profile_data):
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert data["@context"] == "https://schema.org"
    assert data["@type"] == "Person"
    assert data["jobTitle"] == "Principal Solution Architect"
    assert data["email"] == "mailto:tech.shreyans@gmail.com"
    assert data["telephone"] == "+91 98765 43210"
    assert data["image"] == "https://shreyansbhatt.com/images/profile/avatar.jpg"
    assert data["url"] == SITE
    assert data["address"] == {"@type": "PostalAddress", "addressLocality": "Ahmedabad", "addressCountry": "India"}


def test_person_same_as_keeps_order_and_skips_missing(profile_data):
    profile_data["socialLinks"] = {"medium": "https://medium.com/@shreyans", "github": "https://github.com/shreyans"}
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert data["sameAs"] == ["https://github.com/shreyans", "https://medium.com/@shreyans"]


def test_person_makes_offer_follows_open_to(profile_data):
    profile_data["openTo"] = ["Advisory", "Full-time"]
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert [o["itemOffered"]["name"] for o in data["makesOffer"]] == ["Advisory Engagement", "Full-time Engagement"]
    assert all(o["@type"] == "Offer" for o in data["makesOffer"])


def test_person_without_testimonials_has_no_endorsement(profile_data):
    data = person_jsonld(validate_profile(profile_data), [], site_url=SITE)
    assert "endorsement" not in data


def test_person_endorsement_from_testimonials(profile_data):
    testimonials = [
        validate_testimonial(make_testimonial()),
        validate_testimonial(make_testimonial(slug="raj", authorName="Raj K", authorRole="VP Engineering", date="2022-08-01")),
    ]
    data = person_jsonld(validate_profile(profile_data), testimonials, site_url=SITE)
    assert len(data["endorsement"]) == 2
    first = data["endorsement"][0]
    assert first == {
        "@type": "Review",
        "author": {"@type": "Person", "name": "Jane Doe", "jobTitle": "CTO"},
        "reviewBody": "Shreyans rebuilt our payments core without a single outage.",
        "datePublished": "2023-02-14",
    }
    assert data["endorsement"][1]["author"]["name"] == "Raj K"


def test_person_address_without_comma_uses_default_country(profile_data):
    profile_data["location"] = "Singapore"
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert data["address"]["addressLocality"] == "Singapore"
    assert data["address"]["addressCountry"] == config.DEFAULT_ADDRESS_COUNTRY


def test_person_address_splits_on_first_comma_only(profile_data):
    profile_data["location"] = "Pune, Maharashtra, India"
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert data["address"]["addressLocality"] == "Pune"
    assert data["address"]["addressCountry"] == "Maharashtra, India"


def test_person_omits_optional_contact_fields(profile_data):
    del profile_data["avatarImage"]
    del profile_data["phone"]
    data = person_jsonld(validate_profile(profile_data), site_url=SITE)
    assert "image" not in data
    assert "telephone" not in data


def test_blog_posting_jsonld():
    post = validate_blog_post(make_blog_post())
    data = blog_posting_jsonld(post, "Shreyans Bhatt", site_url=SITE)
    assert data["@type"] == "BlogPosting"
    assert data["headline"] == "Zero Trust in Practice"
    assert data["dateModified"] == "2024-05-01"
    assert data["keywords"] == "Zero Trust, Networking"
    assert data["articleSection"] == "Offensive Security"
    assert data["mainEntityOfPage"] == {"@type": "WebPage", "@id": f"{SITE}/blog/zero-trust-in-practice"}
    assert data["author"] == {"@type": "Person", "name": "Shreyans Bhatt", "url": SITE}
    assert data["publisher"] == data["author"]
    assert data["image"] == f"{SITE}/images/blog/zero-trust.png"


def test_blog_posting_uses_updated_date():
    post = validate_blog_post(make_blog_post(updatedDate="2024-06-10", coverImage=None))
    data = blog_posting_jsonld(post, "Shreyans Bhatt", site_url=SITE)
    assert data["dateModified"] == "2024-06-10"
    assert "image" not in data


def test_website_jsonld(profile_data):
    data = website_jsonld(validate_profile(profile_data), site_url=SITE)
    assert data["@type"] == "WebSite"
    assert data["name"] == "Shreyans Bhatt - Principal Solution Architect"
    assert data["author"] == {"@type": "Person", "name": "Shreyans Bhatt"}


def test_breadcrumb_positions_are_one_based():
    data = breadcrumb_jsonld(
        [{"name": "Home", "url": "/"}, {"name": "Projects", "url": "/projects"}],
        site_url=SITE,
    )
    assert data["@type"] == "BreadcrumbList"
    assert data["itemListElement"] == [
        {"@type": "ListItem", "position": 1, "name": "Home", "item": f"{SITE}/"},
        {"@type": "ListItem", "position": 2, "name": "Projects", "item": f"{SITE}/projects"},
    ]


def test_builders_default_to_configured_site(profile_data):
    data = website_jsonld(validate_profile(profile_data))
    assert data["url"] == config.SITE_URL

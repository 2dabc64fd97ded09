"""
Schema.org JSON-LD builders.

Every builder returns a plain dict ready for json.dumps into a
<script type="application/ld+json"> block. Optional properties are left out
rather than emitted as null or as empty lists.
"""

from typing import Iterable, List, Mapping, Optional

import config
from schemas import BlogPost, Profile, Testimonial

SCHEMA_CONTEXT = "https://schema.org"


def _split_location(location: str):
    """'Pune, India' -> ('Pune', 'India'); no comma -> (location, default country)."""
    locality, _, country = location.partition(",")
    locality = locality.strip() or location
    country = country.strip() or config.DEFAULT_ADDRESS_COUNTRY
    return locality, country


def person_jsonld(profile: Profile, testimonials: Iterable[Testimonial] = (), site_url: Optional[str] = None) -> dict:
    site_url = site_url or config.SITE_URL
    links = profile.social_links
    # fixed order; missing links are skipped
    same_as = [url for url in (links.linkedin, links.github, links.twitter, links.medium) if url]

    makes_offer = [
        {
            "@type": "Offer",
            "itemOffered": {"@type": "Service", "name": f"{engagement.value} Engagement"},
        }
        for engagement in profile.open_to
    ]

    endorsement = [
        {
            "@type": "Review",
            "author": {"@type": "Person", "name": t.author_name, "jobTitle": t.author_role},
            "reviewBody": t.text_content,
            "datePublished": t.date,
        }
        for t in testimonials
    ]

    locality, country = _split_location(profile.location)

    data = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Person",
        "name": profile.name,
        "jobTitle": profile.title,
        "description": profile.tagline,
        "email": f"mailto:{profile.email}",
        "url": site_url,
        "sameAs": same_as,
        "address": {
            "@type": "PostalAddress",
            "addressLocality": locality,
            "addressCountry": country,
        },
        "makesOffer": makes_offer,
    }
    if profile.phone:
        data["telephone"] = profile.phone
    if profile.avatar_image:
        data["image"] = f"{site_url}{profile.avatar_image}"
    if endorsement:
        data["endorsement"] = endorsement
    return data


def blog_posting_jsonld(post: BlogPost, author_name: str, site_url: Optional[str] = None) -> dict:
    site_url = site_url or config.SITE_URL
    author = {"@type": "Person", "name": author_name, "url": site_url}
    data = {
        "@context": SCHEMA_CONTEXT,
        "@type": "BlogPosting",
        "headline": post.title,
        "description": post.seo_description,
        "datePublished": post.publish_date,
        "dateModified": post.updated_date or post.publish_date,
        "author": author,
        "publisher": dict(author),
        "mainEntityOfPage": {"@type": "WebPage", "@id": f"{site_url}/blog/{post.slug}"},
        "keywords": ", ".join(post.tags),
        "articleSection": post.category.value,
    }
    if post.cover_image:
        data["image"] = f"{site_url}{post.cover_image}"
    return data


def website_jsonld(profile: Profile, site_url: Optional[str] = None) -> dict:
    site_url = site_url or config.SITE_URL
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": f"{profile.name} - {profile.title}",
        "description": profile.tagline,
        "url": site_url,
        "author": {"@type": "Person", "name": profile.name},
    }


def breadcrumb_jsonld(items: Iterable[Mapping[str, str]], site_url: Optional[str] = None) -> dict:
    """Build a BreadcrumbList from ``{"name", "url"}`` items with site-relative urls."""
    site_url = site_url or config.SITE_URL
    elements: List[dict] = [
        {
            "@type": "ListItem",
            "position": index,
            "name": item["name"],
            "item": f"{site_url}{item['url']}",
        }
        for index, item in enumerate(items, start=1)
    ]
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": elements,
    }

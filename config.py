"""
Configuration for the portfolio API.

Values come from the environment (a local .env file is honoured).
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Site identity used for canonical URLs in JSON-LD
SITE_URL = os.getenv("SITE_URL", "https://shreyansbhatt.com").rstrip("/")
# Used when the profile location carries no ", Country" part
DEFAULT_ADDRESS_COUNTRY = os.getenv("DEFAULT_ADDRESS_COUNTRY", "India")
# Optional override; the profile name is used when unset
AUTHOR_NAME = os.getenv("AUTHOR_NAME")

# Flat content files written by the CMS
CONTENT_DIR = os.getenv("CONTENT_DIR", "src/content")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

CONTACT_ACK_MESSAGE = os.getenv(
    "CONTACT_ACK_MESSAGE",
    "Thank you for your message. I will get back to you within 24-48 hours.",
)

"""Built-in boards and keyword tables.

These are the values used when no configuration file overrides them. They are
plain data so tests and config files can substitute their own tables.
"""

GREENHOUSE_API_BASE_URL = "https://boards-api.greenhouse.io/v1"

# (board token, display label)
DEFAULT_SOURCES = [
    ("stripe", "Stripe"),
    ("intercom", "Intercom"),
    ("adyen", "Adyen"),
    ("bolcom", "bol.com"),
    ("tripadvisor", "Tripadvisor"),
]

# Checked in order; the first country with a matching substring wins.
DEFAULT_COUNTRY_KEYWORDS = {
    "UK": ["united kingdom", "england", "london", "manchester", "oxford", "scotland"],
    "NL": ["netherlands", "amsterdam", "utrecht", "rotterdam", "eindhoven"],
    "BE": ["belgium", "brussels", "antwerp", "ghent"],
    "IE": ["ireland", "dublin", "galway"],
    "IT": ["italy", "rome", "milan", "turin", "florence"],
}

DEFAULT_ROLE_KEYWORDS = [
    r"marketing",
    r"content",
    r"social",
    r"campaign",
    r"growth",
    r"brand",
    r"video",
    r"creative",
    r"seo",
    r"communications?",
    r"partnership",
]

DEFAULT_VISA_KEYWORDS = ["visa", "sponsor", "work permit", "relocation"]

DEFAULT_MATCH_REASON_RULES = [
    (r"wordpress|cms", "Highlights hands-on CMS and WordPress content ownership."),
    (r"social media|community", "Focuses on social media storytelling and community building."),
    (r"video|motion|film|editing", "Requests strong video production and editing skills."),
    (r"seo|organic", "Looks for SEO optimisation and content growth know-how."),
    (r"copy|content", "Centres on content strategy and copy development."),
    (
        r"campaign|growth|performance",
        "Focuses on digital campaign execution and performance marketing.",
    ),
    (r"creative|design", "Values creative direction and visual storytelling capability."),
]

DEFAULT_FALLBACK_REASON = "Broad marketing role aligned with your multi-channel experience."

"""
Default values for MENUMINE extraction and compaction.

The key lists and generic-name blacklist were calibrated against one observed
menu provider. They are data, not logic: override them through a YAML config
file when an upstream shape drifts.
"""

# Common date-ish keys seen across menu APIs (order is the tie-break)
DEFAULT_DATE_KEYS = (
    "date",
    "menuDate",
    "menu_date",
    "serviceDate",
    "serveDate",
    "day",
    "dayDate",
    "startDate",
)

DEFAULT_NAME_KEYS = (
    "name",
    "item_name",
    "itemName",
    "menuItemName",
    "displayName",
    "title",
)

DEFAULT_SECTION_KEYS = (
    "station",
    "stationName",
    "displayStation",
    "displayCategory",
    "concept",
    "category",
    "course",
    "line",
    "area",
)

# Names equal to the group's own labels are never items
DEFAULT_GENERIC_NAMES = ("lunch", "breakfast", "dinner", "menu")

# Lowercased cleaned label → canonical short label
DEFAULT_SECTION_ALIASES = {
    "entree": "Entrees",
    "entrees": "Entrees",
    "main entree": "Entrees",
    "main entrees": "Entrees",
    "soup": "Soups",
    "soups": "Soups",
    "soup station": "Soups",
    "salad bar": "Salads",
    "deli bar": "Deli",
    "deli station": "Deli",
    "vegetarian": "Veggie",
    "vegan": "Veggie",
    "international": "Intl",
    "global flavors": "Intl",
    "dessert": "Desserts",
    "desserts": "Desserts",
    "side": "Sides",
    "sides": "Sides",
    "side dishes": "Sides",
}

DEFAULT_KEYWORD_PATTERN = r"\blunch\b"
DEFAULT_TIMEZONE = "America/Chicago"

# Minimum unique (name, section) pairs before a heuristic group is trusted
DEFAULT_MIN_GROUP_PAIRS = 3

# Observed webhook payload limit
DEFAULT_BYTE_BUDGET = 1900

DEFAULT_FALLBACK_URL_TEMPLATE = (
    "https://www.sagedining.com/microsites/getWeeklyMenuItems?menuId={menu_id}&date={us_date}"
)
DEFAULT_FALLBACK_ID_PARAM = "menuId"
DEFAULT_FALLBACK_OFFSETS = (0, 1, 2, 3, 4, 5, 6, 7)
DEFAULT_PROBE_TIMEOUT_S = 15.0

# Compaction ladder, most generous first. Every column is non-increasing.
DEFAULT_PROFILES = (
    {
        "section_limit": 6,
        "items_per_section": 3,
        "fallback_limit": 12,
        "section_name_max_chars": 24,
        "item_max_chars": 48,
        "error_max_chars": 220,
    },
    {
        "section_limit": 5,
        "items_per_section": 3,
        "fallback_limit": 10,
        "section_name_max_chars": 20,
        "item_max_chars": 40,
        "error_max_chars": 180,
    },
    {
        "section_limit": 4,
        "items_per_section": 2,
        "fallback_limit": 8,
        "section_name_max_chars": 18,
        "item_max_chars": 32,
        "error_max_chars": 140,
    },
    {
        "section_limit": 3,
        "items_per_section": 2,
        "fallback_limit": 6,
        "section_name_max_chars": 16,
        "item_max_chars": 26,
        "error_max_chars": 110,
    },
    {
        "section_limit": 2,
        "items_per_section": 1,
        "fallback_limit": 4,
        "section_name_max_chars": 14,
        "item_max_chars": 20,
        "error_max_chars": 80,
    },
)

# Day-map items listing several sections at once: an array of objects with a
# "name", or a comma-separated string
DEFAULT_MULTI_SECTION_LIST_KEYS = ("stations",)
DEFAULT_MULTI_SECTION_TEXT_KEYS = ("displayStation",)

"""
Centralized constants for the backend application.
Closed vocabularies shared by models, schemas, services and the CLI.

Usage:
    from shared.config.constants import Languages, ContentKind, ALLERGEN_LABELS_IT

    if language_code not in Languages.TARGETS:
        ...

    if kind in ContentKind.MENU_KINDS:
        ...
"""

from typing import Final


# =============================================================================
# Languages
# =============================================================================


class Languages:
    """Language codes. Italian is the source language and never a target."""

    SOURCE: Final[str] = "it"

    EN: Final[str] = "en"
    FR: Final[str] = "fr"
    DE: Final[str] = "de"
    ES: Final[str] = "es"
    PT: Final[str] = "pt"
    ZH: Final[str] = "zh"
    JA: Final[str] = "ja"
    AR: Final[str] = "ar"
    RU: Final[str] = "ru"

    # Ordered as presented to owners
    TARGETS: Final[list[str]] = [EN, FR, DE, ES, PT, ZH, JA, AR, RU]
    ALL: Final[list[str]] = [SOURCE, *TARGETS]

    DEFAULT_SELECTION: Final[list[str]] = [EN]


# English names go into prompts, native labels into listings
LANGUAGE_NAMES_EN: Final[dict[str, str]] = {
    "it": "Italian",
    "en": "English",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "pt": "Portuguese",
    "zh": "Chinese (Simplified)",
    "ja": "Japanese",
    "ar": "Arabic",
    "ru": "Russian",
}

LANGUAGE_NATIVE_LABELS: Final[dict[str, str]] = {
    "it": "Italiano",
    "en": "English",
    "fr": "Français",
    "de": "Deutsch",
    "es": "Español",
    "pt": "Português",
    "zh": "中文",
    "ja": "日本語",
    "ar": "العربية",
    "ru": "Русский",
}


# =============================================================================
# Translatable Content Kinds
# =============================================================================


class ContentKind:
    """Kinds of translatable menu text."""

    MENU_NAME: Final[str] = "menu_name"
    MENU_DESCRIPTION: Final[str] = "menu_description"
    SECTION_NAME: Final[str] = "section_name"
    SECTION_DESCRIPTION: Final[str] = "section_description"
    ITEM_NAME: Final[str] = "item_name"
    ITEM_DESCRIPTION: Final[str] = "item_description"
    INGREDIENT: Final[str] = "ingredient"
    ALLERGEN: Final[str] = "allergen"

    ALL: Final[list[str]] = [
        MENU_NAME,
        MENU_DESCRIPTION,
        SECTION_NAME,
        SECTION_DESCRIPTION,
        ITEM_NAME,
        ITEM_DESCRIPTION,
        INGREDIENT,
        ALLERGEN,
    ]

    # No translation table exists for menus
    MENU_KINDS: Final[frozenset[str]] = frozenset({MENU_NAME, MENU_DESCRIPTION})

    # Unselected by default in a new selection
    NAME_KINDS: Final[frozenset[str]] = frozenset({MENU_NAME, SECTION_NAME, ITEM_NAME})


CONTENT_KIND_LABELS: Final[dict[str, str]] = {
    ContentKind.MENU_NAME: "Menu name",
    ContentKind.MENU_DESCRIPTION: "Menu description",
    ContentKind.SECTION_NAME: "Section names",
    ContentKind.SECTION_DESCRIPTION: "Section descriptions",
    ContentKind.ITEM_NAME: "Item names",
    ContentKind.ITEM_DESCRIPTION: "Item descriptions",
    ContentKind.INGREDIENT: "Ingredients",
    ContentKind.ALLERGEN: "Allergens",
}


class TranslationField:
    """field_name values stored in translation rows."""

    NAME: Final[str] = "name"
    DESCRIPTION: Final[str] = "description"
    ABOUT: Final[str] = "about"
    DISPLAY_NAME: Final[str] = "display_name"

    SECTION_FIELDS: Final[list[str]] = [NAME, DESCRIPTION]
    ITEM_FIELDS: Final[list[str]] = [NAME, DESCRIPTION]
    RESTAURANT_FIELDS: Final[list[str]] = [DESCRIPTION, ABOUT]


# =============================================================================
# Allergens (EU 14)
# =============================================================================


ALLERGEN_LABELS_IT: Final[dict[str, str]] = {
    "glutine": "Glutine",
    "lattosio": "Lattosio",
    "uova": "Uova",
    "pesce": "Pesce",
    "crostacei": "Crostacei",
    "frutta_a_guscio": "Frutta a guscio",
    "arachidi": "Arachidi",
    "soia": "Soia",
    "sedano": "Sedano",
    "senape": "Senape",
    "sesamo": "Sesamo",
    "solfiti": "Solfiti",
    "lupini": "Lupini",
    "molluschi": "Molluschi",
}

ALLERGEN_CODES: Final[list[str]] = list(ALLERGEN_LABELS_IT)


# =============================================================================
# Dietary Tags
# =============================================================================


DIETARY_TAG_LABELS_IT: Final[dict[str, str]] = {
    "vegetariano": "Vegetariano",
    "vegano": "Vegano",
    "senza_glutine": "Senza glutine",
    "senza_lattosio": "Senza lattosio",
    "biologico": "Biologico",
    "piccante": "Piccante",
    "crudo": "Crudo",
    "halal": "Halal",
    "kosher": "Kosher",
}

DIETARY_TAG_CODES: Final[list[str]] = list(DIETARY_TAG_LABELS_IT)


# =============================================================================
# Menu Items
# =============================================================================


class ItemType:
    """Menu item type constants."""

    FOOD: Final[str] = "food"
    DRINK: Final[str] = "drink"
    WINE: Final[str] = "wine"
    BEER: Final[str] = "beer"
    COCKTAIL: Final[str] = "cocktail"
    DESSERT: Final[str] = "dessert"
    OTHER: Final[str] = "other"

    ALL: Final[list[str]] = [FOOD, DRINK, WINE, BEER, COCKTAIL, DESSERT, OTHER]

    # Types that carry alcohol_content / serving_format / volume_ml
    ALCOHOLIC: Final[frozenset[str]] = frozenset({WINE, BEER, COCKTAIL, DRINK})


WINE_TYPES: Final[list[str]] = [
    "red", "white", "rose", "sparkling", "champagne", "dessert_wine", "fortified",
]
WINE_CHARACTERISTICS: Final[list[str]] = [
    "dry", "semi_dry", "sweet", "semi_sweet", "still", "sparkling", "frizzante",
]
BEER_STYLES: Final[list[str]] = [
    "lager", "ale", "ipa", "stout", "pilsner", "wheat", "sour", "porter", "amber", "other",
]
SERVING_FORMATS: Final[list[str]] = ["glass", "bottle", "draft", "can"]

WINE_FIELDS: Final[tuple[str, ...]] = (
    "wine_type", "wine_characteristics", "grape_variety", "wine_region", "wine_producer", "vintage",
)
BEER_FIELDS: Final[tuple[str, ...]] = ("beer_style", "brewery", "ibu")
ALCOHOL_FIELDS: Final[tuple[str, ...]] = ("alcohol_content", "serving_format", "volume_ml")

DEFAULT_CURRENCY: Final[str] = "EUR"


# =============================================================================
# Restaurants
# =============================================================================


RESTAURANT_TYPES: Final[list[str]] = [
    "ristorante",
    "pizzeria",
    "pizzeria_ristorante",
    "trattoria",
    "osteria",
    "pub",
    "bar",
    "caffe",
    "enoteca",
    "bistrot",
    "tavola_calda",
    "rosticceria",
    "pasticceria",
    "gelateria",
]

SOCIAL_PLATFORMS: Final[list[str]] = [
    "facebook", "instagram", "tiktok", "twitter", "youtube", "tripadvisor", "website",
]


# =============================================================================
# Image Generation
# =============================================================================


IMAGE_STYLE_MODIFIERS: Final[dict[str, str]] = {
    "professional": "professional food photography, high-end restaurant quality, perfect lighting, clean background",
    "artistic": "artistic food photography, creative composition, dramatic lighting, artistic style",
    "top_view": "top-down view, flat lay photography, overhead shot, perfectly centered",
    "close_up": "close-up macro photography, detailed texture, shallow depth of field",
    "rustic": "rustic style, natural wood background, warm tones, homestyle presentation",
    "modern": "modern minimalist style, clean lines, contemporary plating, elegant presentation",
}

IMAGE_SIZES: Final[list[str]] = ["1024x1024", "1536x1024", "1024x1536", "auto"]
IMAGE_QUALITIES: Final[list[str]] = ["high", "medium", "low", "auto"]
IMAGE_BACKGROUNDS: Final[list[str]] = ["transparent", "opaque", "auto"]

IMAGE_PROMPT_SUFFIX: Final[str] = "High quality food photography for restaurant menu."

ALLOWED_IMAGE_CONTENT_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/png", "image/webp", "image/gif"}
)


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_TRANSLATION_TEXT_LENGTH: Final[int] = 5000
    MAX_PROMPT_LENGTH: Final[int] = 1000

    # Price limits
    MIN_PRICE: Final[float] = 0.0
    MAX_PRICE: Final[float] = 100_000.0

    # Auto-complete sanitising
    MIN_DESCRIPTION_CHARS: Final[int] = 10
    MAX_INGREDIENTS: Final[int] = 10
    MIN_CALORIES: Final[int] = 0
    MAX_CALORIES: Final[int] = 2000


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standardized error messages."""

    NOT_AUTHENTICATED: Final[str] = "Not authenticated"
    INVALID_TOKEN: Final[str] = "Invalid token"
    TOKEN_EXPIRED: Final[str] = "Token expired"

    EMPTY_TEXT: Final[str] = "Text is required"
    INVALID_LANGUAGE: Final[str] = "Unsupported language code"
    MISSING_TYPE_OR_ENTITY: Final[str] = "Content type and entity id are required"
    INVALID_CONTENT_KIND: Final[str] = "Unknown content type"

    LLM_NOT_CONFIGURED: Final[str] = "Translation provider is not configured"
    LLM_EMPTY_OUTPUT: Final[str] = "The model returned an empty translation"
    LLM_FAILED: Final[str] = "The language model request failed"

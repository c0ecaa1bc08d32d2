"""
Prompt templates for the language model calls.
"""

from shared.config.constants import (
    ALLERGEN_CODES,
    IMAGE_PROMPT_SUFFIX,
    IMAGE_STYLE_MODIFIERS,
    LANGUAGE_NAMES_EN,
    Languages,
)


TRANSLATION_SYSTEM_PROMPT = " ".join([
    "You are a professional translator for restaurant and hospitality content.",
    "Keep a natural tone suited to menu descriptions.",
    "Do not add information that is not in the text.",
    "Preserve formatting, emojis and line breaks.",
    "Return only the translated text, without quotes or notes.",
])


def translation_messages(text: str, language_code: str) -> list[dict[str, str]]:
    """Chat messages translating Italian text into the target language."""
    source = LANGUAGE_NAMES_EN[Languages.SOURCE]
    target = LANGUAGE_NAMES_EN[language_code]
    return [
        {"role": "system", "content": TRANSLATION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Translate the following text from {source} to {target}.\n\n{text}",
        },
    ]


AUTOCOMPLETE_SYSTEM_PROMPT = f"""You are an expert in Italian and international cuisine. Your job is to give detailed information about dishes, drinks and food products.

For each item provide, written in Italian:
1. A short description (2-3 sentences) that makes the item sound appetising
2. A story or fact about the item (1-2 sentences) about its origin or a curiosity
3. The main ingredients (one per entry, at most 10)
4. The allergens present (only among these codes: {", ".join(ALLERGEN_CODES)})
5. Estimated calories per 100g of product

Reply ONLY with a valid JSON object in exactly this format:
{{
  "description": "short description",
  "about": "story or curiosity",
  "ingredients": ["ingredient1", "ingredient2"],
  "allergens": ["glutine", "lattosio"],
  "calories": 250
}}

IMPORTANT:
- No text before or after the JSON
- Use only the allergen codes listed above
- Omit allergens that are not present
- Calories must be an integer
- Ingredients must be single ingredients ("pomodoro", "mozzarella", not "pomodoro e mozzarella")
- At most 10 ingredients"""

_ITEM_NOUNS = {
    "food": "dish",
    "dessert": "dessert",
}


def autocomplete_messages(item_name: str, item_type: str) -> list[dict[str, str]]:
    noun = _ITEM_NOUNS.get(item_type, "product")
    return [
        {"role": "system", "content": AUTOCOMPLETE_SYSTEM_PROMPT},
        {"role": "user", "content": f'Give detailed information for this {noun}: "{item_name}"'},
    ]


def image_prompt(prompt: str, style: str | None) -> str:
    """Owner prompt plus the style modifier and the fixed photography suffix."""
    text = prompt.strip().rstrip(".")
    if style:
        text = f"{text}. Style: {IMAGE_STYLE_MODIFIERS[style]}"
    return f"{text}. {IMAGE_PROMPT_SUFFIX}"

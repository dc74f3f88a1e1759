"""Prompt templates and output schemas sent to the LLM provider."""

from __future__ import annotations

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "ja": "Japanese",
    "es": "Spanish",
    "th": "Thai",
}

CATEGORY_CHOICES = "Italian, Japanese, Mexican, Indian, Thai, Vegan, Dessert, Mediterranean, or General"

_SUMMARY_PROPERTIES = {
    "id": {"type": "string"},
    "name": {"type": "string"},
    "category": {"type": "string"},
    "shortDescription": {"type": "string"},
    "prepTime": {"type": "string"},
    "calories": {"type": "string"},
}

SUMMARY_LIST_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": _SUMMARY_PROPERTIES,
        "required": list(_SUMMARY_PROPERTIES),
    },
}

RECIPE_DETAIL_SCHEMA = {
    "type": "object",
    "properties": {
        **_SUMMARY_PROPERTIES,
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "instructions": {"type": "array", "items": {"type": "string"}},
        "tips": {"type": "array", "items": {"type": "string"}},
    },
    "required": [*_SUMMARY_PROPERTIES, "ingredients", "instructions", "tips"],
}

RECIPE_DETAIL_PROMPT = """Generate a complete, detailed recipe for "{name}".
Include:
- A complete list of ingredients with measurements
- Step-by-step cooking instructions (8-12 steps)
- 3-4 helpful cooking tips
- Accurate prep time (format: "X min") and calories (format: "X kcal")
- Appropriate category ({categories})

Make it authentic, detailed, and practical for home cooking."""

RECIPE_LIST_PROMPT = (
    'Generate {count} diverse and delicious recipes based on this search query: "{query}". '
    "Make them appetizing, realistic, and varied. Include different cooking styles and difficulty levels. "
    'Provide accurate prep times (in format like "25 min") and calorie estimates (in format like "350 kcal").'
)

TEXT_TRANSLATION_PROMPT = (
    "Translate the following text to {language}. Only return the translated text, nothing else:\n\n{text}"
)

STRUCTURED_TRANSLATION_PROMPT = (
    "Translate the following recipe data to {language}. Keep the JSON structure exactly the same, "
    "only translate the text values (name, description, ingredients, instructions, tips, etc.). "
    "Return valid JSON only without any markdown formatting:\n\n{payload}"
)

QUERY_TRANSLATION_PROMPT = (
    "Translate this food/recipe search query to English. Only return the English translation, nothing else:\n\n{query}"
)


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)

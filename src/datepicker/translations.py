"""UI strings per language.

Weekday and month names come from the locale collaborator of the renderer;
only the picker's own strings live here.
"""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_LANGUAGE = "en"


class Translation(BaseModel):
    """Strings for one language."""

    cancel: str = Field(..., description="Label of the cancel button")
    day: str = Field(..., description="Singular day unit")
    days: str = Field(..., description="Plural day unit")

    def num_days(self, num: int) -> str:
        """Describe a day count, e.g. "1 day" or "3 days"."""
        return f"1 {self.day}" if num == 1 else f"{num} {self.days}"


TRANSLATIONS = {
    "en": Translation(cancel="Cancel", day="day", days="days"),
    "nl": Translation(cancel="Annuleren", day="dag", days="dagen"),
    "de": Translation(cancel="Abbrechen", day="Tag", days="Tagen"),
}


def resolve_language(locale: Optional[str]) -> str:
    """Reduce a locale such as "nl-NL" or "de_DE.UTF-8" to a supported language."""
    if not locale:
        return DEFAULT_LANGUAGE
    language = locale.replace("_", "-").split("-", 1)[0].split(".", 1)[0].lower()
    return language if language in TRANSLATIONS else DEFAULT_LANGUAGE


def get_translation(locale: Optional[str]) -> Translation:
    return TRANSLATIONS[resolve_language(locale)]

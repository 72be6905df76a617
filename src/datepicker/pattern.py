"""Two-way string pattern engine.

A pattern is a template with named placeholders between braces. It can be used
to match strings, returning the detected parameters, or as a template to build
a string from parameters.

E.g. Pattern("This is a {variable} pattern") matches "This is a cool pattern",
returning {"variable": "cool"}, and fills {"variable": "nice"} into
"This is a nice pattern".
"""

import re
from datetime import datetime
from typing import Any, Optional

PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")

# Predefined placeholder types
PATTERN_TYPES = {
    "any": r"[a-zA-Z0-9_-]+",
    "int": r"\d+",
    "float": r"\d*\.?\d+",
    "url_part": r"[^/]+",
}

DEFAULT_TYPE = "any"


class PatternError(ValueError):
    """Raised when a template cannot be compiled into a regular expression."""

    pass


def zero_pad(number: Any, length: int) -> str:
    """Left-pad the string form of number with zeros up to length."""
    return str(number).rjust(length, "0")


class Pattern:
    """Compiled `{name}` / `{name:type}` template.

    Attributes:
        template: The template as given
        replace_indexes: Placeholder name -> 1-based capture group index
        stripped_template: Template with every placeholder reduced to `{name}`
        regex: Compiled regex that fully matches strings shaped like the template
    """

    def __init__(self, template: str):
        self.template = template
        self.replace_indexes: dict[str, int] = {}

        regex_parts: list[str] = []
        stripped_parts: list[str] = []
        position = 0
        index = 1

        for token in PLACEHOLDER_RE.finditer(template):
            lead = template[position : token.start()]
            if lead:
                regex_parts.append(re.escape(lead))
                stripped_parts.append(lead)

            name, _, type_name = token.group(1).partition(":")
            type_name = type_name or DEFAULT_TYPE

            # First declaration of a repeated name stays addressable
            self.replace_indexes.setdefault(name, index)

            if type_name in PATTERN_TYPES:
                regex_parts.append(f"({PATTERN_TYPES[type_name]})")
            else:
                regex_parts.append("(" + type_name.replace("\\", "\\\\") + ")")
            stripped_parts.append("{" + name + "}")

            position = token.end()
            index += 1

        tail = template[position:]
        if tail:
            regex_parts.append(re.escape(tail))
            stripped_parts.append(tail)

        self.stripped_template = "".join(stripped_parts)

        try:
            self.regex = re.compile("".join(regex_parts))
        except re.error as e:
            raise PatternError(f"Cannot compile pattern {template!r}: {e}") from e

    def __repr__(self) -> str:
        return f"Pattern({self.template!r})"

    @property
    def placeholders(self) -> list[str]:
        """Placeholder names in declaration order."""
        return list(self.replace_indexes)

    def match(
        self, text: str, brace_identifiers: bool = False
    ) -> Optional[dict[str, str]]:
        """Match text against the pattern, returning the detected parameters.

        Args:
            text: The string to match against
            brace_identifiers: Wrap the parameter names in braces ({name})

        Returns:
            Mapping of placeholder name to the matched substring, or None when
            the text does not fully match
        """
        matches = self.regex.fullmatch(text)
        if matches is None:
            return None

        result: dict[str, str] = {}
        for name, index in self.replace_indexes.items():
            key = "{" + name + "}" if brace_identifiers else name
            result[key] = matches.group(index)
        return result

    def fill(self, values: dict[str, Any]) -> str:
        """Use the pattern as a template to generate a string.

        Each `{key}` occurrence is replaced by str(value) in one pass per key.
        Placeholders without a value are left in place.
        """
        text = self.stripped_template
        for key, value in values.items():
            text = text.replace("{" + key + "}", str(value))
        return text

    def fill_date(self, value: Any) -> str:
        """Like fill(), but takes a date-like value.

        Supplies `year`, `month`, `day`, `hours`, `minutes`, `seconds` (zero-padded
        to two digits) and `tz`, the offset in minutes as UTC minus local time.
        Accepts datetime, date or anything with year/month/day attributes.
        Returns an empty string for a falsy value.
        """
        if not value:
            return ""

        hours = getattr(value, "hour", 0)
        minutes = getattr(value, "minute", 0)
        seconds = getattr(value, "second", 0)
        tz = 0
        if isinstance(value, datetime) and value.utcoffset() is not None:
            tz = -int(value.utcoffset().total_seconds() // 60)

        props = {
            "day": zero_pad(value.day, 2),
            "year": zero_pad(value.year, 2),
            "hours": zero_pad(hours, 2),
            "minutes": zero_pad(minutes, 2),
            "month": zero_pad(value.month, 2),
            "seconds": zero_pad(seconds, 2),
            "tz": tz,
        }

        return self.fill(props)


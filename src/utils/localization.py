"""Language-aware field access for provider rows.

Provider records carry a local-language value and an optional English value
for names, addresses, cities and districts. Display code asks for a field in
the active language and falls back to the local value when the English one is
missing.
"""

import unicodedata
from typing import Any, Tuple

LOCAL_LANGUAGE = "vi"
FOREIGN_LANGUAGE = "en"
SUPPORTED_LANGUAGES = (LOCAL_LANGUAGE, FOREIGN_LANGUAGE)

# Local column -> English counterpart
FOREIGN_COLUMNS = {
    "Name": "English Name",
    "Address": "English Address",
    "City": "English City",
    "District": "English District",
    "Country Name": "Country English Name",
}


def _text(value: Any) -> str:
    if value is None or value != value:  # NaN
        return ""
    return str(value)


def localized_value(provider: Any, column: str, language: str = LOCAL_LANGUAGE) -> str:
    local = _text(provider.get(column))
    if language != FOREIGN_LANGUAGE or column not in FOREIGN_COLUMNS:
        return local
    return _text(provider.get(FOREIGN_COLUMNS[column])) or local


def capitalize_first(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return text[:1].upper() + text[1:]


def collation_key(text: str) -> Tuple[str, str]:
    """Sort key that orders accented letters next to their base letter."""
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text

"""Per-script romanization strategies for slug normalization.

Responsibilities:
- Detect the Unicode script of a character from its character name.
- Map each supported script to a romanizer that returns ASCII text.
- Let callers register strategies for further scripts.

Key types:
- `Romanizer`: callable turning one lowercase character into ASCII text.
- `RomanizerRegistry`: script-name keyed strategy table.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import unicodedata

from text_unidecode import unidecode

Romanizer = Callable[[str], str]

_SCRIPT_ALIASES = {
    "arabic-indic": "arabic",
    "extended": "arabic",
}

_LATIN_SPECIAL_LETTERS = {
    "đ": "dj",
    "ð": "d",
    "ß": "ss",
    "æ": "ae",
    "ø": "o",
    "ł": "l",
    "þ": "th",
    "œ": "oe",
    "ı": "i",
    "ħ": "h",
    "ŧ": "t",
    "ŋ": "ng",
    "ĸ": "k",
}

_CYRILLIC_LETTERS = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "і": "i", "ї": "yi", "є": "ye", "ґ": "g", "ў": "u",
    "ђ": "dj", "ј": "j", "љ": "lj", "њ": "nj", "ћ": "c", "џ": "dz",
}

_GREEK_LETTERS = {
    "α": "a", "β": "v", "γ": "g", "δ": "d", "ε": "e", "ζ": "z", "η": "i",
    "θ": "th", "ι": "i", "κ": "k", "λ": "l", "μ": "m", "ν": "n", "ξ": "x",
    "ο": "o", "π": "p", "ρ": "r", "σ": "s", "ς": "s", "τ": "t", "υ": "y",
    "φ": "f", "χ": "ch", "ψ": "ps", "ω": "o",
}

_ARABIC_CHARACTERS = {
    "ا": "a", "أ": "a", "إ": "i", "آ": "a", "ب": "b", "ت": "t", "ث": "th",
    "ج": "j", "ح": "h", "خ": "kh", "د": "d", "ذ": "dh", "ر": "r", "ز": "z",
    "س": "s", "ش": "sh", "ص": "s", "ض": "d", "ط": "t", "ظ": "z", "ع": "",
    "غ": "gh", "ف": "f", "ق": "q", "ك": "k", "ل": "l", "م": "m", "ن": "n",
    "ه": "h", "و": "w", "ي": "y", "ى": "a", "ة": "h", "ء": "", "ئ": "y",
    "ؤ": "w", "پ": "p", "چ": "ch", "ژ": "zh", "گ": "g", "ک": "k", "ی": "y",
    "٠": "0", "١": "1", "٢": "2", "٣": "3", "٤": "4",
    "٥": "5", "٦": "6", "٧": "7", "٨": "8", "٩": "9",
    "۰": "0", "۱": "1", "۲": "2", "۳": "3", "۴": "4",
    "۵": "5", "۶": "6", "۷": "7", "۸": "8", "۹": "9",
}


def script_of(char: str) -> str | None:
    """Return the lowercase script name of a character, or `None` when unnamed.

    The script is the first word of the Unicode character name, so
    `"LATIN SMALL LETTER E WITH ACUTE"` belongs to `latin` and
    `"CJK UNIFIED IDEOGRAPH-4F60"` to `cjk`.
    """

    name = unicodedata.name(char, "")
    if not name:
        return None
    script = name.split(" ", 1)[0].lower()
    return _SCRIPT_ALIASES.get(script, script)


def romanize_latin(char: str) -> str:
    """Strip diacritics from a Latin letter, keeping its ASCII base."""

    special = _LATIN_SPECIAL_LETTERS.get(char)
    if special is not None:
        return special
    decomposed = unicodedata.normalize("NFKD", char)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def table_romanizer(table: Mapping[str, str]) -> Romanizer:
    """Build a romanizer from a character table.

    Characters missing from the table are looked up again by their decomposed
    base character (so accented Greek vowels reuse the plain entries) and
    romanize to nothing when still unknown.
    """

    def _romanize(char: str) -> str:
        mapped = table.get(char)
        if mapped is not None:
            return mapped
        base = unicodedata.normalize("NFKD", char)[:1]
        return table.get(base, "")

    return _romanize


def romanize_with_unidecode(char: str) -> str:
    """Romanize through the generic `text-unidecode` transliteration tables."""

    return unidecode(char).lower()


class RomanizerRegistry:
    """Script-keyed romanization strategies."""

    def __init__(self, romanizers: Mapping[str, Romanizer] | None = None) -> None:
        """Initialize the registry with an optional initial strategy table."""

        self._romanizers: dict[str, Romanizer] = dict(romanizers or {})

    def register(self, script: str, romanizer: Romanizer) -> None:
        """Add or replace the romanizer for a script name."""

        self._romanizers[script.strip().lower()] = romanizer

    def get(self, script: str | None) -> Romanizer | None:
        """Return the romanizer registered for a script, if any."""

        if script is None:
            return None
        return self._romanizers.get(script)

    def scripts(self) -> tuple[str, ...]:
        """Return registered script names in sorted order."""

        return tuple(sorted(self._romanizers))

    def copy(self) -> RomanizerRegistry:
        """Return an independent registry with the same strategies."""

        return RomanizerRegistry(self._romanizers)


def default_registry() -> RomanizerRegistry:
    """Return a registry holding the built-in script strategies."""

    return RomanizerRegistry(
        {
            "latin": romanize_latin,
            "cyrillic": table_romanizer(_CYRILLIC_LETTERS),
            "greek": table_romanizer(_GREEK_LETTERS),
            "thai": romanize_with_unidecode,
            "arabic": table_romanizer(_ARABIC_CHARACTERS),
            "cjk": romanize_with_unidecode,
            "hiragana": romanize_with_unidecode,
            "katakana": romanize_with_unidecode,
            "hangul": romanize_with_unidecode,
        }
    )


DEFAULT_REGISTRY = default_registry()


def register_romanizer(script: str, romanizer: Romanizer) -> None:
    """Register a romanizer on the process-wide default registry."""

    DEFAULT_REGISTRY.register(script, romanizer)

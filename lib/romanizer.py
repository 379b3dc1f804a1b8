# =============================================================================
# lib/romanizer.py - Sindhi Text Tools (Hesudhar + Romanizer)
# =============================================================================
# Pure text functions used by the admin content workflow:
# - Hesudhar: orthographic fix of heh (ه) into heh doachashmee (ھ)
# - Dictionary correction: whole-word replacement from the hesudhar table
# - Romanizer: Sindhi -> Latin transliteration (dictionary first, then a
#   per-letter map), with Sindhi punctuation mapped to ASCII
# - Dictionary file format used by the sync task ("word|replacement")
#
# Nothing here touches the database; dictionaries are passed in as dicts.
# See core/services/dictionary_service.py for loading and caching them.
# =============================================================================

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

HesudharMode = Literal["smart", "global"]

HEH = "\u0647"                 # ه
HEH_DOACHASHMEE = "\u06be"     # ھ

# Arabic block, which covers every Sindhi letter
_ARABIC_LETTER_RE = re.compile(r"[\u0600-\u06FF]")

# Word tokens: letters/digits/underscore, Arabic combining marks, apostrophes, dashes
WORD_RE = re.compile(r"[\w\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED'\-]+")

# Romanizer splits on whitespace and punctuation, keeping the separators
_SPLIT_RE = re.compile(r"(\s+|[.,!?\u061b\u060c:\-()\[\]{}\"'`])")
_SEPARATOR_RE = re.compile(r"^(\s+|[.,!?\u061b\u060c:\-()\[\]{}\"'`])$")

PUNCTUATION_MAP: dict[str, str] = {
    "\u060c": ",",      # ، comma
    "\u061b": ";",      # ؛ semicolon
    "\u061f": "?",      # ؟ question mark
    "\u06d4": ".",      # ۔ full stop
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u2013": "-",
    "\u2014": "--",
}
_PUNCTUATION_RE = re.compile("[" + "".join(PUNCTUATION_MAP) + "]")

# Per-letter fallback used when a word has no dictionary entry
CHAR_MAP: dict[str, str] = {
    "ا": "a", "آ": "aa", "ب": "b", "ٻ": "bb", "ڀ": "bh", "پ": "p",
    "ت": "t", "ٿ": "th", "ٽ": "ṭ", "ٺ": "ṭh", "ث": "s", "ج": "j",
    "ڄ": "jj", "ڃ": "ñ", "چ": "ch", "ڇ": "chh", "ح": "h",
    "خ": "kh", "د": "d", "ڌ": "dh", "ڊ": "ḍ", "ڏ": "dd", "ڍ": "ḍh",
    "ذ": "z", "ر": "r", "ڙ": "ṛ", "ز": "z", "ژ": "zh", "س": "s",
    "ش": "sh", "ص": "s", "ض": "z", "ط": "t", "ظ": "z", "ع": "'",
    "غ": "gh", "ف": "f", "ڦ": "ph", "ق": "q", "ڪ": "k", "ک": "kh",
    "گ": "g", "ڳ": "gg", "ڱ": "ng", "ل": "l", "م": "m", "ن": "n",
    "ڻ": "ṇ", "و": "w", "ؤ": "o", "ه": "h", "ھ": "h", "ء": "ʼ",
    "ي": "y", "ی": "y", "ئ": "i", "ۀ": "e", "ۆ": "o", "ۇ": "u",
    "َ": "a", "ِ": "i", "ُ": "u", "ٔ": "", "ّ": "", "ْ": "",
}


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class HesudharResult:
    """Output of a heh-fix pass."""
    output: str
    replacements: int
    mode: HesudharMode


@dataclass
class WordReplacement:
    """One dictionary hit inside a text."""
    original: str
    replacement: str
    position: int

    def to_dict(self, original_key: str, replacement_key: str) -> dict:
        return {
            original_key: self.original,
            replacement_key: self.replacement,
            "position": self.position,
        }


@dataclass
class CorrectionResult:
    """Output of a dictionary correction pass."""
    original_text: str
    corrected_text: str
    corrections: list[WordReplacement] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.corrections:
            return f"Applied {len(self.corrections)} corrections"
        return "No corrections needed"


@dataclass
class RomanizeResult:
    """Output of romanization."""
    original_text: str
    romanized_text: str
    mode: HesudharMode
    hesudhar_replacements: int = 0
    dictionary_hits: list[WordReplacement] = field(default_factory=list)


# =============================================================================
# Normalization
# =============================================================================

def normalize(text: str) -> str:
    """NFC-normalize so composed/decomposed forms match dictionary keys."""
    return unicodedata.normalize("NFC", text)


def replace_punctuation(text: str) -> str:
    """Map Sindhi/typographic punctuation to ASCII equivalents."""
    return _PUNCTUATION_RE.sub(lambda m: PUNCTUATION_MAP[m.group(0)], text)


# =============================================================================
# Hesudhar
# =============================================================================

def smart_hesudhar(text: str) -> HesudharResult:
    """
    Replace ه with ھ only in the middle of a word.

    A heh counts as word-internal when both neighbours are Arabic-script
    characters; word-initial and word-final hehs are left alone.
    """
    chars = list(text)
    replacements = 0
    for i, char in enumerate(chars):
        if char != HEH:
            continue
        prev_char = chars[i - 1] if i > 0 else " "
        next_char = chars[i + 1] if i + 1 < len(chars) else " "
        if _ARABIC_LETTER_RE.match(prev_char) and _ARABIC_LETTER_RE.match(next_char):
            chars[i] = HEH_DOACHASHMEE
            replacements += 1
    return HesudharResult(output="".join(chars), replacements=replacements, mode="smart")


def global_hesudhar(text: str) -> HesudharResult:
    """Replace every ه with ھ."""
    return HesudharResult(
        output=text.replace(HEH, HEH_DOACHASHMEE),
        replacements=text.count(HEH),
        mode="global",
    )


def apply_hesudhar(text: str, mode: HesudharMode = "smart") -> HesudharResult:
    """Run the heh fix in the requested mode."""
    if mode == "global":
        return global_hesudhar(text)
    return smart_hesudhar(text)


# =============================================================================
# Dictionary Correction
# =============================================================================

def replace_words(
    text: str,
    dictionary: dict[str, str],
) -> tuple[str, list[WordReplacement]]:
    """
    Replace whole word tokens found in `dictionary`; punctuation is untouched.

    Dictionary keys must already be NFC-normalized (see `build_dictionary`).

    Returns:
        (new text, list of replacements with their word index)
    """
    hits: list[WordReplacement] = []
    position = 0

    def _swap(match: re.Match) -> str:
        nonlocal position
        token = match.group(0)
        replacement = dictionary.get(normalize(token))
        if replacement is not None:
            hits.append(WordReplacement(token, replacement, position))
        position += 1
        return replacement if replacement is not None else token

    return WORD_RE.sub(_swap, text), hits


def correct_text(text: str, dictionary: dict[str, str]) -> CorrectionResult:
    """Apply hesudhar dictionary corrections to a whole text."""
    normalized = normalize(text)
    corrected, hits = replace_words(normalized, dictionary)
    return CorrectionResult(original_text=text, corrected_text=corrected, corrections=hits)


# =============================================================================
# Romanizer
# =============================================================================

def transliterate_word(word: str, roman_words: dict[str, str] | None = None) -> tuple[str, bool]:
    """
    Romanize a single word.

    Returns:
        (roman form, True if it came from the dictionary)
    """
    if roman_words:
        found = roman_words.get(normalize(word))
        if found is not None:
            return found, True
    return "".join(CHAR_MAP.get(char, char) for char in word), False


def romanize(
    text: str,
    roman_words: dict[str, str] | None = None,
    mode: HesudharMode = "smart",
) -> RomanizeResult:
    """
    Full romanization: hesudhar, then per-token transliteration, then
    punctuation mapping.

    Example:
        romanize("سنڌ", {"سنڌ": "Sindh"}).romanized_text  # "Sindh"
    """
    fixed = apply_hesudhar(normalize(text), mode)
    hits: list[WordReplacement] = []
    parts: list[str] = []
    word_index = 0

    for token in _SPLIT_RE.split(fixed.output):
        if not token or _SEPARATOR_RE.match(token):
            parts.append(token)
            continue
        roman, from_dictionary = transliterate_word(token, roman_words)
        if from_dictionary:
            hits.append(WordReplacement(token, roman, word_index))
        parts.append(roman)
        word_index += 1

    return RomanizeResult(
        original_text=text,
        romanized_text=replace_punctuation("".join(parts)),
        mode=mode,
        hesudhar_replacements=fixed.replacements,
        dictionary_hits=hits,
    )


def to_slug(text: str) -> str:
    """
    Unicode-aware slug: keeps letters/marks/digits, spaces and dashes become
    single dashes, lowercased.
    """
    text = re.sub(r"\s+", " ", text.strip())
    text = "".join(
        char for char in text
        if char in " _-" or unicodedata.category(char)[0] in ("L", "M", "N")
    )
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-").lower()


def romanize_to_slug(text: str, roman_words: dict[str, str] | None = None) -> str:
    """Slug from the romanized first line of a (possibly multi-line) text."""
    if not text:
        return ""
    first_line = text.split("\n")[0]
    return to_slug(romanize(first_line, roman_words).romanized_text)


def contains_sindhi(text: str | None) -> bool:
    """True if any character falls in the Arabic block."""
    return bool(text) and _ARABIC_LETTER_RE.search(text) is not None


# =============================================================================
# Dictionary Files
# =============================================================================

def build_dictionary(rows: list[dict], key: str, value: str) -> dict[str, str]:
    """
    Build a lookup dict from table rows, skipping blank entries.

    Example:
        build_dictionary(rows, key="word", value="correct")
    """
    dictionary: dict[str, str] = {}
    for row in rows:
        source = (row.get(key) or "").strip()
        target = (row.get(value) or "").strip()
        if source and target:
            dictionary[normalize(source)] = target
    return dictionary


def format_dictionary_file(dictionary: dict[str, str], title: str, today: date | None = None) -> str:
    """Serialize a dictionary to the "word|replacement" export format."""
    today = today or date.today()
    lines = [
        f"# {title}",
        "# Format: word|replacement",
        "# This file is automatically updated when the database changes",
        f"# Last updated: {today.isoformat()}",
        "",
    ]
    lines.extend(f"{word}|{replacement}" for word, replacement in dictionary.items())
    return "\n".join(lines) + "\n"


def parse_dictionary_file(content: str) -> dict[str, str]:
    """Parse the export format; comments, blanks and malformed lines are skipped."""
    dictionary: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split("|")
        if len(parts) != 2:
            continue
        source, target = parts[0].strip(), parts[1].strip()
        if source and target:
            dictionary[normalize(source)] = target
    return dictionary

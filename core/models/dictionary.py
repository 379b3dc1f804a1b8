# =============================================================================
# core/models/dictionary.py - Text Tool Schemas
# =============================================================================
# Request models for the admin text tools:
# - TextToolRequest: run hesudhar or romanization on a text
# - CorrectRequest: apply hesudhar dictionary corrections
# - HesudharEntry / RomanWordEntry: dictionary rows (CRUD)
# - DictionaryKind: which dictionary a sync task exports
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TextOperation(str, Enum):
    """
    What POST /api/admin/romanizer does with the text.

    - hesudhar: only fix ه -> ھ
    - romanize: hesudhar, then transliterate to Latin script
    """
    HESUDHAR = "hesudhar"
    ROMANIZE = "romanize"


class HesudharModeName(str, Enum):
    """
    How aggressively ه is replaced.

    - smart: only in the middle of words
    - global: everywhere
    """
    SMART = "smart"
    GLOBAL = "global"


class DictionaryKind(str, Enum):
    """Dictionaries backed by a table and exportable to a file."""
    HESUDHAR = "hesudhar"
    ROMANIZER = "romanizer"


class TextToolRequest(BaseModel):
    """
    Input for the romanizer endpoint.

    operation and mode are validated by the service so that an unknown
    value is a 400 INVALID_PARAMETER, not a 422.

    Example:
        {"text": "سنڌ جو شاعر", "operation": "romanize", "mode": "smart"}
    """

    text: str | None = Field(default=None, description="Sindhi text to process")
    operation: str = Field(default=TextOperation.ROMANIZE.value)
    mode: str = Field(default=HesudharModeName.SMART.value)


class CorrectRequest(BaseModel):
    """Input for dictionary correction."""

    text: str | None = Field(default=None, description="Sindhi text to correct")


class HesudharEntry(BaseModel):
    """
    One hesudhar dictionary row: a misspelt word and its correct form.

    Example:
        {"word": "ڪهڙو", "correct": "ڪھڙو"}
    """

    model_config = ConfigDict(extra="ignore")

    word: str | None = None
    correct: str | None = None


class RomanWordEntry(BaseModel):
    """
    One romanizer dictionary row: a Sindhi word and its roman spelling.

    Example:
        {"word_sd": "سنڌ", "word_roman": "Sindh"}
    """

    model_config = ConfigDict(extra="ignore")

    word_sd: str | None = None
    word_roman: str | None = None


class SyncRequest(BaseModel):
    """Which dictionary file to regenerate."""

    kind: DictionaryKind = Field(default=DictionaryKind.HESUDHAR)

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence


@dataclass(frozen=True)
class ColumnMapping:
    """Source column name for each semantic field the importer understands."""

    word: Optional[str] = None
    definition: Optional[str] = None
    example: Optional[str] = None
    synonym: Optional[str] = None
    antonym: Optional[str] = None
    notes: Optional[str] = None

    @property
    def missing_required(self):
        return [name for name in ("word", "definition") if not getattr(self, name)]


class ColumnClassifier(Protocol):
    def classify(self, headers: Sequence[str], sample_rows: Sequence[dict]) -> ColumnMapping:
        ...


HEADER_ALIASES = {
    "word": {"word", "words", "term", "vocabulary", "vocab", "expression", "phrase"},
    "definition": {"definition", "definitions", "meaning", "meanings", "translation", "description"},
    "example": {"example", "examples", "sentence", "example sentence", "usage"},
    "synonym": {"synonym", "synonyms"},
    "antonym": {"antonym", "antonyms"},
    "notes": {"note", "notes", "comment", "comments", "remarks"},
}


def normalize_column_name(name) -> str:
    return " ".join(str(name).lower().replace("_", " ").split())


class HeaderNameClassifier:
    """Maps columns by their header names alone; sample rows are ignored."""

    def classify(self, headers, sample_rows=()):
        found = {}
        for header in headers:
            normalized = normalize_column_name(header)
            for field, aliases in HEADER_ALIASES.items():
                if field not in found and normalized in aliases:
                    found[field] = header
        return ColumnMapping(**found)


def clean_content(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def extract_row(row: dict, mapping: ColumnMapping):
    """Return (word, definition, word_details) for one tabular row."""

    def optional_list(column):
        value = clean_content(row.get(column)) if column else ""
        return [value] if value else []

    word = clean_content(row.get(mapping.word)) if mapping.word else ""
    definition = clean_content(row.get(mapping.definition)) if mapping.definition else ""
    notes = clean_content(row.get(mapping.notes)) if mapping.notes else ""
    details = {
        "examples": optional_list(mapping.example),
        "synonyms": optional_list(mapping.synonym),
        "antonyms": optional_list(mapping.antonym),
        "notes": notes or None,
    }
    return word, definition, details

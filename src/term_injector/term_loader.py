"""
Term list loading and parsing.

This module handles ingestion of term data from:
- CSV files
- Excel files (.xlsx, .xls)
- JSON files (a list of term records, or a term discovery payload)
- Term discovery payloads already decoded to a dict
"""

import json
import math
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from .models import DEFAULT_IMPORTANCE, Term, TermCategory


class TermLoadError(Exception):
    """Raised when term loading fails."""
    pass


# Common column name variations for term data
TERM_COLUMN_VARIANTS = ["term", "terms", "keyword", "keywords", "phrase", "text"]
CATEGORY_COLUMN_VARIANTS = ["category", "type", "term_type", "placement"]
IMPORTANCE_COLUMN_VARIANTS = ["importance", "weight", "score", "priority"]

CATEGORY_ALIASES = {
    "title": TermCategory.TITLE,
    "header": TermCategory.HEADER,
    "heading": TermCategory.HEADER,
    "h1": TermCategory.HEADER,
    "h2": TermCategory.HEADER,
    "h3": TermCategory.HEADER,
    "basic": TermCategory.BASIC,
    "content_basic": TermCategory.BASIC,
    "body": TermCategory.BASIC,
    "extended": TermCategory.EXTENDED,
    "content_extended": TermCategory.EXTENDED,
}

# Payload list name -> (category, list position offset)
PAYLOAD_SECTIONS = [
    ("title", TermCategory.TITLE, 0),
    ("h1", TermCategory.HEADER, 0),
    ("h2", TermCategory.HEADER, 10),
    ("h3", TermCategory.HEADER, 20),
    ("content_basic", TermCategory.BASIC, 0),
    ("content_extended", TermCategory.EXTENDED, 0),
]

MIN_TERM_LENGTH = 2
MIN_PAYLOAD_IMPORTANCE = 10


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def normalize_category(value: Any) -> TermCategory:
    """Map a loose category label to a TermCategory (basic when unknown)."""
    if isinstance(value, TermCategory):
        return value
    if value is None:
        return TermCategory.BASIC
    return CATEGORY_ALIASES.get(str(value).strip().lower(), TermCategory.BASIC)


def normalize_importance(value: Any) -> int:
    """Parse an importance value, clamped to [0, 100]; 50 when missing or invalid."""
    if value is None:
        return DEFAULT_IMPORTANCE
    try:
        importance = float(value)
    except (ValueError, TypeError):
        return DEFAULT_IMPORTANCE
    if math.isnan(importance):
        return DEFAULT_IMPORTANCE
    # 0-1 weights are scaled up
    if 0 < importance < 1:
        importance *= 100
    return int(max(0, min(100, math.floor(importance + 0.5))))


def load_terms_from_csv(file_path: Union[str, Path]) -> list[Term]:
    """
    Load terms from a CSV file.

    Args:
        file_path: Path to the CSV file.

    Returns:
        List of Term objects.

    Raises:
        TermLoadError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise TermLoadError(f"File not found: {file_path}")

    try:
        df = pd.read_csv(path, encoding="utf-8")
    except UnicodeDecodeError:
        try:
            df = pd.read_csv(path, encoding="latin-1")
        except Exception as e:
            raise TermLoadError(f"Failed to read CSV file: {e}")
    except Exception as e:
        raise TermLoadError(f"Failed to read CSV file: {e}")

    return _parse_term_dataframe(df)


def load_terms_from_excel(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[Term]:
    """
    Load terms from an Excel file.

    Args:
        file_path: Path to the Excel file (.xlsx or .xls).
        sheet_name: Optional sheet name to read from. Defaults to first sheet.

    Returns:
        List of Term objects.

    Raises:
        TermLoadError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise TermLoadError(f"File not found: {file_path}")

    try:
        if sheet_name:
            df = pd.read_excel(path, sheet_name=sheet_name)
        else:
            df = pd.read_excel(path)
    except Exception as e:
        raise TermLoadError(f"Failed to read Excel file: {e}")

    return _parse_term_dataframe(df)


def load_terms_from_json(file_path: Union[str, Path]) -> list[Term]:
    """
    Load terms from a JSON file.

    The file may hold a list of term records or a discovery payload with a
    ``terms_txt`` object.

    Raises:
        TermLoadError: If the file cannot be read or has an unknown shape.
    """
    path = Path(file_path)

    if not path.exists():
        raise TermLoadError(f"File not found: {file_path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise TermLoadError(f"Failed to read JSON file: {e}")

    if isinstance(data, dict) and "terms_txt" in data:
        terms = parse_terms_payload(data)
    elif isinstance(data, list):
        terms = parse_term_records(data)
    else:
        raise TermLoadError("JSON must be a list of term records or an object with 'terms_txt'")

    if not terms:
        raise TermLoadError("No valid terms found in file")
    return terms


def _parse_term_dataframe(df: pd.DataFrame) -> list[Term]:
    """
    Parse a DataFrame into a list of Term objects.

    Raises:
        TermLoadError: If required columns are missing.
    """
    if df.empty:
        raise TermLoadError("Term file is empty")

    term_col = _find_column(df, TERM_COLUMN_VARIANTS)
    if term_col is None:
        raise TermLoadError(
            f"No term column found. Expected one of: {', '.join(TERM_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    category_col = _find_column(df, CATEGORY_COLUMN_VARIANTS)
    importance_col = _find_column(df, IMPORTANCE_COLUMN_VARIANTS)

    records: list[dict[str, Any]] = []
    for _, row in df.iterrows():
        text = row[term_col]
        if pd.isna(text):
            continue
        records.append({
            "text": text,
            "category": row[category_col] if category_col and not pd.isna(row[category_col]) else None,
            "importance": row[importance_col] if importance_col and not pd.isna(row[importance_col]) else None,
        })

    terms = parse_term_records(records)
    if not terms:
        raise TermLoadError("No valid terms found in file")
    return terms


def parse_term_records(records: list[Any]) -> list[Term]:
    """
    Build terms from loose records.

    Records may be plain strings or mappings with ``text``/``term``,
    ``category``/``type`` and ``importance``. Blank entries are skipped.
    """
    terms: list[Term] = []
    for record in records:
        if isinstance(record, str):
            record = {"text": record}
        if not isinstance(record, dict):
            continue
        text = str(record.get("text") or record.get("term") or "").strip()
        if not text:
            continue
        terms.append(Term(
            text=text,
            category=normalize_category(record.get("category") or record.get("type")),
            importance=normalize_importance(record.get("importance")),
        ))
    return terms


def _payload_importance(category: TermCategory, index: int) -> int:
    """Importance of the term at list position ``index`` of a payload section."""
    if category == TermCategory.TITLE:
        importance = 100 - index * 2
    elif category == TermCategory.HEADER:
        importance = 90 - index * 1.5
    elif category == TermCategory.EXTENDED:
        importance = 60 - index
    else:
        importance = 80 - index * 1.5
    return max(MIN_PAYLOAD_IMPORTANCE, math.floor(importance + 0.5))


def parse_terms_payload(data: dict[str, Any]) -> list[Term]:
    """
    Parse the term lists of a term discovery payload.

    The payload's ``terms_txt`` object holds comma-separated lists named
    title, h1, h2, h3, content_basic and content_extended. Importance
    decreases with list position; h2 and h3 terms are ranked behind h1.

    Args:
        data: Decoded payload.

    Returns:
        Unique terms (case-insensitive, first occurrence wins) sorted by
        descending importance.
    """
    terms_txt = data.get("terms_txt") or {}
    terms: list[Term] = []
    seen: set[str] = set()

    for section, category, offset in PAYLOAD_SECTIONS:
        raw = terms_txt.get(section)
        if not raw:
            continue
        entries = [entry.strip() for entry in str(raw).split(",") if entry.strip()]
        for index, entry in enumerate(entries):
            key = entry.lower()
            if len(entry) < MIN_TERM_LENGTH or key in seen:
                continue
            seen.add(key)
            terms.append(Term(
                text=entry,
                category=category,
                importance=_payload_importance(category, index + offset),
            ))

    return sort_terms_by_importance(terms)


def load_terms(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[Term]:
    """
    Load terms from a CSV, Excel or JSON file.

    Automatically detects file type based on extension.

    Raises:
        TermLoadError: If the file cannot be read or is invalid.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        return load_terms_from_csv(path)
    elif suffix in (".xlsx", ".xls"):
        return load_terms_from_excel(path, sheet_name)
    elif suffix == ".json":
        return load_terms_from_json(path)
    else:
        raise TermLoadError(
            f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls, .json"
        )


def deduplicate_terms(terms: list[Term]) -> list[Term]:
    """
    Remove duplicate terms based on text (case-insensitive).

    Keeps the first occurrence of each term.
    """
    seen: set[str] = set()
    unique: list[Term] = []

    for term in terms:
        if term.key not in seen:
            seen.add(term.key)
            unique.append(term)

    return unique


def sort_terms_by_importance(terms: list[Term]) -> list[Term]:
    """Sort terms by descending importance, keeping input order for ties."""
    return sorted(terms, key=lambda t: t.importance, reverse=True)

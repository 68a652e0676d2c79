"""CSV reader for entry lists with encoding detection and field validation."""

import csv
import io
import logging
import re
from collections import Counter
from pathlib import Path

from rapidfuzz.distance import JaroWinkler

from weighmatch import Competitor

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

TEAM_COLORS = (
    'red', 'blue', 'green', 'yellow', 'purple', 'orange', 'pink', 'cyan',
    'lime', 'indigo', 'teal', 'emerald', 'rose', 'amber', 'violet', 'sky',
    'slate', 'zinc', 'stone', 'neutral', 'fuchsia', 'crimson', 'maroon',
    'navy', 'gold',
)

DEFAULT_TEAM_THRESHOLD = 0.85

MAX_NAME_LENGTH = 20
MIN_WEIGHT = 100
MAX_WEIGHT = 999

_PRIORITY_VALUES = {
    '': False, '0': False, 'no': False, 'false': False,
    '1': True, 'yes': True, 'true': True,
}


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the CSV file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def detect_delimiter(header_line: str) -> str:
    """Pick the column delimiter from the header line (tab, semicolon or comma)."""
    if '\t' in header_line:
        return '\t'
    if ';' in header_line:
        return ';'
    return ','


def normalize_whitespace(value: str) -> str:
    """Collapse any whitespace run into a single space and strip."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def _team_key(label: str) -> str:
    """Lowercase a team label and drop a trailing "team"."""
    key = normalize_whitespace(label).lower()
    if key.endswith(' team'):
        key = key[:-len(' team')].rstrip()
    return key


def _closest_color(key: str, threshold: float) -> str | None:
    """Return the palette colour a label is a likely misspelling of.

    Only single-word labels within one character of a colour's length
    are considered, so team names like "Golden Eagles" are left alone.
    """
    if ' ' in key:
        return None

    best_color = None
    best_sim = -1.0
    for color in TEAM_COLORS:
        if abs(len(key) - len(color)) > 1:
            continue
        sim = JaroWinkler.similarity(key, color)
        if sim > best_sim:
            best_sim = sim
            best_color = color

    if best_sim >= threshold:
        return best_color
    return None


def resolve_team(
    label: str,
    threshold: float = DEFAULT_TEAM_THRESHOLD,
    taken: frozenset[str] = frozenset(),
) -> str:
    """Map a free-text team label onto a team colour.

    Labels are lowercased and a trailing "team" is dropped ("Red Team" ->
    "red"). Misspelled colours ("bleu") are resolved to the closest colour
    by Jaro-Winkler similarity, unless that colour is in ``taken``. Any
    other label is kept, since any label may name a team.

    Args:
        label: Raw team label from the entry list.
        threshold: Minimum similarity (0–1) for a fuzzy colour hit.
        taken: Colours that must not absorb other labels.

    Returns:
        Normalized team label.
    """
    return _resolve_key(_team_key(label), threshold, taken)


def _resolve_key(key: str, threshold: float, taken: frozenset[str]) -> str:
    if key in TEAM_COLORS:
        return key

    color = _closest_color(key, threshold)
    if color is None or color in taken:
        return key
    log.debug("Team '%s' als '%s' erkannt", key, color)
    return color


def build_team_map(
    labels: list[str],
    threshold: float = DEFAULT_TEAM_THRESHOLD,
) -> dict[str, str]:
    """Resolve all team labels of one entry list together.

    A label is only folded into a colour if no other label of the list
    already names that colour or would be folded into it too, so two
    different teams ("Red" and "Reds") are never merged.

    Args:
        labels: Raw team labels, one per row.
        threshold: Minimum similarity (0–1) for a fuzzy colour hit.

    Returns:
        Mapping from normalized label to resolved team.
    """
    keys = {_team_key(label) for label in labels if label}
    guesses = Counter(
        _closest_color(key, threshold) for key in keys if key not in TEAM_COLORS
    )
    taken = frozenset(
        {key for key in keys if key in TEAM_COLORS}
        | {color for color, n in guesses.items() if color is not None and n > 1}
    )
    return {key: _resolve_key(key, threshold, taken) for key in keys}


def parse_priority(value: str) -> bool:
    """Parse the priority column (0/1, yes/no, true/false, empty = 0).

    Raises:
        ValueError: If the value is not a recognized flag.
    """
    key = value.strip().lower()
    if key not in _PRIORITY_VALUES:
        raise ValueError(f"Ungueltige Prioritaet: {value!r}")
    return _PRIORITY_VALUES[key]


def validate_entry(name: str, weight: int) -> None:
    """Check the field rules of an entry.

    Args:
        name: Competitor name.
        weight: Competitor weight.

    Raises:
        ValueError: If the name is empty or longer than MAX_NAME_LENGTH,
            or the weight is not a three-digit number.
    """
    if not name:
        raise ValueError("Name fehlt")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"Name laenger als {MAX_NAME_LENGTH} Zeichen: {name!r}")
    if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
        raise ValueError(
            f"Gewicht muss dreistellig sein ({MIN_WEIGHT}-{MAX_WEIGHT}): {weight}"
        )


def read_competitors(
    path: str | Path,
    team_threshold: float = DEFAULT_TEAM_THRESHOLD,
) -> list[Competitor]:
    """Read competitor entries from a CSV file.

    Handles UTF-16LE (with BOM) and UTF-8 encoded files and tab, semicolon
    or comma delimiters. Team labels are resolved across the whole
    file (see build_team_map). Rows failing validation are skipped with a
    warning. Competitor ids are assigned 1..n in file order.

    Args:
        path: Path to the CSV file.
        team_threshold: Similarity threshold for team colour resolution.

    Returns:
        List of Competitor objects.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the header is missing or required columns are missing.
    """
    path = Path(path)
    encoding = detect_encoding(path)

    with open(path, 'r', encoding=encoding) as f:
        content = f.read()

    content = content.lstrip('\ufeff')
    header_line = content.split('\n', 1)[0]

    reader = csv.DictReader(
        io.StringIO(content), delimiter=detect_delimiter(header_line),
    )

    required_cols = {'Name', 'Team', 'Weight'}
    if reader.fieldnames is None:
        raise ValueError(f"Datei {path} ist leer oder hat keine Header-Zeile.")
    actual_cols = {normalize_whitespace(c) for c in reader.fieldnames}
    missing = required_cols - actual_cols
    if missing:
        raise ValueError(
            f"Fehlende Spalten in {path}: {', '.join(sorted(missing))}"
        )

    rows = [
        {normalize_whitespace(k): normalize_whitespace(v or '')
         for k, v in row.items() if k is not None}
        for row in reader
    ]
    team_map = build_team_map([row.get('Team', '') for row in rows], team_threshold)

    competitors: list[Competitor] = []
    for row_num, cleaned in enumerate(rows, start=2):
        try:
            name = cleaned['Name']
            weight = int(cleaned['Weight'])
            priority = parse_priority(cleaned.get('Priority', ''))
            validate_entry(name, weight)
            if not cleaned['Team']:
                raise ValueError("Team fehlt")
            competitors.append(Competitor(
                competitor_id=len(competitors) + 1,
                name=name,
                team=team_map[_team_key(cleaned['Team'])],
                weight=weight,
                priority=priority,
            ))
        except (ValueError, KeyError) as exc:
            log.warning("Zeile %d in %s uebersprungen: %s", row_num, path, exc)

    log.info("%d Teilnehmer gelesen aus %s", len(competitors), path)
    return competitors

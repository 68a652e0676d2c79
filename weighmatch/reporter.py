"""Report generation for fight lists (CSV, HTML, summary)."""

import csv
import logging
from collections import Counter
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from weighmatch import Bout, Competitor

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

CSV_COLUMNS = [
    'Fight',
    'Weight_Class',
    'Match_Type',
    'A_Name',
    'A_Team',
    'A_Weight',
    'A_Priority',
    'B_Name',
    'B_Team',
    'B_Weight',
    'B_Priority',
]

MATCH_TYPE_LABELS = {
    'exact': 'Perfect Match',
    'tolerance': 'Tolerance (±3)',
}


def _bout_to_row(bout: Bout) -> dict:
    """Convert a Bout to a flat dict for CSV/HTML output."""
    a = bout.competitor_a
    b = bout.competitor_b
    return {
        'Fight': str(bout.record.fight_number),
        'Weight_Class': str(bout.record.weight_class),
        'Match_Type': bout.record.match_type,
        'A_Name': a.name,
        'A_Team': a.team,
        'A_Weight': str(a.weight),
        'A_Priority': '1' if a.priority else '0',
        'B_Name': b.name,
        'B_Team': b.team,
        'B_Weight': str(b.weight),
        'B_Priority': '1' if b.priority else '0',
        # Badge text for the HTML fight card
        '_label': MATCH_TYPE_LABELS.get(bout.record.match_type, bout.record.match_type),
    }


def write_csv_report(bouts: list[Bout], output_path: Path) -> None:
    """Write the fight list as a CSV report.

    Uses UTF-8 with BOM (utf-8-sig) and semicolon delimiter for
    compatibility with German Excel.

    Args:
        bouts: Fights joined with their competitors.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(
            f, fieldnames=CSV_COLUMNS, delimiter=';', extrasaction='ignore',
        )
        writer.writeheader()
        for bout in bouts:
            writer.writerow(_bout_to_row(bout))

    log.info("CSV-Report geschrieben: %s (%d Kaempfe)", output_path, len(bouts))


def write_html_report(
    bouts: list[Bout],
    competitors: list[Competitor],
    output_path: Path,
    title: str = '',
) -> None:
    """Write the fight card as an HTML report using Jinja2.

    Args:
        bouts: Fights joined with their competitors.
        competitors: All competitors of the run (for unmatched entries).
        output_path: Path for the output HTML file.
        title: Name of the entry list (for the report title).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('fightcard.html')

    html = template.render(
        title=title,
        rows=[_bout_to_row(b) for b in bouts],
        stats=compute_stats(bouts, competitors),
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML-Report geschrieben: %s", output_path)


def compute_stats(bouts: list[Bout], competitors: list[Competitor]) -> dict:
    """Compute summary statistics for a fight list.

    Args:
        bouts: Fights joined with their competitors.
        competitors: All competitors of the run.

    Returns:
        Dict with fight totals, per-competitor fight distribution,
        unmatched competitors and the number of repeated pairings.
    """
    fights_per_competitor: Counter = Counter()
    pairings: Counter = Counter()
    for bout in bouts:
        a_id = bout.record.competitor_a
        b_id = bout.record.competitor_b
        fights_per_competitor[a_id] += 1
        fights_per_competitor[b_id] += 1
        pairings[frozenset((a_id, b_id))] += 1

    unmatched = [c for c in competitors if fights_per_competitor[c.competitor_id] == 0]

    return {
        'fights': len(bouts),
        'exact': sum(1 for b in bouts if b.record.match_type == 'exact'),
        'tolerance': sum(1 for b in bouts if b.record.match_type == 'tolerance'),
        'competitors': len(competitors),
        'zero_fights': len(unmatched),
        'one_fight': sum(
            1 for c in competitors if fights_per_competitor[c.competitor_id] == 1
        ),
        'two_fights': sum(
            1 for c in competitors if fights_per_competitor[c.competitor_id] >= 2
        ),
        'unmatched': [c.name for c in unmatched],
        'unmatched_priority': [c.name for c in unmatched if c.priority],
        'rematches': sum(n - 1 for n in pairings.values() if n > 1),
    }


def print_summary(
    bouts: list[Bout],
    competitors: list[Competitor],
    title: str = '',
) -> None:
    """Print a summary of the fight list to stdout."""
    stats = compute_stats(bouts, competitors)

    print(f"\n=== Kampfliste: {title} ===")
    print(f"Teilnehmer:                {stats['competitors']:>5}")
    print(f"Kaempfe gesamt:            {stats['fights']:>5}")
    print(f"  - Exaktes Gewicht:       {stats['exact']:>5}")
    print(f"  - Toleranz (+-3):        {stats['tolerance']:>5}")
    print(f"Wiederholte Paarungen:     {stats['rematches']:>5}")
    print("---")
    print(f"Teilnehmer mit 2 Kaempfen: {stats['two_fights']:>5}")
    print(f"Teilnehmer mit 1 Kampf:    {stats['one_fight']:>5}")
    print(f"Ohne Kampf:                {stats['zero_fights']:>5}")
    if stats['unmatched']:
        print(f"  - {', '.join(stats['unmatched'])}")
    if stats['unmatched_priority']:
        print(f"Prioritaet ohne Kampf:     {', '.join(stats['unmatched_priority'])}")
    print()

"""weight-matcher – CLI-Tool zur Erstellung von Kampflisten nach Gewicht."""

import argparse
import logging
from pathlib import Path

from weighmatch.reader import DEFAULT_TEAM_THRESHOLD, read_competitors
from weighmatch.reporter import print_summary, write_csv_report, write_html_report
from weighmatch.roster import Roster, process_matches


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Paarungen nach Gewicht, Team und Prioritaet aus einer Teilnehmerliste erzeugen.',
        prog='matcher.py',
    )
    parser.add_argument(
        '--entries', type=Path,
        help='Pfad zur Teilnehmer-CSV-Datei',
    )
    parser.add_argument(
        '--entries-dir', type=Path,
        help='Verzeichnis mit Teilnehmer-CSV-Dateien (Batch-Modus)',
    )
    parser.add_argument(
        '--output', type=Path,
        help='Pfad fuer die Kampfliste (CSV)',
    )
    parser.add_argument(
        '--output-dir', type=Path,
        help='Verzeichnis fuer Kampflisten (Batch-Modus)',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Zusaetzlich eine HTML-Kampfliste erzeugen',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Zusammenfassung auf stdout ausgeben',
    )
    parser.add_argument(
        '--team-threshold', type=float, default=DEFAULT_TEAM_THRESHOLD,
        help=f'Schwellenwert fuer die Erkennung von Teamfarben (Standard: {DEFAULT_TEAM_THRESHOLD})',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Jeden erzeugten Kampf protokollieren',
    )
    return parser


def load_roster(entries_path: Path, team_threshold: float) -> Roster:
    """Register all competitors of an entry list in a fresh roster."""
    roster = Roster()
    for c in read_competitors(entries_path, team_threshold):
        roster.add_competitor(c.name, c.team, c.weight, c.priority)
    return roster


def process_single_list(
    entries_path: Path,
    output_path: Path,
    html: bool,
    summary: bool,
    team_threshold: float,
) -> None:
    """Create the fight list for a single entry file."""
    roster = load_roster(entries_path, team_threshold)
    bouts = process_matches(roster)
    competitors = roster.list_competitors()

    write_csv_report(bouts, output_path)

    if html:
        html_path = output_path.with_suffix('.html')
        write_html_report(bouts, competitors, html_path, entries_path.stem)

    if summary:
        print_summary(bouts, competitors, entries_path.name)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if not args.entries and not args.entries_dir:
        parser.error('Entweder --entries oder --entries-dir muss angegeben werden.')

    if args.entries and not args.output:
        parser.error('--output ist erforderlich bei Verwendung von --entries.')

    if args.entries_dir and not args.output_dir:
        parser.error('--output-dir ist erforderlich bei Verwendung von --entries-dir.')

    if args.entries:
        process_single_list(
            args.entries, args.output,
            args.html, args.summary, args.team_threshold,
        )
    elif args.entries_dir:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        csv_files = sorted(args.entries_dir.glob('*.csv'))

        if not csv_files:
            logging.warning("Keine CSV-Dateien in %s gefunden.", args.entries_dir)
            return

        for entries_path in csv_files:
            output_path = args.output_dir / f"kampfliste_{entries_path.stem}.csv"
            logging.info("Verarbeite %s ...", entries_path.name)
            process_single_list(
                entries_path, output_path,
                args.html, args.summary, args.team_threshold,
            )


if __name__ == '__main__':
    main()

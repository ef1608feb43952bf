#!/usr/bin/env python3
"""Print the career statistics table and leaderboards"""

import sys
import os
import argparse
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tabulate import tabulate
from app import create_app, get_services

BOARD_TITLES = {
    'runs': 'Most Runs',
    'wickets': 'Most Wickets',
    'man_of_the_match': 'Man of the Match Awards',
}


def render(stats_service, output_format='txt', limit=5):
    careers = stats_service.get_career_stats()
    if output_format == 'csv':
        return stats_service.export_to_csv(careers)

    sections = [
        "=" * 80,
        "PLAYER CAREER STATISTICS",
        "=" * 80,
        stats_service.export_to_txt(careers),
    ]
    for category, entries in stats_service.get_leaderboards(limit=limit).items():
        sections.append(f"\n{BOARD_TITLES[category].upper()}")
        sections.append("-" * 40)
        if entries:
            rows = [[i, e['player'], e['value']] for i, e in enumerate(entries, 1)]
            sections.append(tabulate(rows, headers=['#', 'Player', 'Total'], tablefmt='grid'))
        else:
            sections.append("No data available")
    return "\n".join(sections)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Print player career statistics')
    parser.add_argument('--format', '-f', choices=['txt', 'csv'], default='txt',
                        help='Output format (default: txt)')
    parser.add_argument('--limit', '-n', type=int, default=5,
                        help='Entries per leaderboard (default: 5)')
    parser.add_argument('--config', help='Path to config.yaml')
    args = parser.parse_args(argv)

    app = create_app(args.config)
    with app.app_context():
        print(render(get_services(app)["stats_service"], args.format, args.limit))
    return 0


if __name__ == "__main__":
    sys.exit(main())

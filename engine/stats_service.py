# -*- coding: utf-8 -*-
"""
Statistics Service Module
Career summaries, leaderboards and exports for recorded players.
"""

import csv
import io
from tabulate import tabulate


CAREER_FIELDS = [
    'player', 'matches', 'runs', 'balls', 'fours', 'sixes', 'ducks',
    'strike_rate', 'runs_per_match', 'overs', 'wickets', 'runs_conceded',
    'economy', 'bowling_average', 'bowling_strike_rate', 'motm',
]

CAREER_HEADERS = [
    'Player', 'Mat', 'Runs', 'Balls', '4s', '6s', '0s', 'SR', 'R/M',
    'Overs', 'Wkts', 'Conc', 'Econ', 'Avg', 'B/W', 'MoM',
]

LEADERBOARD_CATEGORIES = {
    'runs': 'total_runs',
    'wickets': 'total_wickets',
    'man_of_the_match': 'man_of_the_match_awards',
}


class StatsService:
    """Service class for reading and exporting career statistics"""

    def __init__(self, store, logger=None):
        self.store = store
        self.logger = logger

    def _log(self, message, level='info'):
        """Safely log messages if logger is available"""
        if self.logger:
            if level == 'error':
                self.logger.error(message)
            elif level == 'warning':
                self.logger.warning(message)
            else:
                self.logger.info(message)

    @staticmethod
    def career_summary(player):
        """Flatten a Player row into an export-ready dictionary."""
        return {
            'player': player.name,
            'matches': player.matches_played or 0,
            'runs': player.total_runs or 0,
            'balls': player.total_balls_faced or 0,
            'fours': player.total_fours or 0,
            'sixes': player.total_sixes or 0,
            'ducks': player.ducks or 0,
            'strike_rate': player.batting_strike_rate,
            'runs_per_match': player.runs_per_match,
            'overs': player.overs_bowled,
            'wickets': player.total_wickets or 0,
            'runs_conceded': player.total_runs_conceded or 0,
            'economy': player.bowling_economy,
            'bowling_average': player.bowling_average,
            'bowling_strike_rate': player.bowling_strike_rate,
            'motm': player.man_of_the_match_awards or 0,
        }

    def get_career_stats(self):
        """
        Career summaries for every recorded player.

        Returns:
            list: summary dictionaries sorted by player name
        """
        players = self.store.list_players()
        self._log(f"Building career stats for {len(players)} players")
        return [self.career_summary(p) for p in players]

    def get_player_stats(self, name):
        player = self.store.get_player(name)
        if player is None:
            self._log(f"No stats recorded for player {name!r}", level='warning')
            return None
        return self.career_summary(player)

    def get_leaderboards(self, limit=5):
        """
        Top players per category.

        Players with nothing in a category are left out of it; ties are broken
        alphabetically.

        Returns:
            dict: {'runs': [...], 'wickets': [...], 'man_of_the_match': [...]}
                  each entry is {'player': name, 'value': count}
        """
        players = self.store.list_players()
        boards = {}
        for category, column in LEADERBOARD_CATEGORIES.items():
            ranked = [p for p in players if (getattr(p, column) or 0) > 0]
            ranked.sort(key=lambda p: (-getattr(p, column), p.name))
            boards[category] = [
                {'player': p.name, 'value': getattr(p, column)}
                for p in ranked[:limit]
            ]
        return boards

    def export_to_csv(self, data):
        """
        Export career summaries to CSV format.

        Args:
            data (list): career summary dictionaries

        Returns:
            str: CSV content as string
        """
        if not data:
            return ""

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CAREER_FIELDS)
        writer.writeheader()
        writer.writerows(data)
        return output.getvalue()

    def export_to_txt(self, data):
        """Export career summaries to a formatted text table."""
        if not data:
            return "No data available"

        rows = [[d[field] for field in CAREER_FIELDS] for d in data]
        return tabulate(rows, headers=CAREER_HEADERS, tablefmt='grid')

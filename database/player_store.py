"""
Player statistics persistence.

Career counters are only ever changed with SQL-side increments
(``col = col + n``), never read-modify-write, so matches recorded
concurrently for the same player cannot lose updates.  The store never
commits; the caller owns the transaction.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from database import db
from database.models import Match, Player
from engine.match_stats import to_number

logger = logging.getLogger(__name__)

# PlayerStatsDelta field -> Player column
DELTA_COLUMNS = {
    "matches_played": "matches_played",
    "total_runs": "total_runs",
    "balls_faced": "total_balls_faced",
    "fours": "total_fours",
    "sixes": "total_sixes",
    "ducks": "ducks",
    "total_wickets": "total_wickets",
    "runs_conceded": "total_runs_conceded",
    "balls_bowled": "total_balls_bowled",
    "man_of_the_match_awards": "man_of_the_match_awards",
}


class PlayerStatsStore:
    """Upsert-with-increment access to the players table plus match records."""

    def _increment(self, delta):
        values = {
            DELTA_COLUMNS[field]: getattr(Player, DELTA_COLUMNS[field]) + amount
            for field, amount in delta.increments().items()
        }
        stmt = (
            update(Player)
            .where(Player.name == delta.player_name)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return db.session.execute(stmt).rowcount

    def _insert(self, delta):
        seed = {DELTA_COLUMNS[field]: amount for field, amount in delta.increments().items()}
        with db.session.begin_nested():
            db.session.add(Player(name=delta.player_name, **seed))

    def apply_delta(self, delta):
        """
        Add a delta to the player's record, creating the record if absent.

        Args:
            delta (PlayerStatsDelta): increments for one player

        Returns:
            Player: the refreshed player row
        """
        if not self._increment(delta):
            try:
                self._insert(delta)
                logger.debug(f"Created player record for {delta.player_name!r}")
            except IntegrityError:
                # Another writer created the row between our UPDATE and INSERT
                logger.info(f"Player {delta.player_name!r} created concurrently; re-applying increment")
                self._increment(delta)

        stmt = (
            select(Player)
            .where(Player.name == delta.player_name)
            .execution_options(populate_existing=True)
        )
        return db.session.execute(stmt).scalar_one()

    def create_match(self, payload, players):
        """Persist the match record referencing the resolved players."""
        team_a = payload["teamA"]
        team_b = payload["teamB"]
        match = Match(
            team_a_name=team_a["name"],
            team_b_name=team_b["name"],
            team_a_xi=list(team_a.get("xi") or []),
            team_b_xi=list(team_b.get("xi") or []),
            overs=to_number(payload.get("overs")),
            ball_type=payload.get("ballType"),
            result=payload.get("result"),
            winner=payload.get("winner"),
            man_of_the_match=payload.get("manOfTheMatch"),
            innings=payload["innings"],
        )
        match.players = list(players)
        db.session.add(match)
        db.session.flush()
        return match

    def get_player(self, name):
        return Player.query.filter_by(name=name).first()

    def list_players(self):
        return Player.query.order_by(Player.name.asc()).all()

    def get_match(self, match_id):
        return db.session.get(Match, match_id)

    def list_matches(self):
        return Match.query.order_by(Match.date.desc()).all()

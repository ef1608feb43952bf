from datetime import datetime, timezone
from sqlalchemy.orm import relationship
from database import db
import uuid


def _utcnow():
    return datetime.now(timezone.utc)


# Players taking part in a match
match_players = db.Table(
    'match_players',
    db.Column('match_id', db.String(36), db.ForeignKey('matches.id', ondelete='CASCADE'), primary_key=True),
    db.Column('player_id', db.Integer, db.ForeignKey('players.id', ondelete='CASCADE'), primary_key=True),
)


class Player(db.Model):
    """Player Identity & Career Stats

    NOTE: players are keyed by their exact (case-sensitive) name. Two people
    sharing a name share one record.
    """
    __tablename__ = 'players'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True, index=True)

    # Aggregate Career Stats (incremented after every recorded match)
    matches_played = db.Column(db.Integer, default=0, nullable=False)
    man_of_the_match_awards = db.Column(db.Integer, default=0, nullable=False)

    # Batting
    total_runs = db.Column(db.Integer, default=0, nullable=False)
    total_balls_faced = db.Column(db.Integer, default=0, nullable=False)
    total_fours = db.Column(db.Integer, default=0, nullable=False)
    total_sixes = db.Column(db.Integer, default=0, nullable=False)
    ducks = db.Column(db.Integer, default=0, nullable=False)

    # Bowling
    total_wickets = db.Column(db.Integer, default=0, nullable=False)
    total_runs_conceded = db.Column(db.Integer, default=0, nullable=False)
    total_balls_bowled = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    matches = relationship('Match', secondary=match_players, back_populates='players')

    @property
    def batting_strike_rate(self):
        if not self.total_balls_faced:
            return 0.0
        return round(self.total_runs / self.total_balls_faced * 100, 2)

    @property
    def runs_per_match(self):
        if not self.matches_played:
            return 0.0
        return round(self.total_runs / self.matches_played, 2)

    @property
    def overs_bowled(self):
        """Balls bowled in "O.B" notation, e.g. 27 balls -> "4.3"."""
        balls = self.total_balls_bowled or 0
        return f"{balls // 6}.{balls % 6}"

    @property
    def bowling_economy(self):
        if not self.total_balls_bowled:
            return 0.0
        return round(self.total_runs_conceded / (self.total_balls_bowled / 6), 2)

    @property
    def bowling_average(self):
        if not self.total_wickets:
            return 0.0
        return round(self.total_runs_conceded / self.total_wickets, 2)

    @property
    def bowling_strike_rate(self):
        if not self.total_wickets:
            return 0.0
        return round(self.total_balls_bowled / self.total_wickets, 2)

    def __repr__(self):
        return f"<Player {self.name!r}>"


class Match(db.Model):
    """Completed Match Record"""
    __tablename__ = 'matches'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    team_a_name = db.Column(db.String(100), nullable=False)
    team_b_name = db.Column(db.String(100), nullable=False)
    team_a_xi = db.Column(db.JSON, nullable=False, default=list)
    team_b_xi = db.Column(db.JSON, nullable=False, default=list)

    # Match Details
    overs = db.Column(db.Float, nullable=False)
    ball_type = db.Column(db.String(50))
    result = db.Column(db.String(200))  # e.g., "Strikers won by 4 wickets"
    winner = db.Column(db.String(100))
    man_of_the_match = db.Column(db.JSON, nullable=True)  # {"name": ...}
    date = db.Column(db.DateTime, default=_utcnow, index=True)

    # Full scorecard as submitted
    innings = db.Column(db.JSON, nullable=False, default=list)

    players = relationship('Player', secondary=match_players, back_populates='matches')

    def to_dict(self):
        return {
            "id": self.id,
            "teamA": {"name": self.team_a_name, "xi": list(self.team_a_xi or [])},
            "teamB": {"name": self.team_b_name, "xi": list(self.team_b_xi or [])},
            "overs": self.overs,
            "ballType": self.ball_type,
            "result": self.result,
            "winner": self.winner,
            "manOfTheMatch": self.man_of_the_match,
            "innings": self.innings,
            "date": self.date.isoformat() if self.date else None,
            "players": [p.id for p in self.players],
        }

    def __repr__(self):
        return f"<Match {self.team_a_name} vs {self.team_b_name} ({self.id})>"

"""
engine/match_stats.py
=====================

Turns a completed match scorecard into per-player career increments.

The aggregator is a pure function of the payload: it performs no I/O and keeps
no state, so it can run concurrently for independent matches.  Persisting the
increments is the job of ``database.player_store.PlayerStatsStore``.

Usage
-----
    from engine.match_stats import aggregate_match

    deltas, player_names = aggregate_match(payload)
    for delta in deltas:
        store.apply_delta(delta)
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from engine.exceptions import ValidationError

logger = logging.getLogger(__name__)

NOT_OUT_MARKER = "not out"
BALLS_PER_OVER = 6


# ---------------------------------------------------------------------------
# Delta record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlayerStatsDelta:
    """Increments to add to one player's cumulative record for one match."""
    player_name: str
    matches_played: int = 1

    # Batting
    total_runs: int = 0
    balls_faced: int = 0
    fours: int = 0
    sixes: int = 0
    ducks: int = 0

    # Bowling
    total_wickets: int = 0
    runs_conceded: int = 0
    balls_bowled: int = 0

    man_of_the_match_awards: int = 0

    def increments(self) -> Dict[str, int]:
        """Counter fields only, keyed by delta field name."""
        values = asdict(self)
        values.pop("player_name")
        return values


# ---------------------------------------------------------------------------
# Lenient numeric parsing
# ---------------------------------------------------------------------------

def to_number(value: Any) -> float:
    """
    Coerce a scorecard value to a non-negative finite float.

    Anything that is not a number or a numeric string (None, booleans, lists,
    "abc", NaN, negatives) becomes 0.0 rather than raising.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        logger.debug(f"Coercing non-numeric stat value {value!r} to 0")
        return 0.0
    if not math.isfinite(number) or number < 0:
        logger.debug(f"Coercing out-of-range stat value {value!r} to 0")
        return 0.0
    return number


def to_count(value: Any) -> int:
    """Integer variant of :func:`to_number`; fractional parts are truncated."""
    return int(to_number(value))


def overs_to_balls(overs: Any) -> int:
    """
    Convert bowling figures in "completed overs.balls" notation to balls.
    E.g., 4.3 overs = 4*6 + 3 = 27 balls

    The fractional digit is rounded to absorb float error (4.3 -> 3, not
    2.999...).  Digits of 6 or more are kept as given.
    """
    number = to_number(overs)
    whole_overs = int(number)
    partial_balls = round((number - whole_overs) * 10)
    if partial_balls >= BALLS_PER_OVER:
        logger.warning(f"Overs value {overs!r} has {partial_balls} balls in a partial over")
    return whole_overs * BALLS_PER_OVER + partial_balls


# ---------------------------------------------------------------------------
# Structure checks
# ---------------------------------------------------------------------------

def validate_match_payload(match: Any) -> None:
    """Raise ValidationError if the payload lacks a required structural field."""
    if not isinstance(match, Mapping):
        raise ValidationError("match", "Match payload must be an object")

    for team_key in ("teamA", "teamB"):
        team = match.get(team_key)
        if not isinstance(team, Mapping) or not team.get("name"):
            raise ValidationError(f"{team_key}.name", "Missing required match data")

    if not match.get("overs"):
        raise ValidationError("overs", "Missing required match data")

    innings = match.get("innings")
    if not isinstance(innings, list) or not innings:
        raise ValidationError("innings", "Invalid innings data")

    for team_key in ("teamA", "teamB"):
        if not isinstance(match[team_key].get("xi"), list):
            raise ValidationError(f"{team_key}.xi", "Starting eleven must be a list of names")


def derive_player_names(match: Mapping) -> List[str]:
    """Distinct names across both starting elevens, sorted for stable output."""
    names = set()
    for team_key in ("teamA", "teamB"):
        for name in match[team_key]["xi"]:
            if isinstance(name, str) and name:
                names.add(name)
            else:
                logger.debug(f"Skipping non-name entry {name!r} in {team_key}.xi")
    return sorted(names)


def _flatten_entries(innings: Sequence, key: str) -> List[Mapping]:
    entries = []
    for inning in innings:
        if not isinstance(inning, Mapping):
            continue
        for entry in inning.get(key) or []:
            if isinstance(entry, Mapping):
                entries.append(entry)
    return entries


def _first_entry(entries: Sequence[Mapping], player_name: str) -> Optional[Mapping]:
    for entry in entries:
        if entry.get("name") == player_name:
            return entry
    return None


def is_dismissed(batting_entry: Optional[Mapping]) -> bool:
    """A batter is out unless the status says "not out"; no status means not out."""
    if not batting_entry:
        return False
    status = batting_entry.get("status")
    if not isinstance(status, str) or not status:
        return False
    return NOT_OUT_MARKER not in status.lower()


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def build_delta(player_name: str,
                batting: Optional[Mapping],
                bowling: Optional[Mapping],
                man_of_the_match: Optional[str]) -> PlayerStatsDelta:
    """Compute one player's increments from their first batting/bowling entries."""
    batting = batting or {}
    bowling = bowling or {}

    raw_runs = batting.get("runs")
    runs = to_count(raw_runs)
    # only a numeric zero is a duck; missing, text or "0" runs are not
    scored_zero = isinstance(raw_runs, (int, float)) and not isinstance(raw_runs, bool) and raw_runs == 0
    duck = 1 if scored_zero and is_dismissed(batting) else 0

    return PlayerStatsDelta(
        player_name=player_name,
        matches_played=1,
        total_runs=runs,
        balls_faced=to_count(batting.get("balls")),
        fours=to_count(batting.get("fours")),
        sixes=to_count(batting.get("sixes")),
        ducks=duck,
        total_wickets=to_count(bowling.get("wickets")),
        runs_conceded=to_count(bowling.get("runs")),
        balls_bowled=overs_to_balls(bowling.get("overs")),
        man_of_the_match_awards=1 if man_of_the_match == player_name else 0,
    )


def aggregate_match(match: Mapping) -> Tuple[List[PlayerStatsDelta], List[str]]:
    """
    Validate a match payload and compute one delta per participating player.

    Returns:
        tuple: (deltas, player_names); both ordered by player name.

    Raises:
        ValidationError: if team names, overs, innings or starting elevens
            are missing or malformed.  Nothing is computed in that case.
    """
    validate_match_payload(match)

    player_names = derive_player_names(match)
    batsmen = _flatten_entries(match["innings"], "batsmen")
    bowlers = _flatten_entries(match["innings"], "bowlers")

    motm = match.get("manOfTheMatch")
    motm_name = motm.get("name") if isinstance(motm, Mapping) else None

    deltas = [
        build_delta(
            name,
            _first_entry(batsmen, name),
            _first_entry(bowlers, name),
            motm_name,
        )
        for name in player_names
    ]

    logger.info(
        f"Aggregated {len(deltas)} player deltas for "
        f"{match['teamA']['name']} vs {match['teamB']['name']}"
    )
    return deltas, player_names


def compute_deltas(match: Mapping) -> List[PlayerStatsDelta]:
    """Deltas only; see :func:`aggregate_match`."""
    deltas, _ = aggregate_match(match)
    return deltas

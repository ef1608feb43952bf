from database import db
from engine.match_stats import aggregate_match
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)


class MatchRecorder:
    """
    Records a completed match: updates every participant's career stats and
    stores the match itself in one transaction.

    Notifiers are optional objects with a ``match_recorded(match, players)``
    method. They run after the commit and are best-effort: a failing notifier
    is logged and never undoes or fails the save.
    """

    def __init__(self, store, notifiers=None):
        self.store = store
        self.notifiers = list(notifiers or [])

    def add_notifier(self, notifier):
        self.notifiers.append(notifier)

    def record_match(self, payload):
        """
        Save a completed match and update player stats.

        Args:
            payload (dict): match payload (teamA, teamB, overs, innings, ...)

        Returns:
            tuple: (Match, list of Player) as stored

        Raises:
            ValidationError: payload is structurally invalid; nothing is written
            SQLAlchemyError: the database rejected the write; rolled back
        """
        deltas, player_names = aggregate_match(payload)

        try:
            players = [self.store.apply_delta(delta) for delta in deltas]
            match = self.store.create_match(payload, players)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to save match {payload['teamA']['name']} vs {payload['teamB']['name']}: {e}",
                         exc_info=True)
            raise

        logger.info(f"Match {match.id} saved; updated stats for {len(player_names)} players")
        self._notify(match, players)
        return match, players

    def _notify(self, match, players):
        for notifier in self.notifiers:
            try:
                notifier.match_recorded(match, players)
            except Exception as e:
                logger.warning(f"Notifier {type(notifier).__name__} failed for match {match.id}: {e}",
                               exc_info=True)

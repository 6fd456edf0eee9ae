"""Host-facing controller: one session at a time, highscore carried across sessions."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from salvo.game.core.models import CellMark, Coord, GameRules, IgnoredReason, ShotResult
from salvo.game.core.rules import (
    GameSession,
    SessionSnapshot,
    check_shot,
    fire,
    new_session,
    pending_session,
    snapshot,
)
from salvo.game.highscore.repository import HighscoreRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FireOutcome:
    """Outcome of one fire request plus the fields a host re-renders."""

    result: ShotResult
    snapshot: SessionSnapshot
    ignored_reason: IgnoredReason | None = None


class GameController:
    """Synchronous initialize/fire interface for any host."""

    def __init__(
        self,
        *,
        rules: GameRules | None = None,
        rng: random.Random | None = None,
        highscore_repository: HighscoreRepository | None = None,
    ) -> None:
        self._rules = rules or GameRules()
        self._rng = rng or random.Random()
        self._highscore_repository = highscore_repository
        highscore = highscore_repository.load() if highscore_repository is not None else 0
        self._session = pending_session(self._rules, highscore=highscore)

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def session(self) -> GameSession:
        return self._session

    def initialize(self) -> SessionSnapshot:
        """Start a new session, discarding placements and keeping the highscore."""
        self._session = new_session(self._rules, self._rng, highscore=self._session.highscore)
        logger.info(
            "session_started board=%d ships=%d ammo=%d highscore=%d",
            self._rules.board_size,
            self._rules.num_ships,
            self._session.ammo,
            self._session.highscore,
        )
        return self.snapshot()

    def fire(self, row: int, col: int) -> FireOutcome:
        """Fire at a cell and return the result with the refreshed snapshot."""
        coord = Coord(row=row, col=col)
        reason = check_shot(self._session, coord)
        previous_highscore = self._session.highscore
        result = fire(self._session, coord)
        if reason is not None:
            logger.debug("shot_ignored row=%d col=%d reason=%s", row, col, reason.value)
            return FireOutcome(result=result, snapshot=self.snapshot(), ignored_reason=reason)

        logger.debug("shot_resolved row=%d col=%d result=%s", row, col, result.value)
        if self._session.ended:
            logger.info(
                "session_ended phase=%s ammo=%d highscore=%d shots=%d",
                self._session.phase.value,
                self._session.ammo,
                self._session.highscore,
                self._session.board.shots_fired(),
            )
            if self._session.highscore > previous_highscore:
                self._persist_highscore()
        return FireOutcome(result=result, snapshot=self.snapshot())

    def snapshot(self) -> SessionSnapshot:
        return snapshot(self._session)

    def cell_marks(self) -> list[list[CellMark]]:
        """Return visible marks for every board cell."""
        return self._session.board.marks()

    def _persist_highscore(self) -> None:
        if self._highscore_repository is None:
            return
        try:
            self._highscore_repository.save(self._session.highscore)
        except OSError as exc:
            logger.warning(
                "highscore_save_failed path=%s error=%s", self._highscore_repository.path, exc
            )
            return
        logger.info("highscore_saved value=%d", self._session.highscore)

"""Session state and shot resolution rules."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from salvo.game.core.board import BoardState
from salvo.game.core.models import (
    CellMark,
    Coord,
    GamePhase,
    GameRules,
    IgnoredReason,
    Ship,
    ShotResult,
)
from salvo.game.core.placement import PlacementGenerator, is_valid_placement

SUNK_MESSAGE = "You sank a ship!"
WON_MESSAGE = "You sank all the ships!"
LOST_MESSAGE = "Game over! You are out of ammo!"

_ENDED_PHASES = frozenset({GamePhase.WON, GamePhase.LOST})


@dataclass(slots=True)
class GameSession:
    """Runtime game session state."""

    rules: GameRules
    board: BoardState
    ships: list[Ship]
    ammo: int
    max_ammo: int
    ship_count: int
    highscore: int = 0
    accuracy: int = 100
    phase: GamePhase = GamePhase.PLAYING
    message: str = ""
    misses: int = 0

    @property
    def ended(self) -> bool:
        return self.phase in _ENDED_PHASES


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Host-facing view of a session."""

    ammo: int
    max_ammo: int
    ship_count: int
    accuracy: int
    highscore: int
    message: str
    ended: bool
    phase: GamePhase


def accuracy_percent(ammo: int, max_ammo: int) -> int:
    """Remaining ammo as a whole percentage of starting ammo, halves rounded up."""
    return (ammo * 200 + max_ammo) // (2 * max_ammo)


def validate_ships(ships: Sequence[Ship], rules: GameRules) -> tuple[bool, str]:
    """Validate a fleet against board geometry and spacing rules."""
    if len(ships) != rules.num_ships:
        return False, f"Fleet must contain exactly {rules.num_ships} ships."
    board = BoardState(size=rules.board_size)
    placed: list[Ship] = []
    for ship in ships:
        if ship.placement.length != rules.ship_length:
            return False, f"Ship length must be {rules.ship_length}."
        cells = ship.cells
        if not all(board.in_bounds(cell) for cell in cells):
            return False, "Ship extends beyond the board."
        if not is_valid_placement(cells, placed):
            return False, "Ships overlap or touch."
        placed.append(ship)
    return True, ""


def pending_session(rules: GameRules, *, highscore: int = 0) -> GameSession:
    """Session placeholder before the first game starts."""
    return GameSession(
        rules=rules,
        board=BoardState(size=rules.board_size),
        ships=[],
        ammo=rules.starting_ammo,
        max_ammo=rules.starting_ammo,
        ship_count=rules.num_ships,
        highscore=highscore,
        phase=GamePhase.NOT_STARTED,
    )


def create_session(rules: GameRules, ships: Sequence[Ship], *, highscore: int = 0) -> GameSession:
    """Create a playing session from validated ship placements."""
    valid, reason = validate_ships(ships, rules)
    if not valid:
        raise ValueError(reason)
    return GameSession(
        rules=rules,
        board=BoardState(size=rules.board_size),
        ships=[Ship(placement=ship.placement) for ship in ships],
        ammo=rules.starting_ammo,
        max_ammo=rules.starting_ammo,
        ship_count=len(ships),
        highscore=highscore,
    )


def new_session(rules: GameRules, rng: random.Random, *, highscore: int = 0) -> GameSession:
    """Create a playing session with freshly generated placements."""
    ships = PlacementGenerator(rules, rng).generate_fleet()
    return create_session(rules, ships, highscore=highscore)


def check_shot(session: GameSession, coord: Coord) -> IgnoredReason | None:
    """Return why a shot would be ignored, or None when it is accepted."""
    if session.phase is not GamePhase.PLAYING:
        return IgnoredReason.GAME_ENDED
    if not session.board.in_bounds(coord):
        return IgnoredReason.OUT_OF_BOUNDS
    if session.board.was_shot(coord):
        return IgnoredReason.ALREADY_RESOLVED
    return None


def fire(session: GameSession, coord: Coord) -> ShotResult:
    """Resolve a shot at the hidden fleet."""
    if check_shot(session, coord) is not None:
        if session.phase is GamePhase.LOST and session.ammo == 0:
            _end_game(session)
        return ShotResult.IGNORED

    session.message = ""
    for ship in session.ships:
        if ship.occupies(coord):
            return _resolve_hit(session, ship, coord)
    return _resolve_miss(session, coord)


def snapshot(session: GameSession) -> SessionSnapshot:
    """Build the host-facing view of the session."""
    return SessionSnapshot(
        ammo=session.ammo,
        max_ammo=session.max_ammo,
        ship_count=session.ship_count,
        accuracy=session.accuracy,
        highscore=session.highscore,
        message=session.message,
        ended=session.ended,
        phase=session.phase,
    )


def _resolve_hit(session: GameSession, ship: Ship, coord: Coord) -> ShotResult:
    ship.register_hit()
    session.board.mark(coord, CellMark.HIT)
    if not ship.sunk:
        return ShotResult.HIT

    session.ships.remove(ship)
    session.ship_count -= 1
    session.message = SUNK_MESSAGE
    if session.ship_count == 0:
        session.phase = GamePhase.WON
        _end_game(session)
        return ShotResult.HIT_AND_GAME_WON
    return ShotResult.HIT_AND_SUNK


def _resolve_miss(session: GameSession, coord: Coord) -> ShotResult:
    session.ammo -= 1
    session.misses += 1
    session.accuracy = accuracy_percent(session.ammo, session.max_ammo)
    session.board.mark(coord, CellMark.MISS)
    if session.ammo == 0:
        session.phase = GamePhase.LOST
        _end_game(session)
        return ShotResult.MISS_AND_OUT_OF_AMMO
    return ShotResult.MISS


def _end_game(session: GameSession) -> None:
    session.message = WON_MESSAGE if session.phase is GamePhase.WON else LOST_MESSAGE
    session.highscore = max(session.highscore, session.ammo)

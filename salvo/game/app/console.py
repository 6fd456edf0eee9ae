"""Text-mode host over the game controller."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from salvo.game.app.controller import FireOutcome, GameController
from salvo.game.core.models import CellMark, ShotResult
from salvo.game.core.rules import SessionSnapshot

_CELL_GLYPHS: dict[CellMark, str] = {
    CellMark.EMPTY: ".",
    CellMark.MISS: "o",
    CellMark.HIT: "X",
}
_TARGET_RE = re.compile(r"^\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*$")
_RESULT_TEXT: dict[ShotResult, str] = {
    ShotResult.HIT: "HIT!",
    ShotResult.HIT_AND_SUNK: "HIT!",
    ShotResult.HIT_AND_GAME_WON: "HIT!",
    ShotResult.MISS: "MISS!",
    ShotResult.MISS_AND_OUT_OF_AMMO: "MISS!",
}

HELP_TEXT = "Enter 'row col' to fire, 'new' for a new game, 'quit' to exit."


@dataclass(frozen=True, slots=True)
class ConsoleCommand:
    """Parsed console input."""

    kind: str  # fire|new|quit|help|invalid
    row: int = 0
    col: int = 0


def parse_command(text: str) -> ConsoleCommand:
    """Parse one line of player input."""
    cleaned = text.strip().lower()
    if cleaned in {"q", "quit", "exit"}:
        return ConsoleCommand("quit")
    if cleaned in {"n", "new"}:
        return ConsoleCommand("new")
    if cleaned in {"h", "help", "?"}:
        return ConsoleCommand("help")
    match = _TARGET_RE.match(cleaned)
    if match is None:
        return ConsoleCommand("invalid")
    return ConsoleCommand("fire", row=int(match.group(1)), col=int(match.group(2)))


def render_board(marks: Sequence[Sequence[CellMark]]) -> str:
    """Render the board with row and column indices."""
    size = len(marks)
    lines = ["  " + " ".join(str(col) for col in range(size))]
    for row, cells in enumerate(marks):
        lines.append(f"{row} " + " ".join(_CELL_GLYPHS[cell] for cell in cells))
    return "\n".join(lines)


def render_status(state: SessionSnapshot) -> str:
    return (
        f"Ships: {state.ship_count}  Ammo: {state.ammo}/{state.max_ammo}  "
        f"Accuracy: {state.accuracy}%  Highscore: {state.highscore}"
    )


def describe_outcome(outcome: FireOutcome) -> str:
    """Text shown after a fire request."""
    parts: list[str] = []
    result_text = _RESULT_TEXT.get(outcome.result)
    if result_text:
        parts.append(result_text)
    if outcome.snapshot.message:
        parts.append(outcome.snapshot.message)
    return " ".join(parts)


def run_console(
    controller: GameController,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Run the interactive loop until the player quits or input ends."""
    controller.initialize()
    write(HELP_TEXT)
    _show(controller, write)
    while True:
        try:
            line = read_line("> ")
        except EOFError:
            return
        command = parse_command(line)
        if command.kind == "quit":
            return
        if command.kind == "help":
            write(HELP_TEXT)
            continue
        if command.kind == "invalid":
            write(f"Unrecognised input: {line.strip()!r}. {HELP_TEXT}")
            continue
        if command.kind == "new":
            controller.initialize()
            _show(controller, write)
            continue
        outcome = controller.fire(command.row, command.col)
        text = describe_outcome(outcome)
        if text:
            write(text)
        _show(controller, write)
        if outcome.snapshot.ended:
            write("Type 'new' to play again or 'quit' to exit.")


def _show(controller: GameController, write: Callable[[str], None]) -> None:
    write(render_board(controller.cell_marks()))
    write(render_status(controller.snapshot()))

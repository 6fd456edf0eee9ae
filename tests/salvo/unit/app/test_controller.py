from __future__ import annotations

from salvo.game.core.models import CellMark, Coord, GamePhase, GameRules, IgnoredReason, ShotResult


def _ship_cells(controller) -> set[Coord]:
    return {cell for ship in controller.session.ships for cell in ship.cells}


def _empty_cells(controller) -> list[Coord]:
    """Unfired cells with no live ship on them."""
    occupied = _ship_cells(controller)
    marks = controller.cell_marks()
    size = controller.rules.board_size
    return [
        Coord(r, c)
        for r in range(size)
        for c in range(size)
        if Coord(r, c) not in occupied and marks[r][c] is CellMark.EMPTY
    ]


def test_controller_starts_not_started_and_ignores_fire(controller_factory) -> None:
    controller = controller_factory()
    state = controller.snapshot()
    assert state.phase is GamePhase.NOT_STARTED
    assert state.ended is False

    outcome = controller.fire(0, 0)
    assert outcome.result is ShotResult.IGNORED
    assert outcome.ignored_reason is IgnoredReason.GAME_ENDED


def test_initialize_returns_fresh_snapshot(controller_factory) -> None:
    controller = controller_factory()
    state = controller.initialize()
    assert (state.ammo, state.max_ammo, state.ship_count, state.accuracy, state.highscore) == (15, 15, 3, 100, 0)
    assert state.phase is GamePhase.PLAYING
    assert len(controller.session.ships) == 3
    assert all(mark is CellMark.EMPTY for row in controller.cell_marks() for mark in row)


def test_example_scenario_hit_sink_then_run_out_of_ammo(controller_factory) -> None:
    controller = controller_factory(seed=7)
    controller.initialize()
    ship_a = controller.session.ships[0]
    cells = ship_a.cells

    first = controller.fire(cells[0].row, cells[0].col)
    assert first.result is ShotResult.HIT
    assert first.snapshot.ammo == 15
    assert first.snapshot.ship_count == 3

    controller.fire(cells[1].row, cells[1].col)
    third = controller.fire(cells[2].row, cells[2].col)
    assert third.result is ShotResult.HIT_AND_SUNK
    assert third.snapshot.ship_count == 2

    results = [controller.fire(cell.row, cell.col).result for cell in _empty_cells(controller)[:15]]
    assert results[-1] is ShotResult.MISS_AND_OUT_OF_AMMO
    state = controller.snapshot()
    assert state.ammo == 0
    assert state.phase is GamePhase.LOST
    assert state.ended
    assert state.highscore == 0


def test_refire_is_idempotent_and_reports_reason(controller_factory) -> None:
    controller = controller_factory()
    controller.initialize()
    target = _empty_cells(controller)[0]
    once = controller.fire(target.row, target.col)
    marks_once = controller.cell_marks()

    twice = controller.fire(target.row, target.col)
    assert twice.result is ShotResult.IGNORED
    assert twice.ignored_reason is IgnoredReason.ALREADY_RESOLVED
    assert twice.snapshot == once.snapshot
    assert controller.cell_marks() == marks_once
    assert marks_once[target.row][target.col] is CellMark.MISS


def test_out_of_bounds_is_ignored(controller_factory) -> None:
    controller = controller_factory()
    before = controller.initialize()
    outcome = controller.fire(7, 2)
    assert outcome.result is ShotResult.IGNORED
    assert outcome.ignored_reason is IgnoredReason.OUT_OF_BOUNDS
    assert outcome.snapshot == before


def test_win_raises_highscore_and_carries_into_next_session(controller_factory) -> None:
    controller = controller_factory(seed=3)
    controller.initialize()
    miss = _empty_cells(controller)[0]
    controller.fire(miss.row, miss.col)
    last = None
    for cell in sorted(_ship_cells(controller), key=lambda c: (c.row, c.col)):
        last = controller.fire(cell.row, cell.col)
    assert last is not None
    assert last.result is ShotResult.HIT_AND_GAME_WON
    assert last.snapshot.highscore == 14
    assert last.snapshot.message == "You sank all the ships!"

    fresh = controller.initialize()
    assert fresh.highscore == 14
    assert fresh.ammo == 15
    assert fresh.message == ""
    assert fresh.phase is GamePhase.PLAYING


def test_highscore_never_decreases_across_sessions(controller_factory) -> None:
    controller = controller_factory(seed=11)
    controller.initialize()
    for cell in _ship_cells(controller):
        controller.fire(cell.row, cell.col)
    assert controller.snapshot().highscore == 15

    controller.initialize()
    for cell in _empty_cells(controller)[:15]:
        controller.fire(cell.row, cell.col)
    assert controller.snapshot().phase is GamePhase.LOST
    assert controller.snapshot().highscore == 15


def test_highscore_persists_through_repository(controller_factory, highscore_repository) -> None:
    highscore_repository.save(4)
    controller = controller_factory(highscore_repository=highscore_repository)
    assert controller.snapshot().highscore == 4

    controller.initialize()
    for cell in _ship_cells(controller):
        controller.fire(cell.row, cell.col)
    assert highscore_repository.load() == 15

    reloaded = controller_factory(highscore_repository=highscore_repository)
    assert reloaded.initialize().highscore == 15


def test_lower_score_does_not_overwrite_stored_highscore(controller_factory, highscore_repository) -> None:
    highscore_repository.save(12)
    controller = controller_factory(highscore_repository=highscore_repository)
    controller.initialize()
    for cell in _empty_cells(controller)[:15]:
        controller.fire(cell.row, cell.col)
    assert highscore_repository.load() == 12


def test_custom_rules_flow_through_controller(controller_factory) -> None:
    rules = GameRules(board_size=9, ship_length=4, num_ships=2, starting_ammo=5)
    controller = controller_factory(rules=rules)
    state = controller.initialize()
    assert (state.ammo, state.ship_count) == (5, 2)
    assert len(controller.cell_marks()) == 9
    assert all(len(ship.cells) == 4 for ship in controller.session.ships)


def test_failed_highscore_save_keeps_game_running(controller_factory, highscore_repository, monkeypatch, caplog) -> None:
    def _refuse(score: int) -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr(highscore_repository, "save", _refuse)
    controller = controller_factory(highscore_repository=highscore_repository)
    controller.initialize()
    with caplog.at_level("WARNING", logger="salvo.game.app.controller"):
        results = [controller.fire(cell.row, cell.col).result for cell in _ship_cells(controller)]

    assert results[-1] is ShotResult.HIT_AND_GAME_WON
    assert controller.snapshot().highscore == 15
    assert "highscore_save_failed" in caplog.text
    assert controller.initialize().highscore == 15

import logging

import numpy as np
import pytest

from connect4_engine.debug import LOGGER_NAME, DebugLevel, DebugManager
from connect4_engine.utils import (GameMode, Side, Winner, check_win_at_position,
                                   count_direction, line_through, winner_message)


def test_side_other():
    assert Side.FIRST.other() == Side.SECOND
    assert Side.SECOND.other() == Side.FIRST
    assert Side.EMPTY.other() == Side.EMPTY


def test_winner_from_side():
    assert Winner.from_side(Side.FIRST) == Winner.FIRST
    assert Winner.from_side(Side.SECOND) == Winner.SECOND
    assert Winner.from_side(Side.EMPTY) == Winner.NONE
    assert winner_message(Winner.NONE) == ""


@pytest.mark.parametrize("value, expected", [
    ("ai", GameMode.VS_AUTOMATED),
    (" twoPlayer ", GameMode.TWO_PLAYER),
    ("two_player", GameMode.TWO_PLAYER),
    ("", None),
    (None, None),
    ("solo", None),
])
def test_game_mode_parse(value, expected):
    assert GameMode.parse(value) == expected


def test_count_direction_spans_both_ways():
    grid = np.zeros((6, 7), dtype=np.int8)
    grid[5, 1:6] = 1
    assert count_direction(grid, 5, 3, 0, 1) == 5
    assert count_direction(grid, 5, 3, 1, 0) == 1
    assert check_win_at_position(grid, 5, 3) == Side.FIRST
    assert line_through(grid, 5, 3) == [(5, c) for c in range(1, 6)]


def test_debug_manager_filters_by_level_and_component(caplog):
    manager = DebugManager()
    manager.configure(level=DebugLevel.INFO, components=["rules"])
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        manager.info("shown", "rules")
        manager.info("hidden", "board")
        manager.debug("too verbose", "rules")
    messages = [r.getMessage() for r in caplog.records]
    assert "[rules] shown" in messages
    assert not any("hidden" in m or "too verbose" in m for m in messages)
    manager.configure(level=DebugLevel.WARNING, components=[])


def test_debug_manager_set_from_string():
    manager = DebugManager()
    assert manager.set_from_string("debug")
    assert manager.level == DebugLevel.DEBUG
    assert not manager.set_from_string("loud")
    manager.configure(level=DebugLevel.WARNING)


def test_debug_manager_timer():
    manager = DebugManager()
    manager.start_timer("t")
    assert manager.end_timer("t") >= 0
    assert manager.end_timer("t") is None


def test_debug_manager_log_file(tmp_path):
    manager = DebugManager()
    path = tmp_path / "engine.log"
    manager.configure(level=DebugLevel.INFO, log_file=str(path))
    manager.info("to file", "cli")
    manager.configure(level=DebugLevel.WARNING, log_file="")
    assert "[cli] to file" in path.read_text()


def test_new_manager_leaves_shared_logger_level_alone():
    from connect4_engine.debug import debug as shared

    logger = logging.getLogger(LOGGER_NAME)
    shared.configure(level=DebugLevel.ERROR)
    try:
        DebugManager(level=DebugLevel.TRACE)
        assert logger.level == logging.ERROR
        assert logger.getEffectiveLevel() == logging.ERROR
        assert shared.level == DebugLevel.ERROR
    finally:
        shared.configure(level=DebugLevel.WARNING)

import pytest

from blockfall.score import ScoreKeeper, score_for_lines


@pytest.mark.parametrize("lines, expected", [(0, 0), (1, 100), (2, 250), (3, 400), (4, 550)])
def test_line_awards(lines, expected):
    keeper = ScoreKeeper()
    assert keeper.count_lines(lines) == expected
    assert keeper.total == expected
    assert score_for_lines(lines) == expected


def test_tetromino_award():
    keeper = ScoreKeeper()
    assert keeper.count_tetromino() == 10
    assert keeper.total == 10


def test_total_is_running_sum():
    keeper = ScoreKeeper()
    keeper.count_tetromino()
    keeper.count_lines(2)
    keeper.count_tetromino()
    keeper.count_lines(0)
    keeper.count_lines(1)
    assert keeper.total == 10 + 250 + 10 + 0 + 100


def test_listener_notified_after_each_change():
    totals = []
    keeper = ScoreKeeper(totals.append)
    keeper.count_tetromino()
    keeper.count_lines(3)
    assert totals == [10, 410]


def test_negative_line_count_rejected():
    keeper = ScoreKeeper()
    with pytest.raises(ValueError):
        keeper.count_lines(-1)
    assert keeper.total == 0

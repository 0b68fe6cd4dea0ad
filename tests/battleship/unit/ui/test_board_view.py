from battleship.game.core.board import Grid
from battleship.game.core.models import Coord, GameRules, Orientation, ShotResult
from battleship.game.core.rules import RoundSummary, TurnOutcome, create_player
from battleship.game.ui.board_view import (
    CellView,
    board_snapshot,
    render_board,
    round_result_message,
    shot_message,
    shots_left_message,
    summary_lines,
)


def _grid_with_hit_and_miss() -> Grid:
    grid = Grid(width=4, height=3)
    grid.place(Coord(0, 0), Orientation.HORIZONTAL, 2)
    grid.shoot(Coord(0, 0))
    grid.shoot(Coord(2, 3))
    return grid


def test_snapshot_hides_ships_from_opponent() -> None:
    snapshot = board_snapshot(_grid_with_hit_and_miss(), reveal_ships=False)
    assert (snapshot.width, snapshot.height) == (4, 3)
    assert snapshot.rows[0] == (CellView.HIT, CellView.UNKNOWN, CellView.UNKNOWN, CellView.UNKNOWN)
    assert snapshot.rows[2][3] is CellView.MISS
    assert all(cell is CellView.UNKNOWN for cell in snapshot.rows[1])
    assert snapshot.rows[0][1] is CellView.UNKNOWN


def test_snapshot_reveals_unshot_ships_to_owner() -> None:
    snapshot = board_snapshot(_grid_with_hit_and_miss(), reveal_ships=True)
    assert snapshot.rows[0][0] is CellView.HIT
    assert snapshot.rows[0][1] is CellView.SHIP
    assert snapshot.rows[1][0] is CellView.UNKNOWN


def test_render_board_labels_columns_and_rows() -> None:
    text = render_board(board_snapshot(_grid_with_hit_and_miss(), reveal_ships=True))
    lines = text.splitlines()
    assert lines[0] == "    1   2   3   4 "
    assert lines[1] == "A   X   >   ~   ~  "
    assert lines[3].startswith("C ")
    assert lines[3].rstrip().endswith("O")
    assert len(lines) == 4


def test_round_messages() -> None:
    rules = GameRules()
    alice = create_player("Alice", rules)
    bob = create_player("Bob", rules)
    hit = TurnOutcome(result=ShotResult.HIT, shooter=alice, target=bob)
    repeat = TurnOutcome(result=ShotResult.ALREADY_SHOT, shooter=alice, target=bob)
    lost = TurnOutcome(result=ShotResult.MISS, shooter=alice, target=bob, winner=bob)

    assert shot_message(hit) == "Alice, you hit a ship!"
    assert shot_message(repeat) == "You already shot there."
    assert shot_message(lost) == "Alice, you missed!"
    assert round_result_message(lost) == "Alice, you lost!"
    assert shots_left_message(12) == "You have 12 shots left."


def test_summary_lines_list_wins_and_round_stats() -> None:
    summary = RoundSummary(
        wins=(("Alice", 2), ("Bob", 1)),
        ships_sunk=3,
        shooter_name="Alice",
        shooter_hits=15,
        winner_name="Alice",
    )
    lines = summary_lines(summary)
    assert lines[1:] == [
        "Final score:",
        "Alice: 2 wins",
        "Bob: 1 wins",
        "Ships sunk in this round: 3",
        "Correct shots in this round: 15",
    ]

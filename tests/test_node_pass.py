from __future__ import annotations

import pytest

from reversi_alphabeta.engine.bitboard import Player, Position, set_cell
from reversi_alphabeta.engine.eval import DEFAULT_WEIGHTS
from reversi_alphabeta.engine.node import ReversiNode, initial_node
from reversi_alphabeta.engine.search import AlphaBeta

MAX, MIN = Player.MAXIMIZING, Player.MINIMIZING
V = DEFAULT_WEIGHTS.victory


def forced_pass_node():
    # row 0: MIN MAX . .  with Maximizing to move
    pos = set_cell(Position(4), MIN, 0, 0)
    pos = set_cell(pos, MAX, 0, 1)
    return ReversiNode(pos, MAX)


def test_player_without_moves_gets_single_pass_child():
    node = forced_pass_node()
    children = node.children
    assert len(children) == 1
    passed = children[0]
    assert passed.is_pass
    assert passed.move is None
    assert passed.position == node.position
    assert passed.player is MIN
    assert passed.opponent is MAX
    assert passed.pass_allowed is False


def test_pass_then_move_then_double_block_is_terminal():
    passed = forced_pass_node().children[0]
    replies = passed.children
    assert [c.move for c in replies] == [2]
    final = replies[0]
    assert final.player is MAX
    assert final.get_cell(0, 1) is MIN
    # neither side can move any more: no pass child, exact disc score
    assert final.children == []
    assert final.is_terminal
    assert final.heuristic == -3 * V


def test_both_players_blocked_has_no_children():
    pos = set_cell(set_cell(Position(4), MAX, 0, 0), MAX, 1, 1)
    for player in (MAX, MIN):
        node = ReversiNode(pos, player)
        assert node.children == []
        assert node.heuristic == 2 * V


def test_second_consecutive_pass_is_not_allowed():
    node = forced_pass_node()
    # same board, Maximizing to move right after a pass by Minimizing
    stalled = ReversiNode(node.position, MAX, pass_allowed=False)
    assert stalled.children == []


def test_pass_flag_does_not_block_real_moves():
    node = initial_node(8)
    after_pass = ReversiNode(node.position, MAX, pass_allowed=False)
    assert [c.move for c in after_pass.children] == [19, 26, 37, 44]


def test_children_alternate_players_and_record_moves():
    node = initial_node(8)
    children = node.children
    assert [c.move for c in children] == [19, 26, 37, 44]
    for child in children:
        assert child.player is MIN
        assert child.pass_allowed
        assert child.disc_counts() == (4, 1)


def test_get_cell_is_bounds_checked():
    node = initial_node(8)
    assert node.get_cell(3, 4) is MAX
    assert node.get_cell(3, 3) is MIN
    assert node.get_cell(0, 0) is Player.NONE
    with pytest.raises(ValueError, match="row 8"):
        node.get_cell(8, 0)
    with pytest.raises(ValueError, match="column -1"):
        node.get_cell(0, -1)


def test_search_plays_the_forced_pass():
    node = forced_pass_node()
    best = AlphaBeta(2).best(node)
    assert best.is_pass
    assert AlphaBeta(3).value(node) == -3 * V


def test_nodes_are_values():
    a = initial_node(6)
    b = initial_node(6)
    assert a == b
    assert hash(a) == hash(b)
    assert a.children == b.children

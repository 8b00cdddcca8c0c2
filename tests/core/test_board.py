"""Tests for ChessBoard set-up, views, check detection and moves."""

import pytest

from chesskernel.core.board import ChessBoard
from chesskernel.core.enums import Color, PieceType
from chesskernel.core.errors import IllegalMoveError
from chesskernel.core.piece import Piece
from chesskernel.core.types import Coords, parse_square


def _board(placement: dict[str, str], to_move: Color = Color.WHITE) -> ChessBoard:
    return ChessBoard.from_placement(
        {parse_square(sq): Piece.from_char(ch) for sq, ch in placement.items()},
        to_move,
    )


class TestBoardInitial:
    def test_view_back_ranks(self) -> None:
        view = ChessBoard().chess_board_view
        assert view[0] == ["R", "N", "B", "Q", "K", "B", "N", "R"]
        assert view[7] == ["r", "n", "b", "q", "k", "b", "n", "r"]

    def test_view_pawns_and_empty_middle(self) -> None:
        view = ChessBoard().chess_board_view
        assert view[1] == ["P"] * 8
        assert view[6] == ["p"] * 8
        for row in view[2:6]:
            assert row == [None] * 8

    def test_white_moves_first(self) -> None:
        assert ChessBoard().player_color == Color.WHITE

    def test_thirty_two_distinct_pieces(self) -> None:
        pieces = [piece for _, piece in ChessBoard().occupied()]
        assert len(pieces) == 32
        assert len({id(p) for p in pieces}) == 32

    def test_king_coords(self) -> None:
        board = ChessBoard()
        assert board.king_coords(Color.WHITE) == parse_square("e1")
        assert board.king_coords(Color.BLACK) == parse_square("e8")

    def test_king_coords_missing(self) -> None:
        assert ChessBoard.empty().king_coords(Color.WHITE) is None

    def test_nobody_in_check(self) -> None:
        board = ChessBoard()
        assert not board.is_in_check(Color.WHITE)
        assert not board.is_in_check(Color.BLACK)
        assert not board.check_state


class TestBoardView:
    def test_view_is_a_fresh_projection(self) -> None:
        board = ChessBoard()
        view = board.chess_board_view
        view[0][0] = None
        assert board.chess_board_view[0][0] == "R"

    def test_view_round_trips_color_and_identity(self) -> None:
        board = ChessBoard()
        for row, cells in enumerate(board.chess_board_view):
            for col, char in enumerate(cells):
                piece = board[Coords(row, col)]
                if char is None:
                    assert piece is None
                    continue
                assert piece is not None
                rebuilt = Piece.from_char(char)
                assert rebuilt.color == piece.color
                assert rebuilt.piece_type == piece.piece_type

    @pytest.mark.parametrize(
        ("row", "col", "dark"),
        [(0, 0, True), (0, 1, False), (1, 0, False), (7, 7, True), (3, 5, True)],
    )
    def test_is_square_dark(self, row: int, col: int, dark: bool) -> None:
        assert ChessBoard.is_square_dark(row, col) is dark

    def test_repr(self) -> None:
        text = repr(ChessBoard())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert "a b c d e f g h" in text


class TestIsInCheck:
    def test_rook_on_open_file(self) -> None:
        board = _board({"e1": "K", "e8": "r", "a8": "k"})
        assert board.is_in_check(Color.WHITE)
        assert not board.is_in_check(Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = _board({"e1": "K", "e4": "n", "e8": "r", "a8": "k"})
        assert not board.is_in_check(Color.WHITE)

    def test_bishop_diagonal(self) -> None:
        board = _board({"e1": "K", "a5": "b", "h8": "k"})
        assert board.is_in_check(Color.WHITE)

    def test_knight(self) -> None:
        board = _board({"e1": "K", "f3": "n", "h8": "k"})
        assert board.is_in_check(Color.WHITE)

    def test_knight_jumps_over_blockers(self) -> None:
        board = _board({"e1": "K", "e2": "P", "f2": "P", "d2": "P", "f3": "n", "h8": "k"})
        assert board.is_in_check(Color.WHITE)

    def test_black_pawn_attacks_diagonally_down(self) -> None:
        board = _board({"e4": "K", "d5": "p", "h8": "k"})
        assert board.is_in_check(Color.WHITE)

    def test_pawn_does_not_attack_straight(self) -> None:
        board = _board({"e4": "K", "e5": "p", "h8": "k"})
        assert not board.is_in_check(Color.WHITE)

    def test_pawn_does_not_attack_double_step_square(self) -> None:
        board = _board({"e5": "K", "e7": "p", "h8": "k"})
        assert not board.is_in_check(Color.WHITE)

    def test_white_pawn_attacks_up(self) -> None:
        board = _board({"a1": "K", "d4": "P", "e5": "k"})
        assert board.is_in_check(Color.BLACK)

    def test_pawn_never_attacks_backwards(self) -> None:
        board = _board({"a1": "K", "d4": "P", "e3": "k"})
        assert not board.is_in_check(Color.BLACK)

    def test_own_pieces_never_give_check(self) -> None:
        board = _board({"e1": "K", "e8": "R", "a8": "k"})
        assert not board.is_in_check(Color.WHITE)

    def test_check_state_follows_side_to_move(self) -> None:
        board = _board({"e1": "K", "e8": "r", "a8": "k"}, Color.BLACK)
        assert not board.check_state
        board.pass_turn()
        assert board.check_state


class TestMove:
    def test_apply_safe_move(self) -> None:
        board = ChessBoard()
        e2, e4 = parse_square("e2"), parse_square("e4")
        pawn = board[e2]

        captured = board.move(e2, e4)

        assert captured is None
        assert board[e2] is None
        assert board[e4] is pawn
        assert pawn is not None and pawn.has_moved

    def test_move_leaves_turn_to_driver(self) -> None:
        board = ChessBoard()
        board.move(parse_square("g1"), parse_square("f3"))
        assert board.player_color == Color.WHITE
        board.pass_turn()
        assert board.player_color == Color.BLACK

    def test_capture_returns_taken_piece(self) -> None:
        board = _board({"a1": "K", "d4": "P", "e5": "n", "h8": "k"})
        knight = board[parse_square("e5")]
        assert board.move(parse_square("d4"), parse_square("e5")) is knight
        assert sum(1 for _ in board.occupied()) == 3

    def test_illegal_move_rejected(self) -> None:
        board = ChessBoard()
        with pytest.raises(IllegalMoveError, match="Illegal move: e2e5"):
            board.move(parse_square("e2"), parse_square("e5"))
        assert board == ChessBoard()

    def test_moving_opponent_piece_rejected(self) -> None:
        board = ChessBoard()
        with pytest.raises(IllegalMoveError):
            board.move(parse_square("e7"), parse_square("e5"))

    def test_illegal_move_is_value_error(self) -> None:
        assert issubclass(IllegalMoveError, ValueError)


class TestCopy:
    def test_copy_independence(self) -> None:
        board = ChessBoard()
        clone = board.copy()
        assert board == clone
        clone[parse_square("e1")] = None
        assert board != clone
        assert board[parse_square("e1")] is not None

    def test_copy_makes_new_pieces(self) -> None:
        board = ChessBoard()
        board.move(parse_square("b1"), parse_square("c3"))
        clone = board.copy()
        original = board[parse_square("c3")]
        copied = clone[parse_square("c3")]
        assert copied is not original
        assert copied is not None and copied.has_moved
        assert copied.piece_type == PieceType.KNIGHT

    def test_equality_includes_side_to_move(self) -> None:
        assert ChessBoard(Color.WHITE) != ChessBoard(Color.BLACK)

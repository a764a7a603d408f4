"""Move generation tests: perft counts and special-move rules.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from collections.abc import Callable

import pytest

from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Compound, Move, Promotion, Step
from gambit.core.notation import STARTING_FEN, state_from_fen
from gambit.core.state import GameState
from gambit.core.types import A7, A8, C1, D5, D6, E1, E4, E5, G1, parse_square


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes at *depth* using apply/reverse."""
    if depth == 0:
        return 1
    nodes = 0
    for move in state.legal_moves():
        state.apply_move(move)
        nodes += perft(state, depth - 1)
        state.reverse_move(move)
    return nodes


def _names(moves: list[Move]) -> set[str]:
    return {str(m) for m in moves}


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(state_from_fen(STARTING_FEN), 3) == 8_902


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 2) == 2_039


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS3), 2) == 191

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(state_from_fen(POS3), 3) == 2_812


# ── Position 4: promotions and castling for one side only ──────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS4), 2) == 264


# ── Position 5 ──────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS5), 1) == 44

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS5), 2) == 1_486


# ── Legal move sets ─────────────────────────────────────────────────────────


class TestOpeningMoves:
    def test_exact_set(self) -> None:
        moves = GameState().legal_moves()
        expected = {f"{c}2{c}3" for c in "abcdefgh"}
        expected |= {f"{c}2{c}4" for c in "abcdefgh"}
        expected |= {"b1a3", "b1c3", "g1f3", "g1h3"}
        assert len(moves) == 20
        assert _names(moves) == expected

    def test_double_steps_are_flagged(self) -> None:
        moves = GameState().legal_moves(parse_square("e2"))
        flags = {str(m): m.flag for m in moves if isinstance(m, Step)}
        assert flags == {"e2e3": MoveFlag.NORMAL, "e2e4": MoveFlag.DOUBLE_PAWN}

    def test_black_side(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "e2e4")
        moves = state.legal_moves()
        assert len(moves) == 20
        assert "e7e5" in _names(moves)

    def test_empty_square_has_no_moves(self) -> None:
        assert GameState().legal_moves(E4) == []

    def test_off_board_square_has_no_moves(self) -> None:
        assert GameState().legal_moves(E1.offset(0, -1)) == []


class TestSliding:
    def test_rook_rays_stop_at_blockers(self) -> None:
        state = state_from_fen("4k3/8/8/3p4/8/8/8/3RK3 w - - 0 1")
        moves = _names(state.legal_moves(parse_square("d1")))
        assert moves == {"d1a1", "d1b1", "d1c1", "d1d2", "d1d3", "d1d4", "d1d5"}

    def test_no_capture_of_own_pieces(self) -> None:
        state = GameState()
        assert state.legal_moves(parse_square("a1")) == []
        assert state.legal_moves(parse_square("d1")) == []


class TestPawns:
    def test_blocked_pawn(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/4p3/4P3/4K3 w - - 0 1")
        assert state.legal_moves(parse_square("e2")) == []

    def test_double_step_needs_open_first_square(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert state.legal_moves(parse_square("e2")) == []

    def test_double_step_blocked_on_second_square(self) -> None:
        state = state_from_fen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
        assert _names(state.legal_moves(parse_square("e2"))) == {"e2e3"}

    def test_no_double_step_after_moving(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "e2e3", "a7a6")
        assert _names(state.legal_moves(parse_square("e3"))) == {"e3e4"}

    def test_diagonal_captures(self) -> None:
        state = state_from_fen("4k3/8/8/3p1p2/4P3/8/8/4K3 w - - 0 1")
        assert _names(state.legal_moves(E4)) == {"e4e5", "e4d5", "e4f5"}


class TestEnPassant:
    def test_capture_right_after_double_step(
        self, play: Callable[..., list[Move]]
    ) -> None:
        state = GameState()
        play(state, "e2e4", "a7a6", "e4e5", "d7d5")
        move = state.validate_move(E5, D6)
        assert isinstance(move, Compound)
        assert move.is_capture

        before = state.snapshot()
        state.do_move(move)
        assert state.board[D5] is None
        assert str(state.board[D6]) == "P"
        assert [p.piece_type for p in state.captured_pieces()] == [PieceType.PAWN]

        state.undo()
        assert state.snapshot() == before
        assert str(state.board[D5]) == "p"

    def test_window_closes_after_one_ply(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "e2e4", "a7a6", "e4e5", "d7d5", "g1f3", "a6a5")
        assert state.validate_move(E5, D6) is None

    def test_single_steps_do_not_qualify(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "e2e4", "d7d6", "e4e5", "d6d5")
        assert state.validate_move(E5, D6) is None

    def test_from_fen_field(self) -> None:
        state = state_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        assert state.validate_move(E5, D6) is not None

    def test_horizontal_pin(self) -> None:
        # Capturing would expose the white king on a5 to the rook on h5.
        state = state_from_fen("4k3/8/8/K2pP2r/8/8/8/8 w - d6 0 2")
        assert state.validate_move(E5, D6) is None


class TestPromotion:
    FEN = "8/P6k/8/8/8/8/8/7K w - - 0 1"

    def test_four_moves(self) -> None:
        state = state_from_fen(self.FEN)
        moves = state.legal_moves(A7)
        assert len(moves) == 4
        assert all(isinstance(m, Promotion) for m in moves)
        kinds = {m.promotion for m in moves if isinstance(m, Promotion)}
        assert kinds == {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}

    @pytest.mark.parametrize(
        "kind",
        [PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT],
    )
    def test_apply_and_reverse(self, kind: PieceType) -> None:
        state = state_from_fen(self.FEN)
        pawn = state.board[A7]
        before = state.snapshot()
        move = state.validate_move(A7, A8, kind)
        assert move is not None

        state.apply_move(move)
        promoted = state.board[A8]
        assert promoted is not None
        assert promoted.piece_type == kind
        assert promoted.color == Color.WHITE

        state.reverse_move(move)
        assert state.board[A8] is None
        assert state.board[A7] is pawn
        assert state.snapshot() == before

    def test_promotion_kind_is_required(self) -> None:
        state = state_from_fen(self.FEN)
        assert state.validate_move(A7, A8) is None

    def test_capture_promotion(self) -> None:
        state = state_from_fen("1r5k/P7/8/8/8/8/8/7K w - - 0 1")
        assert _names(state.legal_moves(A7)) == {
            f"a7{t}{c}" for t in ("a8", "b8") for c in "qrbn"
        }


class TestCastling:
    BASE = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_both_sides_available(self) -> None:
        state = state_from_fen(self.BASE)
        assert isinstance(state.validate_move(E1, G1), Compound)
        assert isinstance(state.validate_move(E1, C1), Compound)

    def test_rook_lands_next_to_king(self) -> None:
        state = state_from_fen(self.BASE)
        move = state.validate_move(E1, C1)
        assert move is not None
        state.do_move(move)
        assert str(state.board[parse_square("d1")]) == "R"
        assert state.board[parse_square("a1")] is None
        assert state.board.king_square(Color.WHITE) == C1

    def test_black_castles(self, play: Callable[..., list[Move]]) -> None:
        state = state_from_fen(self.BASE)
        play(state, "a1a2", "e8g8")
        assert str(state.board[parse_square("f8")]) == "r"

    def test_rook_moved(self, play: Callable[..., list[Move]]) -> None:
        state = state_from_fen(self.BASE)
        play(state, "h1g1", "a8b8", "g1h1", "b8a8")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is not None

    def test_king_moved(self, play: Callable[..., list[Move]]) -> None:
        state = state_from_fen(self.BASE)
        play(state, "e1f1", "a8b8", "f1e1", "b8a8")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is None

    def test_square_between_occupied(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K1NR w KQkq - 0 1")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is not None

    def test_rook_side_square_occupied(self) -> None:
        # b1 is not crossed by the king but must still be empty.
        state = state_from_fen("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        assert state.validate_move(E1, C1) is None
        assert state.validate_move(E1, G1) is not None

    def test_transit_square_attacked(self) -> None:
        state = state_from_fen("r3kr2/8/8/8/8/8/8/R3K2R w KQq - 0 1")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is not None

    def test_destination_attacked(self) -> None:
        state = state_from_fen("r3k1r1/8/8/8/8/8/8/R3K2R w KQq - 0 1")
        assert state.validate_move(E1, G1) is None

    def test_not_out_of_check(self) -> None:
        state = state_from_fen("r3k3/4r3/8/8/8/8/8/R3K2R w KQq - 0 1")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is None

    def test_attacked_rook_side_square_is_fine(self) -> None:
        # The rook on b8 hits b1, which the king never crosses.
        state = state_from_fen("1r2k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert state.validate_move(E1, C1) is not None

    def test_castling_rights_from_fen(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Qk - 0 1")
        assert state.validate_move(E1, G1) is None
        assert state.validate_move(E1, C1) is not None


class TestAttacks:
    def test_is_in_check(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert state.generator.is_in_check(Color.WHITE)
        assert not state.generator.is_in_check(Color.BLACK)

    def test_pawn_attacks_occupied_square(self) -> None:
        state = state_from_fen("4k3/8/8/3p4/4N3/8/8/4K3 w - - 0 1")
        assert state.generator.is_square_attacked(E4, Color.BLACK)

    def test_attacked_at_probes_empty_square(self) -> None:
        state = state_from_fen("4k3/8/8/8/3p4/8/8/4K3 w - - 0 1")
        e3 = parse_square("e3")
        assert state.generator.is_attacked_at(E1, e3)
        assert state.board.king_square(Color.WHITE) == E1

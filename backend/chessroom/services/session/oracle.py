"""Position oracle: the rules engine behind the session.

Wraps python-chess. Positions are chess.Board instances and are never
mutated in place; every accepted move yields a fresh board.
"""
from typing import Any, Dict, Optional, Tuple

import chess

from chessroom.models import MoveCandidate, Role
from .errors import InvalidMoveError, InvalidPositionError


class PositionOracle:

    def initial_position(self, fen: Optional[str] = None) -> chess.Board:
        if fen:
            return self.deserialize(fen)
        return chess.Board()

    def apply_move(self, position: chess.Board, candidate: Any) -> Optional[Tuple[chess.Board, Dict[str, Any]]]:
        """Validate ``candidate`` against ``position``.

        Returns ``(new_position, normalized_move)`` for a legal move and
        ``None`` for an illegal one. Payloads that are not a move at all
        raise InvalidMoveError.
        """
        move = self._resolve(position, candidate)
        if move is None:
            return None
        normalized = self._normalize(position, move)
        new_position = position.copy()
        new_position.push(move)
        return new_position, normalized

    def turn_of(self, position: chess.Board) -> Role:
        return Role.WHITE if position.turn == chess.WHITE else Role.BLACK

    def serialize(self, position: chess.Board) -> str:
        return position.fen()

    def deserialize(self, text: str) -> chess.Board:
        try:
            return chess.Board(text)
        except (TypeError, ValueError) as exc:
            raise InvalidPositionError(f'invalid FEN {text!r}: {exc}') from exc

    def outcome(self, position: chess.Board) -> Optional[Dict[str, str]]:
        result = position.outcome()
        if result is None:
            return None
        return {'result': result.result(), 'termination': result.termination.name.lower()}

    def _resolve(self, position: chess.Board, candidate: Any) -> Optional[chess.Move]:
        # Bare strings are read as SAN first, then UCI
        if isinstance(candidate, str):
            text = candidate.strip()
            if not text:
                raise InvalidMoveError('empty move')
            for parse in (position.parse_san, position.parse_uci):
                try:
                    move = parse(text)
                except ValueError:
                    continue
                if move and position.is_legal(move):
                    return move
            return None

        if not isinstance(candidate, MoveCandidate):
            candidate = MoveCandidate.from_payload(candidate)
        try:
            origin = chess.parse_square(candidate.origin)
            destination = chess.parse_square(candidate.destination)
        except ValueError as exc:
            raise InvalidMoveError(f'unknown square in {candidate.to_dict()}') from exc

        promotion = chess.Piece.from_symbol(candidate.promotion).piece_type if candidate.promotion else None
        # Clients always send a promotion hint; it only counts on a promoting pawn move
        for piece_type in dict.fromkeys((promotion, None)):
            move = chess.Move(origin, destination, promotion=piece_type)
            if position.is_legal(move):
                return move
        return None

    def _normalize(self, position: chess.Board, move: chess.Move) -> Dict[str, Any]:
        uci = move.uci()
        piece = position.piece_at(move.from_square)
        normalized: Dict[str, Any] = {
            'from': uci[:2],
            'to': uci[2:4],
            'san': position.san(move),
            'uci': uci,
            'color': 'w' if position.turn == chess.WHITE else 'b',
            'piece': piece.symbol().lower() if piece else None,
        }
        if move.promotion:
            normalized['promotion'] = chess.piece_symbol(move.promotion)
        if position.is_capture(move):
            if position.is_en_passant(move):
                normalized['captured'] = 'p'
            else:
                captured = position.piece_at(move.to_square)
                normalized['captured'] = captured.symbol().lower() if captured else None
        return normalized

import logging
import threading
from typing import Any, Optional, Protocol, Set

import chess

from chessroom.models import Role
from .oracle import PositionOracle
from .seats import SeatRegistry

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def send(self, connection_id: str, event: str, payload: Any = None) -> None: ...

    def broadcast(self, event: str, payload: Any = None) -> None: ...


class GameSession:
    """The single game: seats, the authoritative position and the rules
    for who may move.

    Every handler runs under one lock, so connect, move and disconnect
    events are applied one at a time in arrival order.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        oracle: Optional[PositionOracle] = None,
        registry: Optional[SeatRegistry] = None,
        starting_fen: Optional[str] = None,
        send_state_on_join: bool = True,
        notify_out_of_turn: bool = False,
    ) -> None:
        self.transport = transport
        self.oracle = oracle or PositionOracle()
        self.registry = registry or SeatRegistry()
        self.send_state_on_join = send_state_on_join
        self.notify_out_of_turn = notify_out_of_turn
        self._position = self.oracle.initial_position(starting_fen)
        self._connections: Set[str] = set()
        self._lock = threading.RLock()

    @property
    def position(self) -> chess.Board:
        with self._lock:
            return self._position.copy()

    @property
    def fen(self) -> str:
        with self._lock:
            return self.oracle.serialize(self._position)

    @property
    def turn(self) -> Role:
        with self._lock:
            return self.oracle.turn_of(self._position)

    @property
    def connections(self) -> Set[str]:
        with self._lock:
            return set(self._connections)

    def occupant_of(self, seat: Role) -> Optional[str]:
        with self._lock:
            return self.registry.occupant_of(seat)

    def on_connect(self, connection_id: str) -> Role:
        with self._lock:
            if connection_id in self._connections:
                return self.registry.seat_of(connection_id)
            self._connections.add(connection_id)
            role = self.registry.assign_seat(connection_id)
            logger.info(f"[connect] sid={connection_id} role={role.value} connections={len(self._connections)}")
            self._send(connection_id, 'roleAssigned', role.value)
            if self.send_state_on_join:
                self._send(connection_id, 'boardState', self.oracle.serialize(self._position))
            return role

    def on_move(self, connection_id: str, payload: Any) -> bool:
        """Admit, validate and publish one move.

        Returns True when the move was accepted and broadcast.
        """
        with self._lock:
            turn = self.oracle.turn_of(self._position)
            if self.registry.occupant_of(turn) != connection_id:
                logger.debug(f"[move-dropped] sid={connection_id} turn={turn.value} not the mover")
                if self.notify_out_of_turn:
                    self._send(connection_id, 'notYourTurn', payload)
                return False

            try:
                result = self.oracle.apply_move(self._position, payload)
            except Exception as exc:
                logger.warning(f"[move-error] sid={connection_id} payload={payload!r} error={exc}")
                self._send(connection_id, 'invalidMove', payload)
                return False

            if result is None:
                logger.info(f"[move-invalid] sid={connection_id} payload={payload!r}")
                self._send(connection_id, 'invalidMove', payload)
                return False

            self._position, normalized = result
            fen = self.oracle.serialize(self._position)
            logger.info(f"[move-accepted] sid={connection_id} side={turn.value} uci={normalized['uci']} san={normalized['san']}")
            self._broadcast('move', normalized)
            self._broadcast('boardState', fen)
            outcome = self.oracle.outcome(self._position)
            if outcome:
                logger.info(f"[game-over] result={outcome['result']} termination={outcome['termination']}")
                self._broadcast('gameOver', outcome)
            return True

    def on_disconnect(self, connection_id: str) -> Optional[Role]:
        with self._lock:
            self._connections.discard(connection_id)
            released = self.registry.release_seat(connection_id)
            logger.info(
                f"[disconnect] sid={connection_id} released={released.value if released else None} "
                f"connections={len(self._connections)}"
            )
            return released

    def _send(self, connection_id: str, event: str, payload: Any = None) -> None:
        if self.transport is None:
            return
        self.transport.send(connection_id, event, payload)

    def _broadcast(self, event: str, payload: Any = None) -> None:
        if self.transport is None:
            return
        self.transport.broadcast(event, payload)

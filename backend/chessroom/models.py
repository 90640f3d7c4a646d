from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from chessroom.services.session.errors import InvalidMoveError


class Role(str, Enum):
    WHITE = 'white'
    BLACK = 'black'
    OBSERVER = 'observer'


# Seat priority order for new connections
SEATS = (Role.WHITE, Role.BLACK)

PROMOTION_PIECES = ('q', 'r', 'b', 'n')


@dataclass(frozen=True)
class MoveCandidate:
    """An unvalidated move request as submitted by one connection."""
    origin: str
    destination: str
    promotion: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'MoveCandidate':
        if not isinstance(payload, dict):
            raise InvalidMoveError(f'move payload must be an object, got {type(payload).__name__}')
        origin = payload.get('from')
        destination = payload.get('to')
        if not isinstance(origin, str) or not isinstance(destination, str):
            raise InvalidMoveError('move requires "from" and "to" squares')
        promotion = payload.get('promotion') or None
        if promotion is not None:
            if not isinstance(promotion, str) or promotion.lower() not in PROMOTION_PIECES:
                raise InvalidMoveError(f'unknown promotion piece {promotion!r}')
            promotion = promotion.lower()
        return cls(origin=origin.strip().lower(), destination=destination.strip().lower(), promotion=promotion)

    def to_uci(self, with_promotion: bool = True) -> str:
        suffix = self.promotion if (with_promotion and self.promotion) else ''
        return f'{self.origin}{self.destination}{suffix}'

    def to_dict(self) -> Dict[str, Any]:
        data = {'from': self.origin, 'to': self.destination}
        if self.promotion:
            data['promotion'] = self.promotion
        return data

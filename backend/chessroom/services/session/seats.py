from typing import Dict, List, Optional

from chessroom.models import Role, SEATS


class SeatRegistry:
    """Which connection sits at White, which at Black.

    Anyone else is an observer. Not thread-safe on its own; the session
    mutates it only from inside its critical section.
    """

    def __init__(self) -> None:
        self._occupants: Dict[Role, Optional[str]] = {seat: None for seat in SEATS}

    def assign_seat(self, connection_id: str) -> Role:
        current = self.seat_of(connection_id)
        if current is not Role.OBSERVER:
            return current
        for seat in SEATS:
            if self._occupants[seat] is None:
                self._occupants[seat] = connection_id
                return seat
        return Role.OBSERVER

    def release_seat(self, connection_id: str) -> Optional[Role]:
        for seat in SEATS:
            if self._occupants[seat] == connection_id:
                self._occupants[seat] = None
                return seat
        return None

    def occupant_of(self, seat: Role) -> Optional[str]:
        return self._occupants.get(seat)

    def seat_of(self, connection_id: str) -> Role:
        for seat in SEATS:
            if self._occupants[seat] == connection_id:
                return seat
        return Role.OBSERVER

    def vacant_seats(self) -> List[Role]:
        return [seat for seat in SEATS if self._occupants[seat] is None]

    def snapshot(self) -> Dict[str, Optional[str]]:
        return {seat.value: occupant for seat, occupant in self._occupants.items()}

import threading
from typing import Dict, List, Optional

from tictactoe.models import Player, Room, SYMBOLS
from .errors import NameConflict, RoomNotFound


def canonical_key(name, max_length: Optional[int] = None) -> str:
    key = str(name or '').strip()
    if max_length:
        key = key[:max_length].rstrip()
    return key.upper()


class RoomStore:
    """Authoritative in-memory collection of rooms, keyed by canonical name.

    Every lookup goes through :meth:`key`, so create, join and link-join
    resolve the same client-supplied name to the same room.

    ``lock`` serialises every inbound event: callers hold it for the whole
    mutation plus the notifications that follow.
    """

    def __init__(self, max_name_length: Optional[int] = None):
        self._rooms: Dict[str, Room] = {}
        self.max_name_length = max_name_length
        self.lock = threading.RLock()

    def __len__(self):
        return len(self._rooms)

    def __contains__(self, name):
        return self.key(name) in self._rooms

    def key(self, name) -> str:
        return canonical_key(name, self.max_name_length)

    def create(self, name, sid: str, display_name: str,
               is_private: bool = False, password: Optional[str] = None,
               password_hash: Optional[str] = None) -> Room:
        """Create a room seated with its creator.

        ``password_hash`` lets callers hash the secret before taking ``lock``.
        """
        key = self.key(name)
        if key in self._rooms:
            raise NameConflict()
        creator = Player(id=sid, name=display_name, symbol=SYMBOLS[0])
        room = Room(key, creator, password=password if is_private else None)
        if is_private and password_hash:
            room.password_hash = password_hash
        self._rooms[key] = room
        return room

    def get(self, name) -> Room:
        room = self._rooms.get(self.key(name))
        if room is None:
            raise RoomNotFound()
        return room

    def find(self, name) -> Optional[Room]:
        return self._rooms.get(self.key(name))

    def delete(self, name) -> None:
        self._rooms.pop(self.key(name), None)

    def all(self) -> List[Room]:
        return list(self._rooms.values())

    def rooms_with_member(self, sid: str) -> List[Room]:
        return [room for room in self._rooms.values() if room.has_member(sid)]

    def list(self) -> List[dict]:
        return [room.to_summary() for room in self._rooms.values()]

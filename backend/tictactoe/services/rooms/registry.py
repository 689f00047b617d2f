from typing import Dict, List, Set


class ConnectionRegistry:
    """Live connections and the room keys each one has joined."""

    def __init__(self):
        self._rooms_by_sid: Dict[str, Set[str]] = {}

    def __contains__(self, sid):
        return sid in self._rooms_by_sid

    def __len__(self):
        return len(self._rooms_by_sid)

    def on_connect(self, sid: str) -> None:
        self._rooms_by_sid.setdefault(sid, set())

    def on_disconnect(self, sid: str) -> Set[str]:
        return self._rooms_by_sid.pop(sid, set())

    def attach(self, sid: str, room_key: str) -> None:
        self._rooms_by_sid.setdefault(sid, set()).add(room_key)

    def detach(self, sid: str, room_key: str) -> None:
        keys = self._rooms_by_sid.get(sid)
        if keys is not None:
            keys.discard(room_key)

    def rooms_for(self, sid: str) -> Set[str]:
        return set(self._rooms_by_sid.get(sid, ()))

    def connections(self) -> List[str]:
        return list(self._rooms_by_sid)

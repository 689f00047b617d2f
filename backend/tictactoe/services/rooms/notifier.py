from .registry import ConnectionRegistry
from .session import Change
from .store import RoomStore


class Notifier:
    """Fans out room snapshots and the room directory over Socket.IO.

    The directory goes whole to every connection in the registry; there
    are few rooms and two players per room, so no per-connection diffing
    is done.
    """

    def __init__(self, socketio, store: RoomStore, registry: ConnectionRegistry, namespace: str = '/'):
        self.socketio = socketio
        self.store = store
        self.registry = registry
        self.namespace = namespace

    def send(self, event: str, payload, sid: str) -> None:
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)

    def send_directory(self, sid: str) -> None:
        self.send('room-list', self.store.list(), sid)

    def broadcast_directory(self) -> None:
        directory = self.store.list()
        for sid in self.registry.connections():
            self.send('room-list', directory, sid)

    def publish_room(self, room) -> None:
        payload = room.to_dict()
        for sid in room.member_ids():
            self.send('room-updated', payload, sid)

    def publish(self, change: Change) -> None:
        if not change.accepted:
            return
        if change.room is not None:
            self.publish_room(change.room)
        if change.directory_changed:
            self.broadcast_directory()

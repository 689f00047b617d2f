import time
from typing import List, Optional

from tictactoe.models import WAITING


def sweep_idle_rooms(store, registry, notifier, ttl_sec: float, now: Optional[float] = None) -> List[str]:
    """Close rooms still waiting for an opponent after ``ttl_sec`` of inactivity.

    The stranded member receives ``room-closed`` and the directory is
    refreshed once if anything was removed. Returns the closed room names.
    """
    if ttl_sec <= 0:
        return []
    now = time.monotonic() if now is None else now
    closed = []
    with store.lock:
        for room in store.all():
            if room.status != WAITING or now - room.last_activity <= ttl_sec:
                continue
            for sid in room.member_ids():
                notifier.send('room-closed', {'name': room.name}, sid)
                registry.detach(sid, room.name)
            store.delete(room.name)
            closed.append(room.name)
        if closed:
            notifier.broadcast_directory()
    return closed


def start_room_reaper(app, socketio, router) -> bool:
    """Run ``sweep_idle_rooms`` periodically in a Socket.IO background task.

    - No-ops when ROOM_IDLE_TTL_SEC is 0
    - No-ops in TESTING mode unless ENABLE_REAPER_IN_TESTS is set
    """
    ttl = int(app.config.get('ROOM_IDLE_TTL_SEC', 0))
    if ttl <= 0:
        return False
    if app.config.get('TESTING') and not app.config.get('ENABLE_REAPER_IN_TESTS'):
        return False
    interval = max(1, int(app.config.get('ROOM_SWEEP_INTERVAL_SEC', 30)))

    def _worker():
        while True:
            socketio.sleep(interval)
            try:
                closed = sweep_idle_rooms(router.store, router.registry, router.notifier, ttl)
            except Exception:
                app.logger.exception("[reaper-error] sweep failed")
                continue
            if closed:
                app.logger.info(f"[reaper] closed idle rooms={','.join(closed)} ttl={ttl}s")

    socketio.start_background_task(_worker)
    app.logger.info(f"[reaper-start] ttl={ttl}s interval={interval}s")
    return True

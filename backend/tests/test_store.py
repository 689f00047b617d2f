import pytest

from tictactoe.models import Player
from tictactoe.services.rooms.errors import NameConflict, RoomNotFound
from tictactoe.services.rooms.registry import ConnectionRegistry
from tictactoe.services.rooms.store import RoomStore, canonical_key


def test_canonical_key_uppercases_and_strips():
    assert canonical_key('  abc1 ') == 'ABC1'
    assert canonical_key(None) == ''


def test_create_rejects_duplicate_regardless_of_case():
    store = RoomStore()
    store.create('Lobby', 'sid-a', 'Alice')
    with pytest.raises(NameConflict) as exc:
        store.create('LOBBY', 'sid-b', 'Bob')
    assert exc.value.message == 'Room ID already exists'
    assert len(store) == 1


def test_get_is_case_insensitive():
    store = RoomStore()
    room = store.create('lobby', 'sid-a', 'Alice')
    assert store.get('LoBbY') is room
    assert 'lobby' in store


def test_get_missing_room():
    store = RoomStore()
    with pytest.raises(RoomNotFound) as exc:
        store.get('nope')
    assert exc.value.message == 'Room ID not found'
    assert store.find('nope') is None


def test_delete_is_idempotent():
    store = RoomStore()
    store.create('abc', 'sid-a', 'Alice')
    store.delete('abc')
    store.delete('abc')
    assert len(store) == 0


def test_list_summaries():
    store = RoomStore()
    store.create('one', 'sid-a', 'Alice')
    store.create('two', 'sid-b', 'Bob', is_private=True, password='pw')
    summaries = sorted(store.list(), key=lambda s: s['name'])
    assert summaries == [
        {'name': 'ONE', 'players': 1, 'isPrivate': False, 'status': 'waiting'},
        {'name': 'TWO', 'players': 1, 'isPrivate': True, 'status': 'waiting'},
    ]


def test_rooms_with_member_scans_all_rooms():
    store = RoomStore()
    one = store.create('one', 'sid-a', 'Alice')
    store.create('two', 'sid-b', 'Bob')
    three = store.create('three', 'sid-c', 'Cara')
    three.players.append(Player(id='sid-a', name='Alice', symbol='O'))
    assert {r.name for r in store.rooms_with_member('sid-a')} == {one.name, three.name}
    assert store.rooms_with_member('sid-z') == []


def test_registry_tracks_rooms_per_connection():
    registry = ConnectionRegistry()
    registry.on_connect('sid-a')
    registry.attach('sid-a', 'ONE')
    registry.attach('sid-a', 'TWO')
    registry.detach('sid-a', 'TWO')
    assert 'sid-a' in registry
    assert registry.rooms_for('sid-a') == {'ONE'}
    assert registry.connections() == ['sid-a']

    assert registry.on_disconnect('sid-a') == {'ONE'}
    assert 'sid-a' not in registry
    assert registry.on_disconnect('sid-a') == set()
    registry.detach('sid-a', 'ONE')
    assert len(registry) == 0


def test_canonical_key_applies_length_limit():
    assert canonical_key('r' * 40, max_length=32) == 'R' * 32
    # Trimming never leaves trailing whitespace in the key
    assert canonical_key('ab' + ' ' * 30 + 'cd', max_length=32) == 'AB'
    assert canonical_key('abc', max_length=None) == 'ABC'


def test_store_lookups_share_the_create_trim():
    store = RoomStore(max_name_length=32)
    long_name = 'r' * 40
    room = store.create(long_name, 'sid-a', 'Alice')
    assert room.name == 'R' * 32
    assert store.get(long_name) is room
    assert store.get('R' * 32) is room
    assert long_name in store
    with pytest.raises(NameConflict):
        store.create('r' * 33, 'sid-b', 'Bob')
    store.delete(long_name)
    assert len(store) == 0


def test_create_accepts_precomputed_password_hash(flask_app):
    from tictactoe.models import hash_password

    store = RoomStore()
    room = store.create('x1', 'sid-a', 'Alice', is_private=True, password_hash=hash_password('pw'))
    assert room.is_private
    assert room.check_password('pw')
    assert not room.check_password('nope')
    assert not store.create('x2', 'sid-b', 'Bob', is_private=True).is_private

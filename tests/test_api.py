def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    data = res.get_json()
    assert data['active_rooms'] == 0


def test_room_state_not_found(client):
    res = client.get('/api/rooms/ZZZZ/state')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Room not found'


def test_room_state(client, registry):
    room = registry.create_room('alice')
    registry.join_room(room.code, 'bob')
    registry.claim(room.code, 'alice', 9)
    res = client.get(f'/api/rooms/{room.code.lower()}/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['room_code'] == room.code
    assert state['status'] == 'active'
    assert state['players'] == ['alice', 'bob']
    assert state['current_turn'] == 'bob'
    assert state['claimed_numbers'] == [9]
    assert state['winner'] is None
    assert 'board' not in state

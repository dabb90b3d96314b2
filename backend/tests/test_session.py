import json
import random

from arena.services.world.session import SessionManager


def place(sessions, x, y, value):
    item = sessions.generator.create()
    item.x, item.y, item.value = x, y, value
    sessions.world.add_collectible(item)
    return item


def put(sessions, sid, x, y):
    player = sessions.world.get_player(sid)
    player.x, player.y = x, y
    return player


def test_connect_sends_init_then_announces(sessions, dispatcher):
    sessions.connect('a')
    assert dispatcher.received_by('a')[0][0] == 'init'

    dispatcher.clear()
    place(sessions, 100, 100, 2)
    player_b = sessions.connect('b')

    init = dispatcher.received_by('b')
    assert [event for event, _ in init] == ['init']
    payload = init[0][1]
    assert payload['id'] == 'b'
    assert set(payload['players']) == {'a', 'b'}
    assert payload['collectibles'] == sessions.world.snapshot_collectibles()

    assert dispatcher.received_by('a') == [('new-player', player_b.to_dict())]


def test_new_player_starts_in_bounds_with_zero_score(sessions):
    for i in range(50):
        player = sessions.connect(f"p{i}")
        assert sessions.bounds.contains(player.x, player.y)
        assert player.score == 0


def test_absolute_move_scenario(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    put(sessions, 'a', 300, 300)
    coin = place(sessions, 605, 20, 3)
    dispatcher.clear()

    collected = sessions.move('a', {'x': 600, 'y': 20, 'deltaX': 5, 'deltaY': 0})

    player = sessions.world.get_player('a')
    assert player.position == (600, 20)
    assert player.score == 3
    assert collected == [coin]
    remaining = sessions.world.list_collectibles()
    assert coin.id not in [c.id for c in remaining]
    assert len(remaining) == 1
    assert remaining[0].id > coin.id

    updates = dispatcher.events('collectible-update')
    assert [to for to, _ in updates] == ['a', 'b']
    for _, payload in updates:
        assert payload['collected'] == coin.id
        assert payload['new'] == remaining[0].to_dict()
        assert payload['player'] == {'id': 'a', 'score': 3}

    assert dispatcher.events('player-update') == [('b', {'id': 'a', 'x': 600, 'y': 20, 'score': 3})]
    # Pickup announced before the position update
    assert [event for event, _ in dispatcher.received_by('b')] == ['collectible-update', 'player-update']


def test_two_overlapping_pickups(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    put(sessions, 'a', 300, 300)
    first = place(sessions, 205, 200, 1)
    second = place(sessions, 195, 200, 4)
    far = place(sessions, 500, 400, 5)
    dispatcher.clear()

    sessions.move('a', {'x': 200, 'y': 200})

    assert sessions.world.get_player('a').score == 5
    ids = [c.id for c in sessions.world.list_collectibles()]
    assert far.id in ids
    assert first.id not in ids and second.id not in ids
    assert len(ids) == 3

    updates = dispatcher.events('collectible-update')
    assert len(updates) == 4  # two pickups, two recipients each
    collected = [payload['collected'] for to, payload in updates if to == 'a']
    assert collected == [first.id, second.id]
    scores = [payload['player']['score'] for to, payload in updates if to == 'a']
    assert scores == [1, 5]
    spawned = {payload['new']['id'] for _, payload in updates}
    assert len(spawned) == 2


def test_collision_uses_clamped_position(sessions):
    sessions.connect('a')
    put(sessions, 'a', 300, 300)
    # The raw target sits on the coin; the clamped corner is out of reach
    coin = place(sessions, -10, -10, 2)
    sessions.move('a', {'x': -10, 'y': -10})
    assert sessions.world.get_player('a').position == (20, 20)
    assert sessions.world.get_player('a').score == 0
    assert coin in sessions.world.list_collectibles()


def test_relative_move(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    put(sessions, 'a', 100, 100)
    dispatcher.clear()

    sessions.move('a', {'direction': 'up', 'speed': 10})
    assert sessions.world.get_player('a').position == (100, 90)
    sessions.move('a', {'direction': 'right'})
    assert sessions.world.get_player('a').position == (104, 90)
    assert [to for to, _ in dispatcher.events('player-update')] == ['b', 'b']


def test_malformed_intent_is_ignored(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    before = put(sessions, 'a', 100, 100).position
    dispatcher.clear()

    for data in (None, {}, {'direction': 'nowhere'}, {'x': 'left', 'y': 1}):
        assert sessions.move('a', data) == []

    assert sessions.world.get_player('a').position == before
    assert dispatcher.sent == []


def test_move_for_unknown_player_is_noop(sessions, dispatcher):
    sessions.connect('a')
    dispatcher.clear()
    assert sessions.move('ghost', {'x': 100, 'y': 100}) == []
    assert dispatcher.sent == []
    assert sessions.world.get_player('ghost') is None


def test_disconnect_announces_and_is_idempotent(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    sessions.connect('c')
    put(sessions, 'b', 50, 60).score = 7
    dispatcher.clear()

    assert sessions.disconnect('a').id == 'a'
    assert dispatcher.events('player-disconnect') == [('b', 'a'), ('c', 'a')]

    dispatcher.clear()
    assert sessions.disconnect('a') is None
    assert sessions.disconnect('never-connected') is None
    assert dispatcher.sent == []

    b = sessions.world.get_player('b')
    assert (b.x, b.y, b.score) == (50, 60, 7)
    assert {p.id for p in sessions.world.list_players()} == {'b', 'c'}
    assert sessions.dispatcher.connections == ['b', 'c']


def test_disconnected_player_gets_no_more_messages(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    sessions.disconnect('b')
    dispatcher.clear()
    place(sessions, 100, 100, 1)
    put(sessions, 'a', 300, 300)
    sessions.move('a', {'x': 100, 'y': 100})
    assert dispatcher.received_by('b') == []
    assert [event for event, _ in dispatcher.received_by('a')] == ['collectible-update']


def test_invariants_hold_over_random_play(dispatcher):
    rng = random.Random(99)
    sessions = SessionManager.from_config({'INITIAL_COLLECTIBLES': 5}, dispatcher, rng=random.Random(5))
    sids = [f"p{i}" for i in range(4)]
    for sid in sids:
        sessions.connect(sid)

    initial = len(sessions.world.list_collectibles())
    assert initial == 5
    scores = {sid: 0 for sid in sids}
    issued = [c.id for c in sessions.world.list_collectibles()]

    for _ in range(3000):
        sid = rng.choice(sids)
        values = {c.id: c.value for c in sessions.world.list_collectibles()}
        if rng.random() < 0.7:
            data = {'x': rng.uniform(-50, 700), 'y': rng.uniform(-50, 520)}
        else:
            data = {'direction': rng.choice(['up', 'down', 'left', 'right']), 'speed': rng.uniform(1, 40)}
        collected = sessions.move(sid, data)

        player = sessions.world.get_player(sid)
        assert sessions.bounds.contains(player.x, player.y)
        assert len(sessions.world.list_collectibles()) == initial
        gained = sum(values[c.id] for c in collected)
        assert player.score == scores[sid] + gained
        scores[sid] = player.score

    for to, payload in dispatcher.events('collectible-update'):
        if to == 'p0':
            issued.append(payload['new']['id'])
    assert issued == sorted(issued)
    assert len(issued) == len(set(issued))


def test_huge_integer_coordinates_are_clamped(sessions, dispatcher):
    sessions.connect('a')
    sessions.connect('b')
    dispatcher.clear()

    sessions.move('a', json.loads('{"x": 1' + '0' * 400 + ', "y": 100}'))
    assert sessions.world.get_player('a').position == (620, 100)

    sessions.move('a', json.loads('{"x": -1' + '0' * 400 + ', "y": 100}'))
    assert sessions.world.get_player('a').position == (20, 100)
    assert [to for to, _ in dispatcher.events('player-update')] == ['b', 'b']


def test_huge_integer_speed_is_clamped(sessions):
    sessions.connect('a')
    put(sessions, 'a', 100.5, 200.25)

    sessions.move('a', json.loads('{"direction": "right", "speed": 1' + '0' * 400 + '}'))
    assert sessions.world.get_player('a').position == (620, 200.25)

    sessions.move('a', json.loads('{"direction": "up", "speed": -1' + '0' * 400 + '}'))
    assert sessions.world.get_player('a').position == (620, 460)


def test_infinite_float_coordinates_are_ignored(sessions, dispatcher):
    sessions.connect('a')
    before = put(sessions, 'a', 100, 100).position
    dispatcher.clear()
    sessions.move('a', json.loads('{"x": 1e400, "y": 100}'))
    assert sessions.world.get_player('a').position == before
    assert dispatcher.sent == []

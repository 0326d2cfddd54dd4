import pytest

from shootogeth.game_objects import Player, Vec2
from shootogeth.wire import DecodeError, Reader


def test_vec2_default_is_zero_and_identity():
    a = Vec2(1.5, -2.25)
    assert a + Vec2() == a
    assert Vec2() + a == a


def test_vec2_addition_commutes():
    a = Vec2(1.5, -2.25)
    b = Vec2(0.5, 4.0)
    assert a + b == b + a


def test_vec2_division_undoes_doubling():
    a = Vec2(3.0, -7.5)
    assert (a + a) / 2 == a


def test_vec2_encoded_size():
    assert len(Vec2(1.0, 2.0).encode()) == 8


def test_vec2_round_trip():
    v = Vec2(-0.5, 100.25)
    reader = Reader(v.encode())
    assert Vec2.decode(reader) == v
    assert reader.remaining == 0


def test_vec2_add_rejects_other_types():
    with pytest.raises(TypeError):
        Vec2(1.0, 1.0) + 3


def test_player_starts_at_rest_at_origin():
    player = Player(owner_client_id=4, entity_id=9)
    assert player.pos == Vec2()
    assert player.vel == Vec2()


def test_player_step_moves_by_velocity():
    vel = Vec2(1.5, -0.5)
    player = Player(owner_client_id=1, entity_id=2, vel=vel)
    player.step()
    assert player.pos == vel
    player.step()
    assert player.pos == vel + vel
    assert player.vel == vel


def test_player_encoded_size():
    assert len(Player(1, 2).encode()) == 24


def test_player_round_trip():
    player = Player(7, 42, Vec2(10.5, 20.0), Vec2(-1.0, 0.25))
    reader = Reader(player.encode())
    assert Player.decode(reader) == player
    assert reader.remaining == 0


def test_player_decode_truncated():
    encoded = Player(1, 2, Vec2(1.0, 1.0)).encode()
    with pytest.raises(DecodeError):
        Player.decode(Reader(encoded[:-1]))
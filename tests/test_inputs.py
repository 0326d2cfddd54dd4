import pytest

from shootogeth.client.inputs import ClientState, PlayingInputs

INPUT_NAMES = [
    "left",
    "right",
    "up",
    "down",
    "shoot",
    "confirm",
    "weapon_1",
    "weapon_2",
    "weapon_3",
    "weapon_4",
]


def test_default_inputs_all_released():
    inputs = PlayingInputs()
    assert [getattr(inputs, name) for name in INPUT_NAMES] == [False] * len(INPUT_NAMES)


def test_from_pressed_sets_named_fields_only():
    inputs = PlayingInputs.from_pressed(["up", "shoot"])
    assert inputs.up and inputs.shoot
    assert not inputs.down
    assert not inputs.weapon_1


def test_from_pressed_empty_equals_default():
    assert PlayingInputs.from_pressed([]) == PlayingInputs()


def test_from_pressed_rejects_unknown_name():
    with pytest.raises(ValueError):
        PlayingInputs.from_pressed(["jump"])


def test_client_state_defaults():
    state = ClientState()
    assert state.running is True
    assert state.time_since_last_update == 0.0
    assert state.players == []
    assert state.playing_inputs == PlayingInputs()
import pytest

from simeis.crew import CrewMemberType
from simeis.errors import ErrorKind, GameError


def test_message_without_arguments():
    err = GameError(ErrorKind.NO_PLAYER_KEY)
    assert err.message() == "No player key provided with the request"
    assert err.type_repr() == "NoPlayerKey"


def test_player_not_found():
    err = GameError(ErrorKind.PLAYER_NOT_FOUND, 7)
    assert err.message() == "No player was found with this ID: 7"
    assert err.type_repr() == "PlayerNotFound(7)"


def test_not_enough_money_formats_floats():
    err = GameError(ErrorKind.NOT_ENOUGH_MONEY, 100.0, 4500.5)
    assert err.message() == "Not enough money, need 4500.5, got 100"
    assert err.type_repr() == "NotEnoughMoney(100.0, 4500.5)"


def test_small_float_not_in_exponent_form():
    err = GameError(ErrorKind.NOT_ENOUGH_MONEY, 0.0, 1e-7)
    assert "e" not in err.message().split("need ")[1]


def test_player_already_exists_quotes_name_in_repr():
    err = GameError(ErrorKind.PLAYER_ALREADY_EXISTS, 3, "bob")
    assert err.message() == "Player bob already exists under the id 3"
    assert err.type_repr() == 'PlayerAlreadyExists(3, "bob")'


def test_invalid_argument():
    err = GameError(ErrorKind.INVALID_ARGUMENT, "crewtype")
    assert err.message() == "Argument crewtype has an invalid value"


def test_wrong_crew_type_uses_variant_name():
    err = GameError(ErrorKind.WRONG_CREW_TYPE, CrewMemberType.PILOT)
    assert err.message() == "This module requires a crew member of type Pilot"
    assert err.type_repr() == "WrongCrewType(Pilot)"


@pytest.mark.parametrize(
    "kind, args",
    [
        (ErrorKind.NO_PLAYER_KEY, (1,)),
        (ErrorKind.SHIP_NOT_FOUND, ()),
        (ErrorKind.NOT_ENOUGH_MONEY, (1.0,)),
    ],
)
def test_wrong_argument_count(kind, args):
    with pytest.raises(TypeError):
        GameError(kind, *args)


def test_raised_error_carries_kind_and_message():
    err = GameError(ErrorKind.CARGO_FULL)
    assert err.kind is ErrorKind.CARGO_FULL
    assert str(err) == "The cargo is full"
    assert err.message() == "The cargo is full"
    with pytest.raises(GameError, match="The cargo is full"):
        raise err
import pytest

from .policy		import validate, require, strength, rules
from .types		import PolicyViolation, WalletError


def test_policy_violations():
    assert validate( "Abcdef123!@#" ) == []
    assert validate( "short" ) == [
        "Password must be at least 12 characters",
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
        "Password must contain at least one special character",
    ]
    # Every rule is checked; none short-circuits another
    assert len( validate( "" )) == len( list( rules() )) == 5
    assert validate( None ) == validate( "" )

    # Exactly 12 characters is sufficient; 11 is not
    assert validate( "Abcdefgh123!" ) == []
    assert validate( "Abcdefg123!" ) == [ "Password must be at least 12 characters" ]


@pytest.mark.parametrize( "password,missing", [
    ( "ABCDEFGH123!",	"lowercase" ),
    ( "abcdefgh123!",	"uppercase" ),
    ( "Abcdefghijk!",	"number" ),
    ( "Abcdefghi123",	"special" ),
])
def test_policy_single_violation( password, missing ):
    violations			= validate( password )
    assert len( violations ) == 1
    assert missing in violations[0]


def test_policy_character_classes():
    # Only ASCII letters satisfy the letter classes, and only the fixed special set counts
    assert "Password must contain at least one uppercase letter" in validate( "ÉÉÉÉabcd123!" )
    assert "Password must contain at least one special character" in validate( "Abcdefgh123~" )
    for special in "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?":
        assert validate( f"Abcdefgh123{special}" ) == []

    # An alternative policy may be specified
    assert validate( "Abc1!", length=5 ) == []
    assert validate( "Abcdefgh1234~", specials="~" ) == []


def test_policy_require():
    assert require( "Abcdef123!@#" ) == "Abcdef123!@#"
    with pytest.raises( PolicyViolation ) as exc_info:
        require( "short" )
    assert len( exc_info.value.violations ) == 4
    assert isinstance( exc_info.value, WalletError )
    assert isinstance( exc_info.value, ValueError )
    assert "at least 12 characters" in str( exc_info.value )


def test_policy_strength():
    assert strength( "Abcdef123!@#" ) == (5, 5)
    assert strength( "short" ) == (1, 5)
    assert strength( "" ) == (0, 5)

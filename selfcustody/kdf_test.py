import hashlib

import pytest

from .			import kdf
from .kdf		import generate_salt, stretch, entropy, scrypt_stretch
from .types		import InputError

from .dependency_test	import substitute, nonrandom_bytes, fast_kdf, EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS


def test_generate_salt():
    salt			= generate_salt()
    assert len( salt ) == 64
    assert bytes.fromhex( salt )
    assert salt != generate_salt()

    assert generate_salt( random_bytes=nonrandom_bytes ) == SALT_ZEROS
    with pytest.raises( InputError ):
        generate_salt( random_bytes=lambda n: b'\0' * ( n - 1 ))


@substitute( kdf, 'RANDOM_BYTES', nonrandom_bytes )
def test_generate_salt_nonrandom():
    assert generate_salt() == SALT_ZEROS
    assert generate_salt( length=16 ) == "00" * 16


def test_stretch_message():
    """The stretched message is "<email>:<password>" (UTF-8), salted with the decoded hex salt."""
    calls			= []

    def recording_kdf( message, salt ):
        calls.append( (message, salt) )
        return fast_kdf( message, salt )

    stretched			= stretch( EMAIL_ALICE, PASSWORD_ALICE, "0x" + "ab" * 32, kdf=recording_kdf )
    assert calls == [ (b"alice@example.com:CorrectHorse9!Battery", b'\xab' * 32) ]
    assert stretched == fast_kdf( *calls[0] )

    stretch( "zoë@example.com", PASSWORD_ALICE, SALT_ZEROS, kdf=recording_kdf )
    assert calls[-1][0] == "zoë@example.com:CorrectHorse9!Battery".encode( 'UTF-8' )


def test_stretch_sensitivity():
    base			= stretch( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, kdf=fast_kdf )
    assert base == stretch( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, kdf=fast_kdf )
    assert base != stretch( EMAIL_ALICE, PASSWORD_ALICE, "00" * 31 + "01", kdf=fast_kdf )
    assert base != stretch( "bob@example.com", PASSWORD_ALICE, SALT_ZEROS, kdf=fast_kdf )
    assert base != stretch( EMAIL_ALICE, PASSWORD_ALICE + "x", SALT_ZEROS, kdf=fast_kdf )


@pytest.mark.parametrize( "email,password,salt", [
    ( "",		PASSWORD_ALICE,	SALT_ZEROS ),
    ( EMAIL_ALICE,	"",		SALT_ZEROS ),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	"" ),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	"xyz" ),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	"abc" ),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	None ),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	" ".join( ["00"] * 32 )),
    ( EMAIL_ALICE,	PASSWORD_ALICE,	b"\0" * 32 ),
    ( EMAIL_ALICE,	PASSWORD_ALICE + "\ud800", SALT_ZEROS ),
])
def test_stretch_invalid( email, password, salt ):
    with pytest.raises( InputError ):
        stretch( email, password, salt, kdf=fast_kdf )


def test_stretch_short():
    with pytest.raises( InputError ):
        stretch( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, kdf=lambda m, s: b'\0' * 15 )


def test_entropy():
    stretched			= bytes( range( 64 ))
    assert entropy( stretched ) == bytes( range( 16 ))
    assert entropy( stretched, bits=256 ) == bytes( range( 32 ))
    with pytest.raises( InputError ):
        entropy( b'\0' * 8 )


def test_stretch_scrypt():
    """The default stretch is scrypt N=2^15, r=8, p=1 w/ 64 bytes output; confirm against an
    independent scrypt implementation."""
    stretched			= stretch( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS )
    assert len( stretched ) == 64
    assert stretched == scrypt_stretch( b"alice@example.com:CorrectHorse9!Battery", b'\0' * 32 )
    assert stretched == hashlib.scrypt(
        b"alice@example.com:CorrectHorse9!Battery",
        salt	= b'\0' * 32,
        n	= 2**15,
        r	= 8,
        p	= 1,
        maxmem	= 2**26,
        dklen	= 64,
    )

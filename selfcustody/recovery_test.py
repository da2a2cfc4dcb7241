import codecs

import pytest

from .recovery		import produce_bip39, recover_bip39, normalize_bip39

from .dependency_test	import BIP39_ABANDON, BIP39_ZOO


@pytest.mark.parametrize( "entropy,expected_BIP39", [
    ( "00000000000000000000000000000000", BIP39_ABANDON ),
    ( "7f7f7f7f7f7f7f7f7f7f7f7f7f7f7f7f", "legal winner thank year wave sausage worth useful legal winner thank yellow" ),
    ( "80808080808080808080808080808080", "letter advice cage absurd amount doctor acoustic avoid letter advice cage above" ),
    ( "ffffffffffffffffffffffffffffffff", BIP39_ZOO ),
])
def test_produce_bip39_vectors( entropy, expected_BIP39 ):
    entropy			= codecs.decode( entropy, 'hex_codec' )
    mnemonic			= produce_bip39( entropy )
    assert mnemonic == expected_BIP39
    assert len( mnemonic.split() ) == 12
    assert recover_bip39( mnemonic, as_entropy=True ) == entropy


def test_produce_bip39_invalid():
    for octets in ( 0, 8, 15, 17, 64 ):
        with pytest.raises( ValueError ):
            produce_bip39( b'\0' * octets )
    assert len( produce_bip39( b'\0' * 32 ).split() ) == 24


def test_recover_bip39_seed():
    assert codecs.encode( recover_bip39( BIP39_ABANDON ), 'hex_codec' ).decode( 'ascii' ) \
        == '5eb00bbddcf069084889a8ab9155568165f5c453ccb85e70811aaed6f6da5fc19a5ac40b389cd370d086206dec8aa6c43daea6690f20ad3d8d48b2d2ce9e38e4'
    assert codecs.encode( recover_bip39( BIP39_ZOO ), 'hex_codec' ).decode( 'ascii' ) \
        == 'b6a6d8921942dd9806607ebc2750416b289adea669198769f2e15ed926c3aa92bf88ece232317b4ea463e84b0fcd3b53577812ee449ccc448eb45e6f544e25b6'
    # Any passphrase yields a different seed
    assert recover_bip39( BIP39_ABANDON, passphrase="TREZOR" ) != recover_bip39( BIP39_ABANDON )
    assert recover_bip39( BIP39_ABANDON, passphrase=b"TREZOR" ) == recover_bip39( BIP39_ABANDON, passphrase="TREZOR" )
    with pytest.raises( ValueError ):
        recover_bip39( BIP39_ABANDON, passphrase="TREZOR", as_entropy=True )


def test_recover_bip39_normalize():
    messy			= "  \n" + BIP39_ABANDON.upper().replace( ' ', '  \t' ) + "\n"
    assert recover_bip39( messy ) == recover_bip39( BIP39_ABANDON )
    assert normalize_bip39( messy ) == BIP39_ABANDON

    # Unambiguous (4+ letter) prefixes are expanded, when the language is known
    prefixes			= ' '.join( w[:4] for w in BIP39_ZOO.split() )
    assert normalize_bip39( prefixes, language="english" ) == BIP39_ZOO
    assert recover_bip39( prefixes, language="english" ) == recover_bip39( BIP39_ZOO )


@pytest.mark.parametrize( "mnemonic", [
    "",
    "   ",
    ' '.join( ["abandon"] * 12 ),		# checksum fails
    ' '.join( ["abandon"] * 11 + ["xyzzy"] ),	# unrecognized word
    "abandon abandon abandon",			# too short
])
def test_recover_bip39_invalid( mnemonic ):
    with pytest.raises( ValueError ):
        recover_bip39( mnemonic )

import threading

import bcrypt
import pytest

from .api		import assemble
from .session		import password_hash, password_matches, registration, login, Session
from .types		import DerivationFailure, InputError, PolicyViolation

from .dependency_test	import fast_kdf, EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS


@pytest.fixture
def wallet():
    return assemble( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, kdf=fast_kdf )


def test_password_hash():
    hashed			= password_hash( PASSWORD_ALICE, rounds=4 )
    assert hashed.startswith( "$2b$04$" )
    assert bcrypt.checkpw( PASSWORD_ALICE.encode( 'UTF-8' ), hashed.encode( 'UTF-8' ))
    assert password_matches( PASSWORD_ALICE, hashed )
    assert not password_matches( PASSWORD_ALICE + "x", hashed )
    assert not password_matches( PASSWORD_ALICE, "" )
    assert not password_matches( PASSWORD_ALICE, "not-a-bcrypt-hash" )
    with pytest.raises( InputError ):
        password_hash( "" )


def test_registration( wallet ):
    record			= registration( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, wallet, rounds=4 )
    assert set( record ) == { 'email', 'passwordHash', 'salt', 'btcAddress', 'ethAddress', 'solAddress' }
    assert record['email'] == EMAIL_ALICE
    assert record['salt'] == SALT_ZEROS
    assert record['btcAddress'] == wallet.btc.address
    assert record['ethAddress'] == wallet.eth.address
    assert record['solAddress'] == wallet.sol.address
    assert password_matches( PASSWORD_ALICE, record['passwordHash'] )

    # No secret ever crosses the account store boundary
    values			= ' '.join( record.values() )
    assert PASSWORD_ALICE not in values
    assert wallet.mnemonic.split()[0] not in values.split()
    for keys in wallet.chains().values():
        assert keys.privkey not in values


def test_login( wallet ):
    record			= registration( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, wallet, rounds=4 )
    assert login( EMAIL_ALICE, PASSWORD_ALICE, record['salt'], kdf=fast_kdf ) == wallet
    assert login( EMAIL_ALICE, PASSWORD_ALICE, record['salt'], expected=record, kdf=fast_kdf ) == wallet
    assert login( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS, expected=wallet.addresses(), kdf=fast_kdf ) == wallet

    # A regenerated salt derives a different wallet, which no longer matches the registration
    with pytest.raises( DerivationFailure ):
        login( EMAIL_ALICE, PASSWORD_ALICE, "11" * 32, expected=record, kdf=fast_kdf )
    with pytest.raises( PolicyViolation ):
        login( EMAIL_ALICE, "short", SALT_ZEROS, expected=record, kdf=fast_kdf )


def test_session( wallet ):
    session			= Session().store( wallet )
    assert len( session ) == 4
    assert session.mnemonic == wallet.mnemonic
    assert session['wallet_mnemonic'] == wallet.mnemonic
    assert session.get( 'btc_address' ) == session.address( 'BTC' ) == wallet.btc.address
    assert session.get( 'eth_address' ) == session.address( 'eth' ) == wallet.eth.address
    assert session.get( 'sol_address' ) == session.address( 'SOL' ) == wallet.sol.address
    assert 'eth_address' in session
    assert session.get( 'missing', 'default' ) == 'default'

    session.clear()
    assert len( session ) == 0
    assert session.mnemonic is None
    assert 'wallet_mnemonic' not in session
    with pytest.raises( KeyError ):
        session['wallet_mnemonic']


def test_session_context( wallet ):
    with Session() as session:
        session.store( wallet )
        assert session.mnemonic == wallet.mnemonic
    assert len( session ) == 0

    with pytest.raises( RuntimeError ):
        with Session() as session:
            session.store( wallet )
            raise RuntimeError( "logout" )
    assert session.mnemonic is None


def test_session_readers( wallet ):
    session			= Session().store( wallet )
    seen			= []

    def reader():
        for _ in range( 100 ):
            seen.append( session.address( 'ETH' ))

    threads			= [ threading.Thread( target=reader ) for _ in range( 4 ) ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == [ wallet.eth.address ] * 400

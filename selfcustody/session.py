#
# Python-selfcustody -- Deterministic Self-Custodial Multi-Chain Wallet Derivation
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-selfcustody is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-selfcustody is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#
from __future__		import annotations

import logging
import threading

from typing		import Dict, Optional

import bcrypt

from .api		import assemble
from .defaults		import BCRYPT_ROUNDS, SESSION_KEYS, REGISTRATION_KEYS
from .types		import MultiChainWallet, DerivationFailure, InputError

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# The boundary between the wallet derivation and the (external) account/session store.  Only the
# email, a bcrypt password hash, the salt and the three public addresses ever cross it; never the
# Mnemonic, the private keys or the plaintext password.
#

log				= logging.getLogger( __package__ )


def password_hash( password: str, rounds: Optional[int] = None ) -> str:
    """The bcrypt hash of the password, as stored by the account store."""
    if not password:
        raise InputError( "A password is required" )
    return bcrypt.hashpw( password.encode( 'UTF-8' ), bcrypt.gensalt( rounds=rounds or BCRYPT_ROUNDS )).decode( 'UTF-8' )


def password_matches( password: str, hashed: str ) -> bool:
    """Check a password against its stored bcrypt hash (the account store's login check)."""
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw( password.encode( 'UTF-8' ), hashed.encode( 'UTF-8' ))
    except ValueError as exc:
        log.warning( f"Unrecognized password hash: {exc}" )
        return False


def registration(
    email: str,
    password: str,
    salt: str,
    wallet: MultiChainWallet,
    rounds: Optional[int]	= None,
) -> Dict[str, str]:
    """The registration record sent to the account store, after the wallet has been derived."""
    record			= dict(
        email		= email,
        passwordHash	= password_hash( password, rounds=rounds ),
        salt		= salt,
    )
    for crypto,address in wallet.addresses().items():
        record[REGISTRATION_KEYS[crypto]] = address
    log.info( f"Registration for {email}: {commas_addresses( wallet )}" )
    return record


def commas_addresses( wallet: MultiChainWallet ) -> str:
    return ', '.join( f"{c} {a}" for c,a in wallet.addresses().items() )


def login(
    email: str,
    password: str,
    salt: str,
    expected: Optional[Dict[str, str]] = None,
    **kwds
) -> MultiChainWallet:
    """Re-derive the wallet locally from the credentials and the salt returned by the account store.

    If the store also returned the registered addresses (keyed by crypto, eg. 'BTC', or by
    registration key, eg. 'btcAddress'), confirm that the re-derived wallet matches them.

    """
    wallet			= assemble( email, password, salt, **kwds )
    for crypto,address in wallet.addresses().items():
        registered		= ( expected or {} ).get( crypto ) or ( expected or {} ).get( REGISTRATION_KEYS[crypto] )
        if registered and registered != address:
            raise DerivationFailure( f"Re-derived {crypto} address {address} does not match registered {registered}" )
    return wallet


class Session:
    """Session-scoped storage for the derived wallet's Mnemonic and addresses.

    A single writer (the authentication flow) stores the wallet; many readers (eg. wallet display)
    may get values concurrently.  On logout, clear drops every entry.  As a context manager, the
    Session is cleared on exit.

    """
    KEYS			= SESSION_KEYS

    def __init__( self ):
        self._lock		= threading.RLock()
        self._data		= {}

    def store( self, wallet: MultiChainWallet ) -> Session:
        values			= { self.KEYS['mnemonic']: wallet.mnemonic }
        for crypto,address in wallet.addresses().items():
            values[self.KEYS[crypto]] = address
        with self._lock:
            self._data.clear()
            self._data.update( values )
        log.debug( f"Session stored wallet {commas_addresses( wallet )}" )
        return self

    def get( self, key: str, default=None ):
        with self._lock:
            return self._data.get( key, default )

    def __getitem__( self, key: str ):
        with self._lock:
            return self._data[key]

    def __contains__( self, key ):
        with self._lock:
            return key in self._data

    def __len__( self ):
        with self._lock:
            return len( self._data )

    @property
    def mnemonic( self ) -> Optional[str]:
        return self.get( self.KEYS['mnemonic'] )

    def address( self, crypto: str ) -> Optional[str]:
        return self.get( self.KEYS[crypto.upper()] )

    def clear( self ):
        """Drop the session's references to the Mnemonic and addresses (eg. on logout).  This does not
        wipe the memory of the (immutable) str values themselves; any other references keep them alive.

        """
        with self._lock:
            self._data.clear()
        log.debug( "Session cleared" )

    def __enter__( self ):
        return self

    def __exit__( self, *exc ):
        self.clear()
        return False

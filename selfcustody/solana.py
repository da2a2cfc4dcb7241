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

from typing		import List, Optional, Tuple, Union

import base58
import hdwallet

from bip_utils		import Bip32Slip10Ed25519

from nacl.signing	import SigningKey
from nacl.encoding	import RawEncoder

from .defaults		import CRYPTO_PATHS, SOLANA_DERIVATION, SOLANA_SCHEMES
from .types		import DerivationFailure
from .util		import into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )

HARDENED			= 0x80000000


def path_indices( path: str ) -> List[int]:
    """Parse a derivation path eg. "m/44'/501'/0'/0'" into its (hardened) indices.  SLIP-0010
    Ed25519 supports only hardened derivation, so any non-hardened segment is rejected.

    """
    segs			= path.strip().split( '/' )
    if segs[0] != 'm':
        raise ValueError( f"Unrecognized HD wallet derivation path: {path!r}" )
    indices			= []
    for seg in filter( None, segs[1:] ):
        if not seg.endswith( ( "'", "h", "H" )) or not seg[:-1].isdigit():
            raise ValueError( f"Ed25519 derivation supports only hardened path segments; {seg!r} in {path!r}" )
        index			= int( seg[:-1] )
        if index >= HARDENED:
            raise ValueError( f"Path segment {seg!r} out of range in {path!r}" )
        indices.append( index | HARDENED )
    return indices


def slip10_ed25519(
    seed: bytes,
    path: str,
) -> Tuple[bytes, bytes]:
    """SLIP-0010 Ed25519 derivation; returns the 32-byte private key and chain code at path."""
    ctx				= Bip32Slip10Ed25519.FromSeed( seed )
    for index in path_indices( path ):
        ctx			= ctx.ChildKey( index )
    return ctx.PrivateKey().Raw().ToBytes(), ctx.ChainCode().ToBytes()


def keypair( secret: bytes ) -> Tuple[bytes, bytes]:
    """The Ed25519 (private, public) key pair for the 32-byte secret seed"""
    if len( secret ) != 32:
        raise DerivationFailure( f"Ed25519 requires a 32-byte secret; {len( secret )} bytes supplied" )
    signing			= SigningKey( secret )
    return (
        signing.encode( encoder=RawEncoder ),
        signing.verify_key.encode( encoder=RawEncoder ),
    )


def address( public_key: Union[bytes,str] ) -> str:
    """A Solana address is the Base58 encoding of the 32-byte Ed25519 public key."""
    public_key			= into_bytes( public_key )
    if len( public_key ) != 32:
        raise ValueError( f"Solana public keys are 32 bytes; {len( public_key )} bytes supplied" )
    return base58.b58encode( public_key ).decode( 'ascii' )


def address_valid( addr: str ) -> bool:
    try:
        return len( base58.b58decode( addr )) == 32
    except ValueError:
        return False


class SolanaHDWallet:
    """An hdwallet-like wrapper producing Solana Ed25519 keys, for use by Account.

    The 'bip32' scheme walks the path w/ standard secp256k1 BIP-32, and uses the resultant node's
    32-byte private key as the Ed25519 secret seed; the 'slip10' scheme uses SLIP-0010 Ed25519
    derivation, compatible w/ the Phantom and Solflare wallets.  These produce different addresses
    for the same seed!

    """
    SYMBOL			= "SOL"
    NAME			= "Solana"

    def __init__( self, scheme: Optional[str] = None, **kwds ):
        scheme			= ( scheme or SOLANA_DERIVATION ).lower()
        if scheme not in SOLANA_SCHEMES:
            raise ValueError( f"Solana derivation scheme {scheme!r} not recognized; specify one of {', '.join( SOLANA_SCHEMES )}" )
        self.scheme		= scheme
        self.clean_derivation()
        self._seed		= None

    def clean_derivation( self ):
        self._path		= None
        self._secret		= None
        self._public		= None
        return self

    def from_seed( self, seed: str ):
        self._seed		= into_bytes( seed )
        return self

    def from_path( self, path: Optional[str] = None ):
        path			= path or CRYPTO_PATHS[self.SYMBOL]
        if self._seed is None:
            raise DerivationFailure( "A seed is required before deriving a Solana key" )
        if self.scheme == 'slip10':
            secret,_		= slip10_ed25519( self._seed, path )
        else:
            node		= hdwallet.HDWallet( symbol="BTC" )
            node.from_seed( self._seed.hex() )
            node.from_path( path )
            secret		= into_bytes( node.private_key() or "" )
        self._secret,self._public = keypair( secret )
        self._path		= path
        log.debug( f"Derived {self.scheme} Solana key at {path}" )
        return self

    def path( self ) -> Optional[str]:
        return self._path

    def private_key( self ) -> Optional[str]:
        return self._secret.hex() if self._secret else None

    def public_key( self, compressed: bool = True ) -> Optional[str]:
        return self._public.hex() if self._public else None

    def address( self ) -> str:
        if not self._public:
            raise DerivationFailure( "No Solana key derived" )
        return address( self._public )

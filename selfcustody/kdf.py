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
import secrets

from typing		import Callable, Optional

from Crypto.Protocol.KDF import scrypt

from .defaults		import SALT_BYTES, SCRYPT_N, SCRYPT_R, SCRYPT_P, SCRYPT_LEN, BITS_DEFAULT
from .types		import InputError
from .util		import into_bytes, is_hex, timing

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )

# The one secure entropy source; monkey-patch it here for testing (see dependency_test.substitute)
RANDOM_BYTES			= secrets.token_bytes


def generate_salt(
    random_bytes: Optional[Callable[[int], bytes]] = None,
    length: int			= SALT_BYTES,
) -> str:
    """Generate a new account's 256-bit salt, hex encoded.  Call this exactly once per account; the
    salt is stored with the account record, and is required to re-derive the wallet at every login.

    """
    salt			= ( random_bytes or RANDOM_BYTES )( length )
    if len( salt ) != length:
        raise InputError( f"Salt source produced {len( salt )} bytes; {length} required" )
    return salt.hex()


def scrypt_stretch( message: bytes, salt: bytes ) -> bytes:
    """The fixed memory-hard stretch: scrypt N=2^15, r=8, p=1, 64-byte output."""
    return scrypt( message, salt, key_len=SCRYPT_LEN, N=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P )


@timing
def stretch(
    email: str,
    password: str,
    salt: str,
    kdf: Optional[Callable[[bytes, bytes], bytes]] = None,
) -> bytes:
    """Stretch "<email>:<password>" w/ the hex salt into 64 pseudo-random bytes.  Deterministic; the
    same three inputs always yield the same output.

    A different memory-hard kdf( message, salt ) may be supplied (eg. a deterministic stub, for
    testing); the default is scrypt_stretch.

    """
    if not email or not password:
        raise InputError( "Email and password are required" )
    if not isinstance( salt, str ) or not is_hex( salt ):
        raise InputError( "Salt must be a non-empty, even-length hex string" )
    salt_bytes			= into_bytes( salt )
    try:
        message			= f"{email}:{password}".encode( 'UTF-8' )
    except UnicodeEncodeError as exc:
        raise InputError( "Email and password must be valid Unicode text" ) from exc
    stretched			= ( kdf or scrypt_stretch )( message, salt_bytes )
    if len( stretched ) < BITS_DEFAULT // 8:
        raise InputError( f"Stretch produced only {len( stretched ) * 8} bits; at least {BITS_DEFAULT} required" )
    return bytes( stretched )


def entropy(
    stretched: bytes,
    bits: int			= BITS_DEFAULT,
) -> bytes:
    """Select the BIP-39 Mnemonic entropy from the stretched output: the leading 128 bits, for a
    12-word Mnemonic.  The remaining stretched bytes are not used.

    """
    octets			= bits // 8
    if len( stretched ) < octets:
        raise InputError( f"Insufficient stretched data for {bits}-bit entropy: {len( stretched ) * 8} bits" )
    return stretched[:octets]

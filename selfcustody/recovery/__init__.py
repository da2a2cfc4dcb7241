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

from typing		import Optional, Union

from mnemonic		import Mnemonic			# Requires passphrase as str

from ..util		import commas
from ..defaults		import BITS_BIP39

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


def produce_bip39(
    entropy: bytes,
    language: Optional[str]	= None,
) -> str:
    """Produce a BIP-39 Mnemonic from the provided entropy; 128 bits yields a 12-word phrase (w/ a
    4-bit checksum).  Deterministic.

    """
    if len( entropy ) * 8 not in BITS_BIP39:
        raise ValueError( f"BIP-39 requires {commas( BITS_BIP39, final='or' )}-bit entropy; {len( entropy ) * 8}-bit supplied" )
    return Mnemonic( language or "english" ).to_mnemonic( entropy )


def recover_bip39(
    mnemonic: str,
    passphrase: Optional[Union[str,bytes]] = None,
    as_entropy: Optional[bool]	= None,   # Recover original 128- or 256-bit Entropy (not 512-bit Seed)
    language: Optional[str]	= None,   # If desired, provide language (eg. if only prefixes are provided)
) -> bytes:
    """Recover the 512-bit BIP-39 generated seed (or the original Seed Entropy, if as_entropy is
    True) from a single BIP-39 Mnemonic Phrase, detecting the language.  The wallets derived here
    use no passphrase; one may be supplied, for compatibility w/ other BIP-39 wallets.

    Normalizes and validates the BIP-39 Mnemonic Phrase (which is often recovered as user input):
    - Removes excess whitespace and down-cases
    - Detects language if not provided
    - Expands unambiguous mnemonic prefixes (eg. 'ae' --> 'aerobic', 'acti' --> 'action')
    - Checks that the BIP-39 Phrase check bits are valid

    """
    if as_entropy and passphrase:
        raise ValueError( "When recovering original BIP-39 entropy, no passphrase may be specified" )
    if passphrase is None:
        passphrase		= ""

    # Polish up the supplied mnemonic, by eliminating extra spaces, leading/trailing newline(s)
    mnemonic_stripped		= ' '.join( w.lower() for w in mnemonic.split() )
    if mnemonic_stripped != mnemonic:
        log.info( "BIP-39 Mnemonic Phrase stripped of unnecessary whitespace" )
    if not mnemonic_stripped:
        raise ValueError( "A BIP-39 Mnemonic Phrase is required" )
    if not language:
        try:
            language		= Mnemonic.detect_language( mnemonic_stripped )
        except Exception as exc:
            raise ValueError( f"BIP-39 Mnemonic language not recognized: {exc}" ) from exc
        log.debug( f"BIP-39 Language detected: {language}" )
    m				= Mnemonic( language )
    mnemonic_expanded		= m.expand( mnemonic_stripped )
    if mnemonic_expanded != mnemonic_stripped:
        log.info( "BIP-39 Mnemonic Phrase prefixes expanded" )
    if not m.check( mnemonic_expanded ):
        unrecognized		= [ w for w in mnemonic_expanded.split() if w not in m.wordlist ]
        raise ValueError( f"BIP-39 Mnemonic check fails; {len( unrecognized )} unrecognized {m.language} words {commas( unrecognized )}" )
    if as_entropy:
        secret			= m.to_entropy( mnemonic_expanded )
        log.info( f"Recovered {len(secret)*8}-bit BIP-39 entropy from {language} mnemonic" )
    else:
        # python-mnemonic's Mnemonic requires passphrase as str (not bytes).  Only a fully
        # validated BIP-39 Mnemonic Phrase must ever be used here; Mnemonic.to_seed checks nothing.
        passphrase_bip39	= passphrase if isinstance( passphrase, str ) else passphrase.decode( 'UTF-8' )
        secret			= Mnemonic.to_seed( mnemonic_expanded, passphrase = passphrase_bip39 )
        log.info( f"Recovered {len(secret)*8}-bit BIP-39 seed from {language} mnemonic{' (and passphrase)' if passphrase_bip39 else ''}" )
    return bytes( secret )  # bytearray --> bytes


def normalize_bip39(
    mnemonic: str,
    language: Optional[str]	= None,
) -> str:
    """Return the validated, whitespace-normalized and prefix-expanded form of a BIP-39 Mnemonic."""
    entropy			= recover_bip39( mnemonic, as_entropy=True, language=language )
    return produce_bip39( entropy, language=language or Mnemonic.detect_language( ' '.join( mnemonic.lower().split() )))

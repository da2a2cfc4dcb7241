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
import argparse
import logging
import sys

from ..util		import log_setup, input_secure
from ..defaults		import SOLANA_SCHEMES
from ..api		import recover_wallet
from .			import recover_bip39

log				= logging.getLogger( __package__ )


def main( argv=None ):
    ap				= argparse.ArgumentParser(
        description = "Restore the BTC, ETH and SOL wallets derived from a 12-word recovery phrase.",
        epilog = """\
Enter the BIP-39 recovery phrase when prompted, or via -m|--mnemonic "...".  The same addresses
that were derived from your email, password and salt at registration are output.

""" )
    ap.add_argument( '-v', '--verbose', action="count",
                     default=0,
                     help="Display logging information." )
    ap.add_argument( '-q', '--quiet', action="count",
                     default=0,
                     help="Reduce logging output." )
    ap.add_argument( '-m', '--mnemonic',
                     default=None,
                     help="Supply the BIP-39 mnemonic phrase (not recommended; default: prompt)" )
    ap.add_argument( '--seed', action='store_true',
                     default=False,
                     help="Output the 512-bit BIP-39 seed (hex) instead of the addresses" )
    ap.add_argument( '--bitcoin-format', default=None, choices=('bech32', 'legacy'),
                     help="Bitcoin address format (default: bech32)" )
    ap.add_argument( '--solana-scheme', default=None, choices=SOLANA_SCHEMES,
                     help="Solana key derivation scheme" )
    args			= ap.parse_args( argv )

    log_setup( args.verbose, args.quiet )

    mnemonic			= args.mnemonic
    if mnemonic:
        log.warning( "It is recommended to not use '-m|--mnemonic <phrase>'; omit it to be prompted" )
    else:
        try:
            mnemonic		= input_secure( "Enter BIP-39 mnemonic: ", secret=True )
        except (KeyboardInterrupt, EOFError):
            return 0
    try:
        if args.seed:
            print( recover_bip39( mnemonic ).hex() )
            return 0
        wallet			= recover_wallet( mnemonic, format=args.bitcoin_format, scheme=args.solana_scheme )
    except Exception as exc:
        log.error( f"Could not recover wallet from supplied mnemonic: {exc}" )
        return 1
    for keys in wallet.chains().values():
        print( f"{keys.crypto:4} {keys.path:20} {keys.address}" )
    return 0


if __name__ == "__main__":
    sys.exit( main() )

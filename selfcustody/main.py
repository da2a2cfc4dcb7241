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

import argparse
import json
import logging

import tabulate

from .api		import assemble
from .kdf		import generate_salt
from .policy		import validate
from .session		import registration
from .types		import WalletError
from .util		import log_setup, input_secure
from .defaults		import SOLANA_SCHEMES, SOLANA_DERIVATION

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


def main( argv=None ):
    ap				= argparse.ArgumentParser(
        description = "Derive the self-custodial BTC, ETH and SOL wallets for an email, password and salt.",
        epilog = """\
The same email, password and salt always derive the same 12-word recovery phrase and wallets.
Generate the salt once (--new-salt) when the account is created, and keep it with the account;
a different salt derives entirely different wallets.

""" )
    ap.add_argument( '-v', '--verbose', action="count",
                     default=0,
                     help="Display logging information." )
    ap.add_argument( '-q', '--quiet', action="count",
                     default=0,
                     help="Reduce logging output." )
    ap.add_argument( '-e', '--email',
                     required=True,
                     help="The account's email address" )
    ap.add_argument( '-p', '--password',
                     default='-',
                     help="The account's password; '-' reads it from stdin (the default)" )
    ap.add_argument( '-s', '--salt',
                     default=None,
                     help="The account's hex salt; '-' reads it from stdin" )
    ap.add_argument( '--new-salt', action='store_true',
                     default=False,
                     help="Generate a new random salt for a new account (output w/ the registration)" )
    ap.add_argument( '--register', action='store_true',
                     default=False,
                     help="Output the JSON registration record (email, bcrypt password hash, salt and addresses)" )
    ap.add_argument( '--show', action='store_true',
                     default=False,
                     help="Show the recovery phrase and derived keys (secret!)" )
    ap.add_argument( '--no-show', dest="show", action='store_false',
                     help="Disable showing the recovery phrase and derived keys" )
    ap.add_argument( '--bitcoin-format', default=None, choices=('bech32', 'legacy'),
                     help="Bitcoin address format (default: bech32)" )
    ap.add_argument( '--solana-scheme', default=None, choices=SOLANA_SCHEMES,
                     help=f"Solana key derivation scheme (default: {SOLANA_DERIVATION})" )
    args			= ap.parse_args( argv )

    log_setup( args.verbose, args.quiet )
    log.debug( f"args: {args!r}" )

    if args.new_salt == bool( args.salt ):
        log.error( "Supply exactly one of -s|--salt <hex> or --new-salt" )
        return 2
    salt			= args.salt
    if args.new_salt:
        salt			= generate_salt()
        log.warning( "Generated a new salt; it must be stored w/ the account, to re-derive these wallets" )
    try:
        if salt == '-':
            salt		= input_secure( 'Account salt (hex): ', secret=False ).strip()
        password		= args.password
        if password == '-':
            password		= input_secure( 'Account password: ', secret=True )
        else:
            log.warning( "It is recommended to not use '-p|--password <password>'; specify '-' to read from input" )
    except (KeyboardInterrupt, EOFError):
        log.error( "Input aborted; no wallet derived" )
        return 1

    violations			= validate( password )
    if violations:
        for violation in violations:
            log.error( violation )
        return 1

    try:
        wallet			= assemble(
            args.email, password, salt,
            format	= args.bitcoin_format,
            scheme	= args.solana_scheme,
        )
    except WalletError as exc:
        log.error( f"Failed to derive wallet: {exc}" )
        return 1

    if args.show:
        show_table		= [ [ "Mnemonic:", "", wallet.mnemonic ], tabulate.SEPARATING_LINE ]
        for keys in wallet.chains().values():
            show_table.append( [ f"{keys.crypto} Address:", keys.path, keys.address ] )
            show_table.append( [ f"{keys.crypto} Private:", "", keys.privkey ] )
            show_table.append( [ f"{keys.crypto} Public:",  "", keys.pubkey ] )
        print( tabulate.tabulate( show_table, headers=("Description", "Path", "Value"), tablefmt='orgtbl' ))

    if args.register:
        print( json.dumps( registration( args.email, password, salt, wallet ), indent=4 ))
    elif not args.show:
        for keys in wallet.chains().values():
            print( f"{keys.crypto:4} {keys.path:20} {keys.address}" )
    return 0

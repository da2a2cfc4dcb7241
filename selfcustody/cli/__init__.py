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

from __future__          import annotations

import click
import json
import logging

from ..			import api
from ..kdf		import generate_salt
from ..policy		import validate
from ..session		import registration
from ..types		import WalletError
from ..util		import log_setup, input_secure
from ..defaults		import SOLANA_SCHEMES

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Provide basic CLI access to the selfcustody API.

Output generally defaults to JSON.  Use -v for more details, and --no-json to emit standard text output instead.
"""

log				= logging.getLogger( __package__ )


@click.group()
@click.option('-v', '--verbose', count=True)
@click.option('-q', '--quiet', count=True)
@click.option( '--json/--no-json', default=True, help="Output JSON (the default)")
def cli( verbose, quiet, json ):
    cli.verbosity		= verbose - quiet
    log_setup( verbose, quiet )
    cli.json			= json
cli.verbosity			= 0  # noqa: E305
cli.json			= False


def secret_input( value, prompt ):
    if value == '-':
        return input_secure( prompt, secret=True )
    if value:
        log.warning( f"It is recommended to not supply the {prompt.rstrip(': ').lower()} on the command line; specify '-' to read from input" )
    return value


@click.command()
def salt():
    """Generate a new account's random 256-bit hex salt"""
    salt			= generate_salt()
    click.echo( json.dumps( salt ) if cli.json else salt )


@click.command()
@click.option( "--password", default='-', help="The password to check; '-' reads it from stdin (the default)" )
def policy( password ):
    """Check a password against the password policy; lists every violation"""
    violations			= validate( secret_input( password, 'Password: ' ))
    if cli.json:
        click.echo( json.dumps( violations, indent=4 ))
    else:
        for violation in violations:
            click.echo( violation )
    if violations:
        raise SystemExit( 1 )


@click.command()
@click.option( "--email", help="The account's email address" )
@click.option( "--password", default='-', help="The account's password; '-' reads it from stdin (the default)" )
@click.option( "--salt", help="The account's hex salt" )
@click.option( "--mnemonic", help="Instead of credentials, a BIP-39 recovery phrase; '-' reads it from stdin" )
@click.option( "--format", type=click.Choice( ['bech32', 'legacy'] ), help="Bitcoin address format (default: bech32)" )
@click.option( "--scheme", type=click.Choice( SOLANA_SCHEMES ), help="Solana key derivation scheme" )
def addresses( email, password, salt, mnemonic, format, scheme ):
    """Output the BTC, ETH and SOL addresses for an account's credentials, or for a recovery phrase"""
    try:
        if mnemonic:
            wallet		= api.recover_wallet( secret_input( mnemonic, 'Mnemonic: ' ), format=format, scheme=scheme )
        elif email and salt:
            wallet		= api.assemble( email, secret_input( password, 'Password: ' ), salt, format=format, scheme=scheme )
        else:
            raise click.UsageError( "Supply --email and --salt, or --mnemonic" )
    except WalletError as exc:
        raise click.ClickException( str( exc ))
    if cli.json:
        if cli.verbosity > 0:
            records		= [ [ k.crypto, k.path, k.address ] for k in wallet.chains().values() ]
        else:
            records		= wallet.addresses()
        click.echo( json.dumps( records, indent=4 ))
    else:
        for keys in wallet.chains().values():
            if cli.verbosity > 0:
                click.echo( f"{keys.crypto:5} {keys.path:20} {keys.address}" )
            else:
                click.echo( f"{keys.address}" )


@click.command()
@click.option( "--email", required=True, help="The new account's email address" )
@click.option( "--password", default='-', help="The new account's password; '-' reads it from stdin (the default)" )
@click.option( "--salt", default=None, help="The account's hex salt (default: generate a new one)" )
def register( email, password, salt ):
    """Derive a new account's wallet, and output its registration record (never any secrets)"""
    password			= secret_input( password, 'Password: ' )
    salt			= salt or generate_salt()
    try:
        wallet		= api.assemble( email, password, salt )
    except WalletError as exc:
        raise click.ClickException( str( exc ))
    click.echo( json.dumps( registration( email, password, salt, wallet ), indent=4 ))


cli.add_command( salt )
cli.add_command( policy )
cli.add_command( addresses )
cli.add_command( register )

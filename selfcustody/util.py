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

import getpass
import logging
import string
import sys

from functools		import wraps
from time		import perf_counter as timer
from typing		import Union

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( "util" )


log_cfg				= {
    "level":	logging.WARNING,
    "datefmt":	'%Y-%m-%d %H:%M:%S',
    "format":	'%(asctime)s %(name)-16.16s %(message)s',
}

log_levelmap 			= {
    -2: logging.FATAL,
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def log_level( adjust ):
    """Return a logging level corresponding to the +'ve/-'ve adjustment"""
    return log_levelmap[
        max(
            min(
                adjust,
                max( log_levelmap.keys() )
            ),
            min( log_levelmap.keys() )
        )
    ]


def log_setup( verbose=0, quiet=0 ):
    """Set up logging from -v/-q counts; also handles the degenerate case where logging has
    *already* been set up (and basicConfig is a NO-OP), by (also) setting the root logging level.

    """
    log_cfg['level']		= log_level( verbose - quiet )
    logging.basicConfig( **log_cfg )
    if verbose or quiet:
        logging.getLogger().setLevel( log_cfg['level'] )
    return log_cfg['level']


#
# @util.timing
#
def timing( fun=None, level=logging.DEBUG ):
    """A timing decorator which logs the call duration (at logging.DEBUG, by default).  Only the
    function's name is logged; never its arguments, which are usually secrets.

    """
    def decorator( fun ):
        @wraps( fun )
        def wrap( *args, **kwds ):
            beg			= timer()
            try:
                return fun( *args, **kwds )
            finally:
                if log.isEnabledFor( level ):
                    log.log( level, f"{fun.__name__} took {timer() - beg:.3f}s" )
        return wrap
    return decorator( fun ) if fun else decorator


def commas( seq, final=None ):  # supply alternative final connector, eg. 'and', 'or'
    seq				= list( map( str, seq ))
    if final and len( seq ) > 1:
        seq			= seq[:-2] + [f"{seq[-2]} {final} {seq[-1]}"]
    return ', '.join( seq )


def is_hex( data: str ) -> bool:
    """True iff data is a non-empty, even-length hex string (w/ optional '0x' prefix)"""
    if data[:2].lower() == '0x':
        data			= data[2:]
    return bool( data ) and len( data ) % 2 == 0 and all( c in string.hexdigits for c in data )


def into_bytes( data: Union[bytes,str] ) -> bytes:
    """Convert hex data w/ optional '0x' prefix into bytes; raises ValueError on non-hex data"""
    if isinstance( data, (bytes,bytearray) ):
        return bytes( data )
    if data[:2].lower() == '0x':
        data			= data[2:]
    return bytes.fromhex( data )


def input_secure( prompt, secret=True, file=None ):
    """When getting secure (optionally secret) input from standard input, we don't want to use
    getpass, which attempts to read from /dev/tty.

    """
    if ( file or sys.stdin ).isatty():
        # From TTY; provide prompts, and do not echo secret input
        if secret:
            return getpass.getpass( prompt, stream=file )
        elif file:
            return file.readline()
        else:
            return input( prompt )
    else:
        # Not a TTY; don't litter pipeline output with prompts
        if file:
            return file.readline().rstrip( '\n' )
        return input()

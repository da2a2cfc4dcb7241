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
import string

from typing		import List, Optional, Tuple

from .defaults		import PASSWORD_LENGTH_MIN, PASSWORD_SPECIALS
from .types		import PolicyViolation

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


def rules(
    length: Optional[int]	= None,
    specials: Optional[str]	= None,
):
    """Yields each (message, predicate) password rule, in reporting order."""
    length			= length or PASSWORD_LENGTH_MIN
    specials			= specials or PASSWORD_SPECIALS
    yield f"Password must be at least {length} characters",		lambda p: len( p ) >= length
    yield "Password must contain at least one lowercase letter",	lambda p: any( c in string.ascii_lowercase for c in p )
    yield "Password must contain at least one uppercase letter",	lambda p: any( c in string.ascii_uppercase for c in p )
    yield "Password must contain at least one number",			lambda p: any( c in string.digits for c in p )
    yield "Password must contain at least one special character",	lambda p: any( c in specials for c in p )


def validate(
    password: str,
    length: Optional[int]	= None,
    specials: Optional[str]	= None,
) -> List[str]:
    """Check every password rule, and return all the violation messages; an empty list means the
    password is acceptable.  No rule short-circuits another.

        >>> validate( "Abcdef123!@#" )
        []
        >>> len( validate( "short" ))
        4

    """
    return [
        message
        for message,satisfied in rules( length=length, specials=specials )
        if not satisfied( password or "" )
    ]


def require( password: str, **kwds ) -> str:
    """Raise a PolicyViolation listing every failed rule, or return the acceptable password."""
    violations			= validate( password, **kwds )
    if violations:
        log.info( f"Password fails {len( violations )} policy rule(s)" )
        raise PolicyViolation( violations )
    return password


def strength( password: str, **kwds ) -> Tuple[int, int]:
    """The number of rules satisfied, of the total; eg. for a registration form's strength meter."""
    total			= len( list( rules( **kwds )))
    return total - len( validate( password, **kwds )), total

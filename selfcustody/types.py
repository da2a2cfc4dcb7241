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

from collections	import namedtuple

__all__				= (
    "WalletError", "PolicyViolation", "InputError", "DerivationFailure",
    "ChainKeys", "MultiChainWallet",
)


class WalletError( Exception ):
    """Base of all errors raised while deriving a wallet."""


class InputError( WalletError, ValueError ):
    """Missing email/password, or a malformed (eg. non-hex) salt.  The caller must re-prompt."""


class PolicyViolation( WalletError, ValueError ):
    """One or more password rules failed.  Carries every violation, not just the first."""
    def __init__( self, violations ):
        self.violations		= list( violations )
        super().__init__( ', '.join( self.violations ))


class DerivationFailure( WalletError ):
    """A cryptographic primitive failed to produce a key at the expected path.  Fatal for this
    attempt; no partial wallet is ever returned.

    """


class ChainKeys( namedtuple( 'ChainKeys', ('crypto', 'path', 'privkey', 'pubkey', 'address') )):
    """One chain's key set; privkey/pubkey are hex (no 0x prefix), address is the chain-native
    encoding.  The repr omits the private key.

    """
    __slots__			= ()

    def __repr__( self ):
        return f"{self.__class__.__name__}({self.crypto} {self.path}: {self.address})"


class MultiChainWallet( namedtuple( 'MultiChainWallet', ('mnemonic', 'seed', 'btc', 'eth', 'sol') )):
    """The 12-word Mnemonic, its 512-bit BIP-39 seed, and the BTC, ETH and SOL ChainKeys all derived
    from that one seed.  The repr shows only the addresses, the only values that may ever leave the
    client.

    """
    __slots__			= ()

    def chains( self ):
        return dict( BTC=self.btc, ETH=self.eth, SOL=self.sol )

    def addresses( self ):
        return { crypto: keys.address for crypto,keys in self.chains().items() }

    def __repr__( self ):
        return f"{self.__class__.__name__}({', '.join( f'{c}: {a}' for c,a in self.addresses().items() )})"

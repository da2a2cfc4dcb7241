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

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# Password Policy
#
#     Every rule is checked, so that all violations may be reported to the user at once.  The
# special-character set is fixed; changing it changes which existing passwords are acceptable.
#
PASSWORD_LENGTH_MIN		= 12
PASSWORD_SPECIALS		= "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

#
# Salt and Memory-Hard Stretching (scrypt)
#
#     The salt is generated once per account and stored alongside the account record; it must
# never be regenerated, or the derived wallet changes irrecoverably.  The scrypt parameters are
# likewise fixed forever: N=2^15, r=8, p=1, 64 bytes of output.
#
SALT_BYTES			= 32
SCRYPT_N			= 2**15
SCRYPT_R			= 8
SCRYPT_P			= 1
SCRYPT_LEN			= 64

# Only the first 128 bits of the stretched output become BIP-39 entropy (a 12-word Mnemonic)
BITS_DEFAULT			= 128
BITS_BIP39			= (128, 160, 192, 224, 256)

#
# HD Wallet Derivation Paths (Standard BIP-44)
#
#     m / purpose' / coin_type' / account' / change / address_index
#
# Exactly one account per chain is derived for a set of credentials; supporting more would require
# persisting a chosen account index.  Solana's path is fully hardened (as required by SLIP-0010).
#
CRYPTO_PATHS			= dict(
    BTC		= "m/44'/0'/0'/0/0",
    ETH		= "m/44'/60'/0'/0/0",
    SOL		= "m/44'/501'/0'/0'",
)
CRYPTOCURRENCIES		= ('BTC', 'ETH', 'SOL')

# Address formats: BTC P2WPKH (Bech32 bc1q...), or P2PKH (Base58Check 1...)
CRYPTO_FORMAT			= dict(
    BTC		= "bech32",
    ETH		= "legacy",
    SOL		= "base58",
)

# Solana key derivation scheme: 'bip32' (secp256k1 BIP-32 node private key used as the Ed25519
# seed; the deployed behaviour) or 'slip10' (SLIP-0010 Ed25519, as used by Phantom/Solflare).
SOLANA_DERIVATION		= 'bip32'
SOLANA_SCHEMES			= ('bip32', 'slip10')

#
# Account Store / Session boundary
#
BCRYPT_ROUNDS			= 10
SESSION_KEYS			= dict(
    mnemonic	= "wallet_mnemonic",
    BTC		= "btc_address",
    ETH		= "eth_address",
    SOL		= "sol_address",
)
REGISTRATION_KEYS		= dict(
    BTC		= "btcAddress",
    ETH		= "ethAddress",
    SOL		= "solAddress",
)

# Background derivation; the stretch step takes on the order of hundreds of milliseconds
BACKGROUND_WORKERS		= 1

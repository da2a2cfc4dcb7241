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

import hashlib
import json
import logging

from concurrent.futures	import Executor, Future, ThreadPoolExecutor
from typing		import Callable, Optional, Tuple, Union

import base58
import eth_account
import eth_utils
import hdwallet

from Crypto.Cipher	import AES
from Crypto.Protocol.KDF import scrypt
from bip_utils.bech32	import SegwitBech32Decoder, SegwitBech32Encoder, Bech32ChecksumError

from .defaults		import CRYPTO_PATHS, CRYPTO_FORMAT, CRYPTOCURRENCIES, BITS_DEFAULT, BACKGROUND_WORKERS
from .kdf		import stretch, entropy
from .policy		import require
from .recovery		import produce_bip39, recover_bip39, normalize_bip39
from .solana		import SolanaHDWallet, address_valid as solana_address_valid
from .types		import ChainKeys, MultiChainWallet, DerivationFailure, InputError
from .util		import commas, into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

__all__				= (
    "Account", "derive", "assemble", "assemble_background", "recover_wallet", "derive_wallet",
    "credentials_mnemonic", "address_valid", "segwit_address_valid",
)

log				= logging.getLogger( __package__ )


class Account:
    """A Cryptocurrency "Account" / Wallet at one fixed HD derivation path, based on a variety of
    underlying Python crypto-asset support modules.  Bitcoin and Ethereum use python-hdwallet;
    Solana's Ed25519 keys use an hdwallet-like wrapper (see solana.SolanaHDWallet).

    The required hdwallet API calls are:

      .from_seed	-- start deriving from the provided hex seed
      .clean_derivation	-- forget any prior derivation path
      .from_path	-- derive a wallet from the specified derivation path
      .path		-- return the current wallet derivation path
      .private_key	-- return the current wallet's private key
      .public_key	-- return the current wallet's (compressed) public key

    | Crypto | Format | Path              | Address  | Encoding                        |
    |--------+--------+-------------------+----------+---------------------------------|
    | BTC    | bech32 | m/44'/  0'/0'/0/0 | bc1q...  | P2WPKH Bech32                   |
    |        | legacy | m/44'/  0'/0'/0/0 | 1...     | P2PKH Base58Check               |
    | ETH    | legacy | m/44'/ 60'/0'/0/0 | 0x...    | EIP-55 checksummed Keccak hash  |
    | SOL    | base58 | m/44'/501'/0'/0'  | (32B)... | Base58 of Ed25519 public key    |

    """
    CRYPTO_SYMBOLS		= dict(
        # Convert known Symbols to official Cryptocurrency Name.  By convention, Symbols are
        # capitalized to avoid collisions with names
        BTC		= 'Bitcoin',
        ETH		= 'Ethereum',
        SOL		= 'Solana',
    )
    CRYPTO_NAMES		= dict(
        bitcoin		= 'BTC',
        ethereum	= 'ETH',
        solana		= 'SOL',
    )

    CRYPTO_FORMAT_SEMANTIC	= dict(
        BTC		= dict(
            legacy	= "p2pkh",
            bech32	= "p2wpkh",
        ),
        ETH		= dict(
            legacy	= "p2pkh",
        ),
        SOL		= dict(
            base58	= None,
        ),
    )

    # Cryptocurrencies not supported by python-hdwallet get an hdwallet-like wrapper class
    CRYPTO_WALLET_CLS		= dict(
        SOL		= SolanaHDWallet,
    )

    ETHJS_ENCRYPT		= set( ('ETH',) )		# Can be encrypted w/ Ethereum JSON wallet
    BIP38_ENCRYPT		= set( ('BTC',) )		# Can be encrypted w/ BIP-38

    @classmethod
    def supported( cls, crypto ):
        """Validates that the specified cryptocurrency is supported and returns the normalized "SYMBOL"
        for it, or raises an a ValueError.  Eg. "ETH"/"Ethereum" --> "ETH"

        """
        validated		= cls.CRYPTO_NAMES.get(
            crypto.lower(),
            crypto.upper() if crypto.upper() in cls.CRYPTO_SYMBOLS else None
        )
        log.debug( f"Validating {crypto!r} yields: {validated!r}" )
        if validated:
            return validated
        raise ValueError( f"{crypto} not presently supported; specify {commas( CRYPTOCURRENCIES, final='or' )}" )

    @classmethod
    def formats( cls, crypto ):
        return tuple( cls.CRYPTO_FORMAT_SEMANTIC[cls.supported( crypto )] )

    def __str__( self ):
        """Until from_seed is invoked, may not have an address or derivation path."""
        address			= None
        try:
            address		= self.address
        except Exception:
            pass
        return f"{self.crypto}: {address}"

    def __repr__( self ):
        return f"{self.__class__.__name__}({self} @{self.path})"

    def __init__( self, crypto, format=None, scheme=None ):
        crypto			= Account.supported( crypto )
        self.format		= ( format or CRYPTO_FORMAT[crypto] ).lower()
        if self.format not in self.CRYPTO_FORMAT_SEMANTIC[crypto]:
            raise ValueError( f"{crypto} does not support address format {self.format}; specify one of {commas( self.formats( crypto ))}" )
        hdwallet_cls		= self.CRYPTO_WALLET_CLS.get( crypto )
        if hdwallet_cls:
            self.hdwallet	= hdwallet_cls( scheme=scheme )
        else:
            self.hdwallet	= hdwallet.HDWallet( symbol=crypto, semantic=self.CRYPTO_FORMAT_SEMANTIC[crypto][self.format] )
        self._crypto		= crypto

    def from_seed( self, seed: Union[str,bytes], path: Optional[str] = None ) -> Account:
        """Derive the Account from the supplied 512-bit BIP-39 seed, at the crypto's fixed derivation
        path (unless another is supplied).  Handles bytes or hex seeds, optionally with "0x...".

        """
        seed			= into_bytes( seed )
        if not 16 <= len( seed ) <= 64:
            raise InputError( f"HD Wallet seeds must be 128 to 512 bits; {len( seed ) * 8}-bit seed supplied" )
        self.hdwallet.clean_derivation()
        self.hdwallet.from_seed( seed.hex() )
        return self.from_path( path )

    def from_mnemonic( self, mnemonic: str, passphrase: Optional[Union[bytes,str]] = None, path: Optional[str] = None ) -> Account:
        """Derive the Account from the seed of the supplied BIP-39 Mnemonic."""
        return self.from_seed( recover_bip39( mnemonic, passphrase=passphrase ), path=path )

    def from_private_key( self, private_key: str ) -> Account:
        """Import a specific private key (eg. recovered from an encrypted wallet); there is no
        derivation path.

        """
        if self.crypto in self.CRYPTO_WALLET_CLS:
            raise NotImplementedError( f"{self.crypto} does not support private key import" )
        self.hdwallet.clean_derivation()
        self.hdwallet.from_private_key( private_key )
        return self

    def from_path( self, path: Optional[str] = None ) -> Account:
        path			= path or CRYPTO_PATHS[self.crypto]
        if not path.startswith( "m/" ):
            raise ValueError( f"Unrecognized HD wallet derivation path: {path!r}" )
        log.debug( f"Deriving {self.format} {self.crypto} at {path}" )
        try:
            self.hdwallet.from_path( path )
        except DerivationFailure:
            raise
        except Exception as exc:
            raise DerivationFailure( f"Failed to derive {self.crypto} key at {path}: {exc}" ) from exc
        return self

    @property
    def address( self ):
        """Returns the bc1..., 1..., 0x... or Base58 Solana address, depending on crypto and format"""
        return self.formatted_address()

    def formatted_address( self, format=None ):
        format			= ( format or self.format ).lower()
        if self.crypto == 'SOL' and format == "base58":
            return self.hdwallet.address()
        if format == "legacy":
            return self.legacy_address()
        if format == "bech32":
            return self.bech32_address()
        raise ValueError( f"Unknown {self.crypto} address format: {format}" )

    def legacy_address( self ):
        """BIP-44 Address; P2PKH Base58Check for Bitcoin, EIP-55 for Ethereum"""
        return self.hdwallet.p2pkh_address()

    def bech32_address( self ):
        """P2WPKH Bech32 Address"""
        return self.hdwallet.p2wpkh_address()

    @property
    def name( self ):
        return self.CRYPTO_SYMBOLS[self._crypto]

    @property
    def symbol( self ):
        return self._crypto
    crypto		= symbol

    @property
    def path( self ) -> str:
        return self.hdwallet.path() or 'm/'

    @property
    def key( self ):
        return self.hdwallet.private_key()
    prvkey		= key

    @property
    def pubkey( self ):
        return self.hdwallet.public_key()

    def keys( self ) -> ChainKeys:
        """The derived key set.  Never returns a missing or zero key; raises DerivationFailure."""
        prvkey,pubkey		= self.key,self.pubkey
        if not prvkey or not int( prvkey, 16 ):
            raise DerivationFailure( f"No {self.crypto} private key derived at {self.path}" )
        if not pubkey or not int( pubkey, 16 ):
            raise DerivationFailure( f"No {self.crypto} public key derived at {self.path}" )
        try:
            address		= self.address
        except Exception as exc:
            raise DerivationFailure( f"Failed to encode {self.crypto} address at {self.path}: {exc}" ) from exc
        return ChainKeys( self.crypto, self.path, prvkey, pubkey, address )

    def encrypted( self, passphrase ):
        """Output the appropriately encrypted private key for this cryptocurrency.  Ethereum uses
        encrypted JSON wallet standard, Bitcoin uses BIP-38 encrypted private keys.  The derivation
        path is not remembered in either encoding.

        """
        if self.crypto in self.ETHJS_ENCRYPT:
            wallet_dict		= eth_account.Account.encrypt( self.key, passphrase )
            return json.dumps( wallet_dict, separators=(',',':') )
        if self.crypto in self.BIP38_ENCRYPT:
            return self.bip38( passphrase )
        raise NotImplementedError( f"{self.crypto} does not support private key encryption" )

    def from_encrypted( self, encrypted_privkey, passphrase, strict=True ):
        """Import the appropriately decrypted private key for this cryptocurrency."""
        if self.crypto in self.ETHJS_ENCRYPT:
            private_hex		= bytes( eth_account.Account.decrypt( encrypted_privkey, passphrase )).hex()
            return self.from_private_key( private_hex )
        if self.crypto in self.BIP38_ENCRYPT:
            return self.from_bip38( encrypted_privkey, passphrase=passphrase, strict=strict )
        raise NotImplementedError( f"{self.crypto} does not support private key decryption" )

    @staticmethod
    def bip38_keys( passphrase, address_hash ):
        """The two BIP-38 derived halves: the private key XOR mask, and the AES-256 key."""
        if isinstance( passphrase, str ):
            passphrase		= passphrase.encode( 'UTF-8' )
        derived			= scrypt( passphrase or b"", salt=address_hash, key_len=64, N=16384, r=8, p=8 )
        return derived[:32], AES.new( derived[32:], AES.MODE_ECB )

    def address_hash( self ):
        addr			= self.legacy_address().encode( 'UTF-8' )  # Eg. b"184xW5g..."
        return hashlib.sha256( hashlib.sha256( addr ).digest() ).digest()[:4]

    def bip38( self, passphrase ):
        """BIP-38 encrypt the private key (non-EC-multiplied, compressed public key)"""
        ahash			= self.address_hash()
        mask,aes		= self.bip38_keys( passphrase, ahash )
        private			= into_bytes( self.key )
        encrypted		= aes.encrypt( bytes( p ^ m for p,m in zip( private, mask )))
        return base58.b58encode_check( b'\x01\x42\xe0' + ahash + encrypted ).decode( 'UTF-8' )

    def from_bip38( self, encrypted_privkey, passphrase, strict: bool = True ):
        """BIP-38 decrypt and import the private key; confirms the address hash, to detect an
        incorrect passphrase.

        """
        d			= base58.b58decode_check( encrypted_privkey )
        if len( d ) != 39 or d[:2] != b'\x01\x42' or d[2:3] not in ( b'\xc0', b'\xe0' ):
            raise ValueError( "Unrecognized BIP-38 encrypted private key" )
        ahash,encrypted		= d[3:7],d[7:39]
        mask,aes		= self.bip38_keys( passphrase, ahash )
        private			= bytes( p ^ m for p,m in zip( aes.decrypt( encrypted ), mask ))
        self.from_private_key( private.hex() )
        if self.address_hash() != ahash:
            warning		= "BIP-38 address hash verification failed; passphrase may be incorrect."
            if strict:
                raise ValueError( warning )
            log.warning( warning )
        return self


def derive(
    seed: Union[str,bytes],
    crypto: str,
    format: Optional[str]	= None,  # eg. 'legacy', or use the default address format for the crypto
    scheme: Optional[str]	= None,  # Solana only: 'bip32' or 'slip10'
) -> ChainKeys:
    """Derive the crypto's key set from the 512-bit seed, at its fixed derivation path."""
    acct			= Account( crypto, format=format, scheme=scheme ).from_seed( seed )
    keys			= acct.keys()
    log.info( f"{keys.crypto:4} {keys.path:20}: {keys.address}" )
    return keys


def credentials_mnemonic(
    email: str,
    password: str,
    salt: str,
    kdf: Optional[Callable[[bytes, bytes], bytes]] = None,
) -> str:
    """Validate the credentials and password policy, then stretch them into a 12-word BIP-39
    Mnemonic.  Fails fast w/ InputError or PolicyViolation, before any stretching.

    """
    if not email or not password:
        raise InputError( "Email and password are required" )
    require( password )
    return produce_bip39( entropy( stretch( email, password, salt, kdf=kdf ), bits=BITS_DEFAULT ))


def recover_wallet(
    mnemonic: str,
    format: Optional[str]	= None,  # Bitcoin address format; default bech32
    scheme: Optional[str]	= None,  # Solana derivation scheme
) -> MultiChainWallet:
    """Restore the Multi-Chain Wallet from its BIP-39 Mnemonic.  Every chain is derived from the one
    seed; any failure raises, and no partial wallet is ever returned.

    """
    try:
        seed			= recover_bip39( mnemonic )
    except ValueError as exc:
        raise InputError( f"Invalid recovery phrase: {exc}" ) from exc
    return MultiChainWallet(
        mnemonic	= normalize_bip39( mnemonic ),
        seed		= seed,
        btc		= derive( seed, 'BTC', format=format ),
        eth		= derive( seed, 'ETH' ),
        sol		= derive( seed, 'SOL', scheme=scheme ),
    )


def assemble(
    email: str,
    password: str,
    salt: str,
    kdf: Optional[Callable[[bytes, bytes], bytes]] = None,
    format: Optional[str]	= None,
    scheme: Optional[str]	= None,
) -> MultiChainWallet:
    """Derive the BTC, ETH and SOL wallets from email, password and the account's hex salt.

    The password policy is enforced first.  The stretch, Mnemonic and seed are computed exactly
    once, and shared by all three chains.  Nothing is persisted or transmitted; the caller owns the
    resultant secret material.

    """
    mnemonic			= credentials_mnemonic( email, password, salt, kdf=kdf )
    wallet			= recover_wallet( mnemonic, format=format, scheme=scheme )
    log.info( f"Derived wallet for {email}: {wallet!r}" )
    return wallet


def derive_wallet(
    email: str,
    password: str,
    salt: str,
    crypto: str			= 'ETH',
    kdf: Optional[Callable[[bytes, bytes], bytes]] = None,
    format: Optional[str]	= None,
    scheme: Optional[str]	= None,
) -> Tuple[str, ChainKeys]:
    """Derive only one crypto's wallet from the credentials; returns (mnemonic, ChainKeys).  The keys
    are identical to the corresponding chain of the full assemble'd Multi-Chain Wallet.

    """
    crypto			= Account.supported( crypto )
    mnemonic			= credentials_mnemonic( email, password, salt, kdf=kdf )
    return mnemonic, derive( recover_bip39( mnemonic ), crypto, format=format, scheme=scheme )


_executor			= None


def background_executor() -> Executor:
    """The default executor for background derivations, created on first use."""
    global _executor
    if _executor is None:
        _executor		= ThreadPoolExecutor(
            max_workers		= BACKGROUND_WORKERS,
            thread_name_prefix	= "selfcustody",
        )
    return _executor


def assemble_background(
    email: str,
    password: str,
    salt: str,
    executor: Optional[Executor] = None,
    **kwds
) -> Future:
    """Offload the (deliberately expensive) assemble to a background executor, so an interactive
    thread isn't blocked; the returned Future delivers the MultiChainWallet, or raises its error.

    """
    return ( executor or background_executor() ).submit( assemble, email, password, salt, **kwds )


def segwit_address_valid(
    address: str,
    hrp: str			= 'bc',
) -> bool:
    """Validate a Segwit address; witness v0 (bc1q...) must be Bech32 encoded, and v1+ (eg. Taproot
    bc1p...) must be Bech32m encoded (BIP-350).

    """
    if address != address.lower() and address != address.upper():
        return False
    address			= address.lower()
    try:
        witver,witprog		= SegwitBech32Decoder.Decode( hrp, address )
    except (ValueError, Bech32ChecksumError):
        return False
    # Re-encoding selects Bech32 for v0, Bech32m for v1+; the wrong checksum variant won't match
    return SegwitBech32Encoder.Encode( hrp, witver, witprog ) == address


def address_valid(
    crypto: str,
    address: str,
) -> bool:
    """Validate a Bitcoin (Bech32/Bech32m bc1..., or Base58Check 1.../3...), Ethereum (0x..., EIP-55
    checksummed if mixed-case), or Solana (Base58 32-byte public key) address.

    """
    crypto			= Account.supported( crypto )
    if not address or not isinstance( address, str ):
        return False
    if crypto == 'ETH':
        if not address.startswith( '0x' ):
            return False
        digits			= address[2:]
        if digits != digits.lower() and digits != digits.upper():
            return eth_utils.is_checksum_address( address )
        return eth_utils.is_hex_address( address )
    if crypto == 'SOL':
        return solana_address_valid( address )
    if address.lower().startswith( 'bc1' ):
        return segwit_address_valid( address )
    try:
        decoded			= base58.b58decode_check( address )
    except ValueError:
        return False
    return len( decoded ) == 21 and decoded[0] in ( 0x00, 0x05 )

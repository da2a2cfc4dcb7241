import os

from setuptools import setup

# 
# All platforms
# 
HERE				= os.path.dirname( os.path.abspath( __file__ ))


def requirements( name ):
    # Remove whitespace, elide blank lines and comments
    return list(
        ''.join( r.split() )
        for r in open( os.path.join( HERE, name )).readlines()
        if r.strip() and not r.strip().startswith( '#' )
    )


install_requires		= requirements( "requirements.txt" )
tests_require			= requirements( "requirements-tests.txt" )

# Since setuptools is retiring tests_require, add it as an option
extras_require			= {
    'tests':			tests_require,
}

# Must work if setup.py is run in the source distribution context, or from
# within the packaged distribution directory.
__version__			= None
try:
    exec( open( os.path.join( HERE, 'selfcustody/version.py' ), 'r' ).read() )
except FileNotFoundError:
    exec( open( 'version.py', 'r' ).read() )

console_scripts			= [
    'selfcustody		= selfcustody.main:main',
    'selfcustody-recovery	= selfcustody.recovery.__main__:main',
    'selfcustody-cli		= selfcustody.cli:cli',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

package_dir			= {
    "selfcustody":		"./selfcustody",
    "selfcustody.cli":		"./selfcustody/cli",
    "selfcustody.recovery":	"./selfcustody/recovery",
}

long_description_content_type	= 'text/markdown'
long_description		= """\
Deterministic, self-custodial BTC, ETH and SOL wallets derived from an
account's email, password and a per-account random salt.

>  Your keys, your Bitcoin.  Not your keys, not your Bitcoin.
>  
>  ---Andreas Antonopoulos

The email and password are stretched w/ the memory-hard scrypt KDF
(N=2^15, r=8, p=1), salted w/ a 256-bit random salt generated once when
the account is created.  The first 128 bits of the stretched output
become the entropy of a standard 12-word BIP-39 Mnemonic, whose seed
derives each chain's keys at its standard BIP-44 path:

    | Crypto | Path              | Address                       |
    |--------+-------------------+-------------------------------|
    | BTC    | m/44'/0'/0'/0/0   | P2WPKH Bech32 (or P2PKH)      |
    | ETH    | m/44'/60'/0'/0/0  | EIP-55 checksummed            |
    | SOL    | m/44'/501'/0'/0'  | Base58 Ed25519 public key     |

The same credentials and salt always yield the same wallets; only the
public addresses (plus the email, salt and a bcrypt password hash) are
ever sent to the account store.  The 12-word Mnemonic alone restores
every wallet, in any standard BIP-39 wallet.

## Deriving Wallets on the Command Line

    $ python3 -m selfcustody -e alice@example.com --new-salt --register
    Account password:
    {
        "email": "alice@example.com",
        "passwordHash": "$2b$10$...",
        "salt": "...",
        "btcAddress": "bc1q...",
        "ethAddress": "0x...",
        "solAddress": "..."
    }

## Recover from the BIP-39 Mnemonic

    $ python3 -m selfcustody.recovery      # or run: selfcustody-recovery
    Enter BIP-39 mnemonic: ...
    BTC  m/44'/0'/0'/0/0      bc1q...
    ETH  m/44'/60'/0'/0/0     0x...
    SOL  m/44'/501'/0'/0'     ...
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Environment :: Console",
    "Topic :: Security :: Cryptography",
    "Topic :: Office/Business :: Financial",
]

setup(
    name			= "selfcustody",
    version			= __version__,
    install_requires		= install_requires,
    tests_require		= tests_require,
    extras_require		= extras_require,
    packages			= package_dir.keys(),
    package_dir			= package_dir,
    include_package_data	= True,
    zip_safe			= True,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@dominionrnd.com",
    description			= "Deterministic self-custodial BTC, ETH and SOL wallet derivation from email, password and salt",
    long_description		= long_description,
    long_description_content_type = long_description_content_type,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "Ethereum Bitcoin Solana cryptocurrency BIP-39 BIP-44 SLIP-10 scrypt self-custody wallet",
    classifiers			= classifiers,
    python_requires		= ">=3.9",
)

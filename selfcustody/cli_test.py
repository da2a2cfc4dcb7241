import json

from click.testing	import CliRunner

from .			import kdf
from .api		import assemble
from .cli		import cli

from .dependency_test	import substitute, fast_kdf, BIP39_ABANDON, EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS


def test_cli_salt():
    runner			= CliRunner()
    result			= runner.invoke( cli, [ '--no-json', 'salt' ] )
    assert result.exit_code == 0
    assert len( bytes.fromhex( result.output.strip() )) == 32

    result			= runner.invoke( cli, [ 'salt' ] )
    assert result.exit_code == 0
    assert len( json.loads( result.output )) == 64


def test_cli_policy():
    runner			= CliRunner()
    result			= runner.invoke( cli, [ 'policy', '--password', 'short' ] )
    assert result.exit_code == 1
    assert len( json.loads( result.output )) == 4

    result			= runner.invoke( cli, [ '--no-json', 'policy', '--password', PASSWORD_ALICE ] )
    assert result.exit_code == 0
    assert result.output == ''


def test_cli_addresses_mnemonic():
    runner			= CliRunner()
    result			= runner.invoke( cli, [ 'addresses', '--mnemonic', BIP39_ABANDON, '--format', 'legacy' ] )
    assert result.exit_code == 0
    addresses			= json.loads( result.output )
    assert addresses['BTC'] == '1LqBGSKuX5yYUonjxT5qGfpUsXKYYWeabA'
    assert addresses['ETH'] == '0x9858EfFD232B4033E47d90003D41EC34EcaEda94'

    result			= runner.invoke( cli, [ 'addresses', '--mnemonic', ' '.join( ['abandon'] * 12 ) ] )
    assert result.exit_code == 1
    result			= runner.invoke( cli, [ 'addresses' ] )
    assert result.exit_code == 2


@substitute( kdf, 'scrypt_stretch', fast_kdf )
def test_cli_addresses_credentials():
    wallet			= assemble( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS )
    runner			= CliRunner()
    result			= runner.invoke( cli, [
        '--no-json', 'addresses', '--email', EMAIL_ALICE, '--password', PASSWORD_ALICE, '--salt', SALT_ZEROS,
    ])
    assert result.exit_code == 0
    assert result.output.split() == list( wallet.addresses().values() )

    result			= runner.invoke( cli, [
        'addresses', '--email', EMAIL_ALICE, '--password', 'short', '--salt', SALT_ZEROS,
    ])
    assert result.exit_code == 1
    assert "at least 12 characters" in result.output


@substitute( kdf, 'scrypt_stretch', fast_kdf )
def test_cli_register():
    runner			= CliRunner()
    result			= runner.invoke( cli, [
        'register', '--email', EMAIL_ALICE, '--password', PASSWORD_ALICE, '--salt', SALT_ZEROS,
    ])
    assert result.exit_code == 0
    record			= json.loads( result.output )
    assert record['salt'] == SALT_ZEROS
    assert record['ethAddress'] == assemble( EMAIL_ALICE, PASSWORD_ALICE, SALT_ZEROS ).eth.address

"""Unit test for the restdns console entry point.
"""

import copy
import os
import shutil
import tempfile
import unittest

import click.testing
import mock
import yaml

import restdns.rest
import restdns.rest.api
from restdns import console

from tests import ldap_fake


class ConsoleTest(unittest.TestCase):
    """Tests restdns console and restapi command."""

    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.config = os.path.join(self.root, 'settings.yml')
        with open(self.config, 'w') as f:
            yaml.safe_dump(ldap_fake.SETTINGS, f)
        self.runner = click.testing.CliRunner()

    def tearDown(self):
        if self.root and os.path.isdir(self.root):
            shutil.rmtree(self.root)

    @mock.patch('restdns.cli.init_logger', mock.Mock())
    @mock.patch('restdns.rest.TcpRestServer', mock.Mock())
    @mock.patch('restdns.rest.api.init', mock.Mock())
    def test_restapi(self):
        """Test restapi server is started with the settings."""
        result = self.runner.invoke(
            console.run,
            ['--config', self.config, 'restapi', '--port', '9090']
        )
        self.assertEqual(0, result.exit_code, result.output)

        settings = restdns.rest.api.init.call_args[0][0]
        self.assertIn('example.com', settings.managed_zones)
        restdns.rest.TcpRestServer.assert_called_with(
            9090, host='0.0.0.0', workers=0, xheaders=False
        )
        restdns.rest.TcpRestServer.return_value.run.assert_called_with()

    @mock.patch('restdns.cli.init_logger', mock.Mock())
    @mock.patch('restdns.rest.TcpRestServer', mock.Mock())
    @mock.patch('restdns.rest.api.init', mock.Mock())
    def test_restapi_defaults(self):
        """Test server settings are used when options are not given."""
        result = self.runner.invoke(
            console.run,
            ['--config', self.config, 'restapi', '--workers', '4'],
            env={'RESTDNS_PORT': None}
        )
        self.assertEqual(0, result.exit_code, result.output)

        restdns.rest.TcpRestServer.assert_called_with(
            8080, host='0.0.0.0', workers=4, xheaders=False
        )

    @mock.patch('restdns.cli.init_logger', mock.Mock())
    @mock.patch('restdns.rest.TcpRestServer', mock.Mock())
    def test_invalid_config(self):
        """Test invalid settings are reported."""
        data = copy.deepcopy(ldap_fake.SETTINGS)
        del data['ldap']['basedn']
        with open(self.config, 'w') as f:
            yaml.safe_dump(data, f)

        result = self.runner.invoke(
            console.run, ['--config', self.config, 'restapi']
        )
        self.assertEqual(2, result.exit_code)
        self.assertIn('basedn', result.output)
        restdns.rest.TcpRestServer.assert_not_called()


if __name__ == '__main__':
    unittest.main()

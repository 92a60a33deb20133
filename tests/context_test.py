"""Unit test for restdns.context.
"""

import unittest

import mock

import restdns
from restdns import config
from restdns import context


class ContextTest(unittest.TestCase):
    """Tests for restdns.context."""

    @mock.patch('restdns.admin.Admin', mock.Mock())
    def test_lazy_connect(self):
        """Test connection is established on first use only."""
        ctx = context.AdminContext('ldap://foo:1234', 'cn=dns,dc=x',
                                   user='uid=dnsapi', password='secret')
        restdns.admin.Admin.assert_not_called()

        conn = ctx.conn
        restdns.admin.Admin.assert_called_once_with(
            'ldap://foo:1234', 'cn=dns,dc=x',
            user='uid=dnsapi', password='secret'
        )
        conn.connect.assert_called_once_with()

        self.assertIs(conn, ctx.conn)
        self.assertEqual(1, restdns.admin.Admin.call_count)

    @mock.patch('restdns.admin.Admin', mock.Mock())
    def test_missing_settings(self):
        """Test connection parameters are mandatory."""
        ctx = context.AdminContext(url='ldap://foo:1234')
        with self.assertRaises(context.ContextError):
            ctx.conn  # pylint: disable=pointless-statement

        ctx = context.AdminContext(ldap_suffix='cn=dns,dc=x')
        with self.assertRaises(context.ContextError):
            ctx.conn  # pylint: disable=pointless-statement

        restdns.admin.Admin.assert_not_called()

    @mock.patch('restdns.admin.Admin', mock.Mock())
    def test_reset(self):
        """Test reset closes the connection and reconnects on next use."""
        ctx = context.AdminContext('ldap://foo:1234', 'cn=dns,dc=x')

        first = mock.Mock()
        second = mock.Mock()
        restdns.admin.Admin.side_effect = [first, second]

        self.assertIs(first, ctx.conn)
        ctx.reset()
        first.close.assert_called_once_with()

        self.assertIs(second, ctx.conn)
        second.connect.assert_called_once_with()

    def test_from_settings(self):
        """Test context built from ldap settings."""
        ctx = context.AdminContext.from_settings(
            config.LdapSettings(url='ldap://foo',
                                binddn='uid=dnsapi',
                                bindpw='secret',
                                basedn='cn=dns,dc=x')
        )
        self.assertEqual('ldap://foo', ctx.url)
        self.assertEqual('cn=dns,dc=x', ctx.ldap_suffix)
        self.assertEqual('uid=dnsapi', ctx.user)
        self.assertEqual('secret', ctx.password)


if __name__ == '__main__':
    unittest.main()

"""Unit test for restdns.utils.
"""

import unittest

from restdns import exc
from restdns import utils


class UtilsTest(unittest.TestCase):
    """Tests name and address validation helpers."""

    def test_compose(self):
        """Test function composition order."""
        add = lambda x: x + 1  # noqa: E731
        double = lambda x: x * 2  # noqa: E731
        self.assertEqual(11, utils.compose(add, double)(5))
        self.assertEqual(12, utils.compose(double, add)(5))

    def test_hostname(self):
        """Test single label host names."""
        for name in ['web', 'Web-01', '0', 'a' * 64]:
            self.assertTrue(utils.is_hostname(name), name)
            self.assertEqual(name, utils.validate_hostname(name))

        for name in ['', None, '-web', 'web.example', 'we_b', 'a' * 66,
                     'web\n']:
            self.assertFalse(utils.is_hostname(name), name)

        with self.assertRaises(exc.InvalidInputError) as ctx:
            utils.validate_hostname('bad_name')
        self.assertEqual('bad_name is not a valid RFC1123 hostname',
                         ctx.exception.message)

    def test_fqdn(self):
        """Test dotted host names."""
        for name in ['web', 'www.example.com', 'www.example.com.',
                     'a-1.b-2']:
            self.assertTrue(utils.is_fqdn(name), name)

        for name in ['', '.', 'www..example.com', '.example.com',
                     'www.example.com..', 'www.-example.com']:
            self.assertFalse(utils.is_fqdn(name), name)

        with self.assertRaises(exc.InvalidInputError):
            utils.validate_fqdn('www..example.com')

    def test_validate_ipv4(self):
        """Test IPv4 address validation."""
        self.assertEqual('10.0.0.1', utils.validate_ipv4('10.0.0.1'))

        for ip in ['10.0.0.256', 'web', '', '::1', '10.0.0']:
            with self.assertRaises(exc.InvalidInputError):
                utils.validate_ipv4(ip)

        with self.assertRaises(exc.InvalidInputError) as ctx:
            utils.validate_ipv4('1.2.3.999')
        self.assertEqual('1.2.3.999 is not a valid ip address',
                         ctx.exception.message)


if __name__ == '__main__':
    unittest.main()

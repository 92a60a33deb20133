"""Common utility functions."""

import functools
import ipaddress
import re

from restdns import exc


_HOST_PART = r'[a-zA-Z0-9][a-zA-Z0-9-]{0,63}'

_HOST_RE = re.compile(r'^%s\Z' % _HOST_PART)

_FQDN_RE = re.compile(r'^{0}(\.{0})*\.?\Z'.format(_HOST_PART))


def compose(*funcs):
    """Compose functions."""
    return lambda x: functools.reduce(lambda v, f: f(v), reversed(funcs), x)


def is_hostname(name):
    """Single RFC1123 host label."""
    return bool(_HOST_RE.match(name or ''))


def is_fqdn(name):
    """Dotted RFC1123 host name, optionally with trailing dot."""
    return bool(_FQDN_RE.match(name or ''))


def validate_hostname(name):
    """Raise InvalidInputError unless name is a valid host label."""
    if not is_hostname(name):
        raise exc.InvalidInputError(
            '%s is not a valid RFC1123 hostname' % name)
    return name


def validate_fqdn(name):
    """Raise InvalidInputError unless name is a valid dotted host name."""
    if not is_fqdn(name):
        raise exc.InvalidInputError(
            '%s is not a valid RFC1123 hostname' % name)
    return name


def validate_ipv4(ip):
    """Raise InvalidInputError unless ip is a valid IPv4 address."""
    try:
        return str(ipaddress.IPv4Address(ip))
    except ValueError:
        raise exc.InvalidInputError('%s is not a valid ip address' % ip)

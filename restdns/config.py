"""restdns process settings.

Settings are read once at startup from a YAML file, validated against a
json schema and converted into immutable objects which are handed to the
authorizer and the API implementations.

Example::

    ldap:
      url: ldaps://ipa1.example.com,ldaps://ipa2.example.com
      binddn: uid=dnsapi,cn=sysaccounts,cn=etc,dc=example,dc=com
      bindpw: secret
      basedn: cn=dns,dc=example,dc=com
    managed_zones:
      example.com:
        sourceip: [10.1.0.0/24]
        managedip: [10.0.0.0/16]
    reverse_zones:
      0.10.in-addr.arpa: [10.0.0.0/16]
    zone_defaults:
      soa:
        mname: ipa1.example.com.
        rname: hostmaster.example.com.
        refresh: 3600
        retry: 900
        expire: 1209600
        minimum: 3600
      nameservers: [ipa1.example.com., ipa2.example.com.]
"""

import collections
import ipaddress
import logging
import types

import jsonschema
import yaml

from restdns import exc


_LOGGER = logging.getLogger(__name__)

_NETWORKS = {
    'type': 'array',
    'items': {'type': 'string'},
}

_SCHEMA = {
    'type': 'object',
    'required': ['ldap', 'managed_zones', 'zone_defaults'],
    'properties': {
        'ldap': {
            'type': 'object',
            'required': ['url', 'basedn'],
            'properties': {
                'url': {'type': 'string'},
                'binddn': {'type': 'string'},
                'bindpw': {'type': 'string'},
                'basedn': {'type': 'string'},
            },
        },
        'managed_zones': {
            'type': 'object',
            'additionalProperties': {
                'type': 'object',
                'required': ['sourceip'],
                'properties': {
                    'sourceip': _NETWORKS,
                    'managedip': _NETWORKS,
                },
            },
        },
        'reverse_zones': {
            'type': 'object',
            'additionalProperties': _NETWORKS,
        },
        'zone_defaults': {
            'type': 'object',
            'required': ['soa', 'nameservers'],
            'properties': {
                'soa': {
                    'type': 'object',
                    'required': ['mname', 'rname', 'refresh', 'retry',
                                 'expire', 'minimum'],
                    'properties': {
                        'mname': {'type': 'string'},
                        'rname': {'type': 'string'},
                        'refresh': {'type': 'integer', 'minimum': 0},
                        'retry': {'type': 'integer', 'minimum': 0},
                        'expire': {'type': 'integer', 'minimum': 0},
                        'minimum': {'type': 'integer', 'minimum': 0},
                    },
                },
                'nameservers': {
                    'type': 'array',
                    'items': {'type': 'string'},
                    'minItems': 1,
                },
            },
        },
        'server': {
            'type': 'object',
            'properties': {
                'host': {'type': 'string'},
                'port': {'type': 'integer'},
                'workers': {'type': 'integer', 'minimum': 0},
                'cors_origin': {'type': 'string'},
                'xheaders': {'type': 'boolean'},
            },
        },
    },
}

LdapSettings = collections.namedtuple(
    'LdapSettings', ['url', 'binddn', 'bindpw', 'basedn']
)

ManagedZone = collections.namedtuple(
    'ManagedZone', ['name', 'source_networks', 'managed_networks']
)

ZoneDefaults = collections.namedtuple(
    'ZoneDefaults', ['mname', 'rname', 'refresh', 'retry', 'expire',
                     'minimum', 'nameservers']
)

ServerSettings = collections.namedtuple(
    'ServerSettings', ['host', 'port', 'workers', 'cors_origin', 'xheaders']
)

Settings = collections.namedtuple(
    'Settings', ['ldap', 'managed_zones', 'reverse_zones', 'zone_defaults',
                 'server']
)


def _networks(values, where):
    """Parse list of CIDR strings."""
    networks = []
    for value in values or []:
        try:
            networks.append(ipaddress.ip_network(str(value), strict=False))
        except ValueError as err:
            raise exc.ConfigError('%s: invalid network %r: %s' %
                                  (where, value, err))
    return tuple(networks)


def zone_attrs(defaults):
    """Zone attributes (admin.Zone schema) for an auto-created zone."""
    return {
        'active': True,
        'soa_mname': defaults.mname,
        'soa_rname': defaults.rname,
        'soa_serial': 1,
        'soa_refresh': defaults.refresh,
        'soa_retry': defaults.retry,
        'soa_expire': defaults.expire,
        'soa_minimum': defaults.minimum,
        'nameservers': list(defaults.nameservers),
    }


def from_dict(data):
    """Build Settings from parsed configuration data."""
    try:
        jsonschema.Draft4Validator(_SCHEMA).validate(data)
    except jsonschema.exceptions.ValidationError as err:
        path = '.'.join(str(elem) for elem in err.absolute_path)
        raise exc.ConfigError('%s: %s' % (path or 'settings', err.message))

    ldap = data['ldap']
    ldap_settings = LdapSettings(
        url=ldap['url'],
        binddn=ldap.get('binddn'),
        bindpw=ldap.get('bindpw'),
        basedn=ldap['basedn'],
    )

    managed_zones = collections.OrderedDict()
    for name, networks in data['managed_zones'].items():
        where = 'managed_zones.%s' % name
        managed_zones[name] = ManagedZone(
            name=name,
            source_networks=_networks(networks.get('sourceip'), where),
            managed_networks=_networks(networks.get('managedip'), where),
        )

    reverse_zones = collections.OrderedDict()
    for name, networks in (data.get('reverse_zones') or {}).items():
        reverse_zones[name] = _networks(networks, 'reverse_zones.%s' % name)

    soa = data['zone_defaults']['soa']
    zone_defaults = ZoneDefaults(
        mname=soa['mname'],
        rname=soa['rname'],
        refresh=soa['refresh'],
        retry=soa['retry'],
        expire=soa['expire'],
        minimum=soa['minimum'],
        nameservers=tuple(data['zone_defaults']['nameservers']),
    )

    server = data.get('server') or {}
    server_settings = ServerSettings(
        host=server.get('host', '0.0.0.0'),
        port=server.get('port', 8080),
        workers=server.get('workers', 0),
        cors_origin=server.get('cors_origin', '.*'),
        xheaders=server.get('xheaders', False),
    )

    _LOGGER.debug('Managed zones: %r', list(managed_zones))
    _LOGGER.debug('Reverse zones: %r', list(reverse_zones))

    return Settings(
        ldap=ldap_settings,
        managed_zones=types.MappingProxyType(managed_zones),
        reverse_zones=types.MappingProxyType(reverse_zones),
        zone_defaults=zone_defaults,
        server=server_settings,
    )


def load(path):
    """Load settings from YAML file."""
    _LOGGER.info('Loading settings: %s', path)
    try:
        with open(path, 'r') as fh:
            data = yaml.safe_load(fh)
    except (IOError, yaml.YAMLError) as err:
        raise exc.ConfigError('Unable to load %s: %s' % (path, err))

    if not isinstance(data, dict):
        raise exc.ConfigError('%s: expected a mapping' % path)

    return from_dict(data)

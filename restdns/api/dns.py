"""Implementation of DNS zone and host record API."""

import logging

from restdns import admin
from restdns import api
from restdns import exc
from restdns import utils
from restdns.api import reverse as reverse_api


_LOGGER = logging.getLogger(__name__)

_REVERSE_ZONE_SUFFIXES = ('.in-addr.arpa', '.ip6.arpa')


class API(object):
    """DNS zone and host record API."""

    def __init__(self, admin_ctx, settings, reverse=None):
        if reverse is None:
            reverse = reverse_api.API(admin_ctx, settings)

        def _admin_zone():
            """Lazily return zone admin object."""
            return admin.Zone(admin_ctx.conn)

        def _admin_record(zone):
            """Lazily return record admin object."""
            return admin.Record(admin_ctx.conn, zone)

        def list_zones():
            """List forward zones."""
            with api.directory_errors(admin_ctx,
                                      not_found='No zones found'):
                zones = [
                    zone['_id'] for zone in _admin_zone().list()
                    if not zone['_id'].endswith(_REVERSE_ZONE_SUFFIXES)
                ]

            if not zones:
                raise exc.NotFoundError('No zones found')
            return zones

        def zone_exists(zone):
            """Checks if zone exists."""
            with api.directory_errors(admin_ctx):
                return _admin_zone().exists(zone)

        def create_zone(zone):
            """Create zone with default SOA values, unless it exists."""
            return api.ensure_zone(admin_ctx, zone, settings.zone_defaults)

        def list_hosts(zone):
            """List host records of the zone."""
            with api.directory_errors(
                    admin_ctx,
                    not_found='No hosts found in zone %s' % zone):
                return [record['_id']
                        for record in _admin_record(zone).list()]

        def get_host(zone, host):
            """Get host record addresses, cnames and ttl."""
            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone)):
                record = _admin_record(zone).get(host)

            if record is None:
                raise exc.NotFoundError(
                    'Host %s not found in zone %s' % (host, zone))

            return {
                'ipaddress': record.get('ipaddress', []),
                'cname': record.get('cname', []),
                'ttl': record.get('ttl'),
            }

        def host_exists(zone, host):
            """Checks if host record exists."""
            with api.directory_errors(admin_ctx):
                return _admin_record(zone).exists(host)

        def has_address(zone, host, ip):
            """Checks if host has the ip address."""
            return ip in get_host(zone, host)['ipaddress']

        def has_cname(zone, host, cname):
            """Checks if host has the cname."""
            return cname in get_host(zone, host)['cname']

        def _create_record(zone, host, ttl):
            """Create host record, creating the zone if needed."""
            create_zone(zone)
            with api.directory_errors(
                    admin_ctx,
                    not_found='Zone %s not found' % zone,
                    already_exists='Host %s already exists in zone %s' % (
                        host, zone)):
                _admin_record(zone).create(host, {'ttl': ttl})
            _LOGGER.info('Created host %s in zone %s', host, zone)

        def create_host(zone, host, ttl=None):
            """Create host record."""
            utils.validate_hostname(host)
            _create_record(zone, host, ttl)

        def add_address(zone, host, ip):
            """Add A record value to host."""
            ip = utils.validate_ipv4(ip)
            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone),
                    already_exists='Host %s in zone %s already has ip %s' % (
                        host, zone, ip)):
                _admin_record(zone).add_values(host, {'ipaddress': [ip]})
            _LOGGER.info('Added ip %s to %s.%s', ip, host, zone)

        def remove_address(zone, host, ip):
            """Remove A record value from host, retire the PTR it owns."""
            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s in zone %s does not have ip %s' % (
                        host, zone, ip)):
                _admin_record(zone).remove_values(host, {'ipaddress': [ip]})
            _LOGGER.info('Removed ip %s from %s.%s', ip, host, zone)

            if reverse.owns_reverse(ip, zone, host):
                reverse.delete_reverse(zone, ip)

        def add_cname(zone, host, cname, ttl=None):
            """Add CNAME record value to host, creating the host if needed."""
            utils.validate_fqdn(host)
            if not host_exists(zone, host):
                _create_record(zone, host, ttl)

            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone),
                    already_exists=(
                        'Host %s in zone %s already has cname %s' % (
                            host, zone, cname))):
                _admin_record(zone).add_values(host, {'cname': [cname]})
            _LOGGER.info('Added cname %s to %s.%s', cname, host, zone)

        def remove_cname(zone, host, cname):
            """Remove CNAME record value from host."""
            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s in zone %s does not have cname %s' % (
                        host, zone, cname)):
                _admin_record(zone).remove_values(host, {'cname': [cname]})
            _LOGGER.info('Removed cname %s from %s.%s', cname, host, zone)

        def delete_host(zone, host):
            """Delete host, removing every address (and PTR) first."""
            hostdata = get_host(zone, host)
            for ip in hostdata['ipaddress']:
                remove_address(zone, host, ip)

            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone)):
                _admin_record(zone).delete(host)
            _LOGGER.info('Deleted host %s in zone %s', host, zone)

        def change_ttl(zone, host, ttl):
            """Change host TTL, propagated to the PTR records it owns."""
            hostdata = get_host(zone, host)
            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone)):
                _admin_record(zone).replace_values(host, {'ttl': ttl})

            for ip in hostdata['ipaddress']:
                if reverse.owns_reverse(ip, zone, host):
                    reverse.set_ttl(ip, ttl)

            return get_host(zone, host)

        self.reverse = reverse
        self.list_zones = list_zones
        self.zone_exists = zone_exists
        self.create_zone = create_zone
        self.list_hosts = list_hosts
        self.get_host = get_host
        self.host_exists = host_exists
        self.has_address = has_address
        self.has_cname = has_cname
        self.create_host = create_host
        self.add_address = add_address
        self.remove_address = remove_address
        self.add_cname = add_cname
        self.remove_cname = remove_cname
        self.delete_host = delete_host
        self.change_ttl = change_ttl


def init(admin_ctx, settings):
    """Returns module API."""
    return API(admin_ctx, settings)

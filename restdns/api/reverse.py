"""Implementation of reverse (PTR) record API.

Keeps PTR records in the configured reverse zones in sync with the forward
host records.
"""

import ipaddress
import logging

from ldap3.core import exceptions as ldap_exceptions

from restdns import admin
from restdns import api
from restdns import authz
from restdns import context
from restdns import exc


_LOGGER = logging.getLogger(__name__)


def ptr_target(zone, host):
    """PTR record value pointing at host in zone."""
    return '%s.%s.' % (host, zone)


class API(object):
    """Reverse record API."""

    def __init__(self, admin_ctx, settings):
        authorizer = authz.ZoneAuthorizer(settings.managed_zones)

        def _record(zone):
            """Lazily return record admin object for zone."""
            return admin.Record(admin_ctx.conn, zone)

        def _check_allowed(zone, ip):
            """Check reverse records for ip may be managed by zone."""
            if not authorizer.ip_managed(zone, ip):
                raise exc.NotAllowedError(
                    'Reverse records for %s are not allowed for this zone' %
                    ip)

        def resolve_reverse_zone(ip):
            """Returns the configured reverse zone covering ip, or None."""
            address = ipaddress.ip_address(ip)
            for reverse_zone, networks in settings.reverse_zones.items():
                if any(address in network for network in networks):
                    return reverse_zone
            return None

        def reverse_pointer_name(ip, reverse_zone):
            """Record name of the PTR for ip, relative to reverse zone."""
            name = ipaddress.ip_address(ip).reverse_pointer
            suffix = '.' + reverse_zone
            if name.endswith(suffix):
                name = name[:-len(suffix)]
            return name

        def _locate(ip):
            """Returns (reverse zone, ptr name) or (None, None)."""
            reverse_zone = resolve_reverse_zone(ip)
            if reverse_zone is None:
                return None, None
            return reverse_zone, reverse_pointer_name(ip, reverse_zone)

        def get_reverse(ip):
            """Returns {'target', 'ttl'} of the PTR for ip, {} if none."""
            reverse_zone, ptrname = _locate(ip)
            if reverse_zone is None:
                return {}

            try:
                record = _record(reverse_zone).get(ptrname)
            except ldap_exceptions.LDAPCommunicationError as err:
                _LOGGER.warning('Reverse lookup failed for %s: %s', ip, err)
                admin_ctx.reset()
                return {}
            except (ldap_exceptions.LDAPException,
                    context.ContextError) as err:
                _LOGGER.warning('Reverse lookup failed for %s: %s', ip, err)
                return {}

            if not record or not record.get('ptr'):
                return {}

            return {
                'target': record['ptr'][0],
                'ttl': record.get('ttl'),
            }

        def owns_reverse(ip, zone, host):
            """Checks if the PTR for ip points at host in zone."""
            return get_reverse(ip).get('target') == ptr_target(zone, host)

        def create_reverse(ip, zone, host, replace=False):
            """Create PTR record for ip pointing at host in zone."""
            reverse_zone, ptrname = _locate(ip)
            if reverse_zone is None:
                raise exc.NotAllowedError(
                    'Reverse zones for %s are not managed by this host' % ip)
            _check_allowed(zone, ip)

            target = ptr_target(zone, host)
            existing = get_reverse(ip)
            if existing:
                if existing['target'] == target:
                    _LOGGER.debug('PTR %s -> %s exists.', ip, target)
                    return

                if not replace:
                    raise exc.AlreadyExistsError(
                        'Address %s already has a reverse record (%s)' %
                        (ip, existing['target']))

                _LOGGER.info('Replacing PTR %s -> %s with %s',
                             ip, existing['target'], target)
                delete_reverse(zone, ip)

            with api.directory_errors(
                    admin_ctx,
                    not_found='Host %s not found in zone %s' % (host, zone)):
                forward = _record(zone).get(host)
            if forward is None:
                raise exc.NotFoundError(
                    'Host %s not found in zone %s' % (host, zone))

            api.ensure_zone(admin_ctx, reverse_zone, settings.zone_defaults)

            with api.directory_errors(
                    admin_ctx,
                    already_exists='PTR record for %s already exists' % ip):
                reverse_admin = _record(reverse_zone)
                if not reverse_admin.exists(ptrname):
                    reverse_admin.create(ptrname, {'ttl': forward.get('ttl')})
                reverse_admin.add_values(ptrname, {'ptr': [target]})

            _LOGGER.info('Created PTR %s.%s -> %s',
                         ptrname, reverse_zone, target)

        def delete_reverse(zone, ip):
            """Delete PTR record for ip, directory errors are ignored."""
            _check_allowed(zone, ip)
            reverse_zone, ptrname = _locate(ip)
            if reverse_zone is None:
                return

            try:
                _record(reverse_zone).delete(ptrname)
                _LOGGER.info('Deleted PTR %s.%s', ptrname, reverse_zone)
            except (ldap_exceptions.LDAPException,
                    context.ContextError) as err:
                _LOGGER.info('Unable to delete PTR %s.%s: %s',
                             ptrname, reverse_zone, err)

        def set_ttl(ip, ttl):
            """Set the TTL of the PTR record for ip."""
            reverse_zone, ptrname = _locate(ip)
            if reverse_zone is None:
                return

            with api.directory_errors(
                    admin_ctx,
                    not_found='Reverse record for %s not found' % ip):
                _record(reverse_zone).replace_values(ptrname, {'ttl': ttl})

        self.resolve_reverse_zone = resolve_reverse_zone
        self.reverse_pointer_name = reverse_pointer_name
        self.get_reverse = get_reverse
        self.owns_reverse = owns_reverse
        self.create_reverse = create_reverse
        self.delete_reverse = delete_reverse
        self.set_ttl = set_ttl


def init(admin_ctx, settings):
    """Returns module API."""
    return API(admin_ctx, settings)

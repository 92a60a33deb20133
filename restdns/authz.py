"""Authorization for restdns API.

Requests are authorized by the zone named in the first path segment and the
source IP of the caller. The zone must be one of the managed zones and the
source IP must belong to one of the zone source networks.
"""

import ipaddress
import logging
import re

from restdns import exc

_LOGGER = logging.getLogger(__name__)

_ZONE_PATH_RE = re.compile(r'^/([0-9a-zA-Z.-]+)/*.*')


def zone_from_path(path):
    """Extract the candidate zone name from request path."""
    match = _ZONE_PATH_RE.match(path or '')
    if not match:
        return None
    return match.group(1)


def _in_networks(address, networks):
    """Check if the ip address belongs to any of the networks."""
    return any(address in network for network in networks)


class ZoneAuthorizer(object):
    """Authorizes zone access given the caller source IP."""

    def __init__(self, managed_zones):
        self.managed_zones = managed_zones

    def authorize(self, zone, source_ip):
        """Raise NotAllowedError unless source_ip may manage the zone."""
        managed = self.managed_zones.get(zone)
        if managed is None:
            raise exc.NotAllowedError(
                'Zone %s is not managed by this host' % zone)

        try:
            address = ipaddress.ip_address(str(source_ip))
        except ValueError:
            address = None

        if address is None or not _in_networks(address,
                                               managed.source_networks):
            raise exc.NotAllowedError(
                'IP %s is not allowed to manage this zone' % source_ip)

        _LOGGER.debug('Authorized: %s %s', zone, source_ip)

    def ip_managed(self, zone, ip):
        """Check if reverse records for ip may be managed by the zone."""
        managed = self.managed_zones.get(zone)
        if managed is None:
            return False
        return _in_networks(ipaddress.ip_address(ip),
                            managed.managed_networks)

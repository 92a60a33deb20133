"""restdns API implementations.

Directory (ldap3) failures are translated into restdns errors at the point
of the failing call, see directory_errors().
"""

import contextlib
import logging

from ldap3.core import exceptions as ldap_exceptions

from restdns import admin
from restdns import config
from restdns import context
from restdns import exc


_LOGGER = logging.getLogger(__name__)

_NOT_FOUND = (
    ldap_exceptions.LDAPNoSuchObjectResult,
    ldap_exceptions.LDAPNoSuchAttributeResult,
)

_ALREADY_EXISTS = (
    ldap_exceptions.LDAPEntryAlreadyExistsResult,
    ldap_exceptions.LDAPAttributeOrValueExistsResult,
)


@contextlib.contextmanager
def directory_errors(admin_ctx, not_found=None, already_exists=None):
    """Translate directory exceptions raised in the block.

    :param admin_ctx: context owning the connection, reset on
        communication failures.
    :param not_found: message for no such object/attribute results.
    :param already_exists: message for entry/value exists results.
    """
    try:
        yield
    except _NOT_FOUND as err:
        _LOGGER.info('Not found: %s', err)
        raise exc.NotFoundError(not_found or str(err))
    except _ALREADY_EXISTS as err:
        _LOGGER.info('Already exists: %s', err)
        raise exc.AlreadyExistsError(already_exists or str(err))
    except (ldap_exceptions.LDAPCommunicationError,
            ldap_exceptions.LDAPBindError) as err:
        _LOGGER.exception('Directory connection failed.')
        admin_ctx.reset()
        raise exc.DatabaseError(str(err))
    except ldap_exceptions.LDAPException as err:
        _LOGGER.exception('Directory operation failed.')
        raise exc.DatabaseError(str(err))
    except context.ContextError as err:
        raise exc.DatabaseError(str(err))


def ensure_zone(admin_ctx, zone, defaults):
    """Create the zone with default SOA values unless it exists."""
    with directory_errors(admin_ctx):
        zone_admin = admin.Zone(admin_ctx.conn)
        if zone_admin.exists(zone):
            return False

        _LOGGER.info('Creating zone: %s', zone)
        zone_admin.create(zone, config.zone_attrs(defaults))
        return True

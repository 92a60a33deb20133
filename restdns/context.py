"""restdns directory context."""

import logging

from restdns import admin


_LOGGER = logging.getLogger(__name__)


class ContextError(Exception):
    """Raised when LDAP connection parameters are missing."""
    pass


class AdminContext(object):
    """Ldap context, owns the process wide directory connection."""
    __slots__ = (
        'ldap_suffix',
        'url',
        'user',
        'password',
        '_conn',
    )

    def __init__(self, url=None, ldap_suffix=None, user=None, password=None):
        self.ldap_suffix = ldap_suffix
        self.url = url
        self.user = user
        self.password = password
        self._conn = None

    @classmethod
    def from_settings(cls, ldap_settings):
        """Create context from config.LdapSettings."""
        return cls(url=ldap_settings.url,
                   ldap_suffix=ldap_settings.basedn,
                   user=ldap_settings.binddn,
                   password=ldap_settings.bindpw)

    @property
    def conn(self):
        """Lazily establishes connection to admin LDAP."""
        if self._conn is None:
            if self.ldap_suffix is None:
                raise ContextError('LDAP suffix is not set.')

            if self.url is None:
                raise ContextError('LDAP url not set.')

            _LOGGER.debug('Connecting to LDAP %s, %s',
                          self.url, self.ldap_suffix)

            conn = admin.Admin(self.url, self.ldap_suffix,
                               user=self.user, password=self.password)
            conn.connect()
            self._conn = conn

        return self._conn

    def reset(self):
        """Drop the connection, next use of conn reconnects."""
        if self._conn is not None:
            _LOGGER.info('Resetting LDAP connection to %s', self.url)
            self._conn.close()
        self._conn = None

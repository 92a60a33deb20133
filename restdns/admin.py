"""Low level admin API to manipulate DNS zones and records in ldap."""

import collections.abc
import copy
import logging

import ldap3
from ldap3.core import exceptions as ldap_exceptions
from ldap3.utils import dn as dn_utils


# Disable invalid name for type argument, pylint complains about 'dn'.
#
# pylint: disable=C0103

_LOGGER = logging.getLogger(__name__)

# LDAP result codes translated into ldap3 exception types.
_RESULT_2_EXCEPTION = {
    16: ldap_exceptions.LDAPNoSuchAttributeResult,
    20: ldap_exceptions.LDAPAttributeOrValueExistsResult,
    32: ldap_exceptions.LDAPNoSuchObjectResult,
    50: ldap_exceptions.LDAPInsufficientAccessRightsResult,
    68: ldap_exceptions.LDAPEntryAlreadyExistsResult,
}


def _entry_2_dict(entry, schema):
    """Convert LDAP entry like object to dict."""
    # Attribute names are case insensitive, servers may return any case.
    entry = {k.lower(): v for k, v in entry.items()}

    obj = dict()
    for ldap_field, obj_field, field_type in schema:
        if obj_field is None:
            continue

        value = entry.get(ldap_field.lower())
        if not value:
            if isinstance(field_type, list):
                obj[obj_field] = []
            else:
                obj[obj_field] = None
            continue

        if isinstance(field_type, list):
            obj[obj_field] = list(map(field_type[0], value))
        elif field_type == bool:
            obj[obj_field] = value[0].upper() == 'TRUE'
        else:
            obj[obj_field] = field_type(value[0])

    return {k: v for k, v in obj.items() if v is not None}


def _dict_2_entry(obj, schema):
    """Converts dict to ldap entry."""
    entry = dict()

    for ldap_field, obj_field, field_type in schema:
        if obj_field not in obj:
            continue

        value = obj[obj_field]
        if value is None:
            entry[ldap_field] = []
        elif isinstance(field_type, list):
            entry[ldap_field] = [str(v) for v in value]
        elif field_type == bool:
            entry[ldap_field] = [str(bool(value)).upper()]
        else:
            entry[ldap_field] = [str(value)]

    return entry


def _remove_empty(entry):
    """Remove any empty values and empty lists from entry."""
    new_entry = copy.deepcopy(entry)
    emptykeys = [k for k, v in new_entry.items() if not v]
    for k in emptykeys:
        del new_entry[k]

    return new_entry


def _dict_normalize(data):
    """Normalize raw ldap values (bytes) to strings."""
    if isinstance(data, bytes):
        return data.decode('utf-8')
    elif isinstance(data, str):
        return data
    elif isinstance(data, collections.abc.Mapping):
        return dict(map(_dict_normalize, iter(data.items())))
    elif isinstance(data, collections.abc.Iterable):
        return type(data)(map(_dict_normalize, data))
    else:
        return data


class Admin(object):
    """Manages DNS objects in ldap."""

    def __init__(self, uri, root_dn, user=None, password=None):
        self.uri = uri
        if uri and not isinstance(uri, list):
            self.uri = uri.split(',')
        self.root_dn = root_dn
        self.user = user
        self.password = password
        self.ldap = None

    def close(self):
        """Closes ldap connection."""
        try:
            if self.ldap:
                self.ldap.unbind()
        except ldap_exceptions.LDAPCommunicationError:
            _LOGGER.exception('cannot close connection.')

    def dn(self, parts):
        """Constructs dn."""
        return ','.join(parts + [self.root_dn])

    def connect(self):
        """Connects (binds) to LDAP server."""
        if self.user:
            credentials = {'user': self.user,
                           'password': self.password,
                           'authentication': ldap3.SIMPLE}
        else:
            credentials = {'authentication': ldap3.ANONYMOUS}

        last_error = None
        for uri in self.uri or []:
            try:
                server = ldap3.Server(uri, get_info=ldap3.NONE)
                self.ldap = ldap3.Connection(
                    server,
                    client_strategy=ldap3.SYNC,
                    auto_bind=True,
                    **credentials
                )
            except (ldap_exceptions.LDAPSocketOpenError,
                    ldap_exceptions.LDAPBindError) as err:
                _LOGGER.exception('Could not connect to %s', uri)
                last_error = err
            else:
                _LOGGER.info('Connected to %s as %s',
                             uri, self.user or 'anonymous')
                break

        if not self.ldap:
            if last_error is None:
                last_error = ldap_exceptions.LDAPSocketOpenError(
                    'No LDAP server uri configured')
            raise last_error

    def search(self, search_base, search_filter, search_scope=ldap3.SUBTREE,
               attributes=None):
        """Call ldap search and return a list of dn, entry tuples."""
        _LOGGER.debug('search: %s %s %s', search_base, search_scope,
                      search_filter)
        self.ldap.search(search_base=search_base,
                         search_filter=search_filter,
                         search_scope=search_scope,
                         attributes=attributes,
                         dereference_aliases=ldap3.DEREF_NEVER)

        self._test_raise_exceptions()

        if not self.ldap.response:
            return

        for entry in self.ldap.response:
            if entry.get('type') != 'searchResEntry':
                continue
            yield str(entry['dn']), _dict_normalize(entry['raw_attributes'])

    def _test_raise_exceptions(self):
        """
        Looks for specific error conditions or throws if non-success state.
        """
        if not self.ldap.result or 'result' not in self.ldap.result:
            return

        result_code = self.ldap.result['result']
        if result_code == 0:
            return

        exception_type = _RESULT_2_EXCEPTION.get(
            result_code, ldap_exceptions.LDAPOperationResult)

        raise exception_type(result=result_code,
                             description=self.ldap.result['description'],
                             dn=self.ldap.result['dn'],
                             message=self.ldap.result['message'],
                             response_type=self.ldap.result['type'])

    def modify(self, dn, changes):
        """Call ldap modify and raise exception on non-success."""
        if changes:
            _LOGGER.debug('modify: %s - %r', dn, changes)
            self.ldap.modify(dn, changes)
            self._test_raise_exceptions()

    def add(self, dn, object_class=None, attributes=None):
        """Call ldap add and raise exception on non-success."""
        self.ldap.add(dn, object_class, attributes)
        self._test_raise_exceptions()

    def delete(self, dn):
        """Call ldap delete and raise exception on non-success."""
        _LOGGER.debug('delete: %s', dn)
        self.ldap.delete(dn)
        self._test_raise_exceptions()

    def get(self, dn, query, attrs):
        """Gets LDAP object given dn."""
        result = self.search(search_base=dn,
                             search_filter=str(query),
                             search_scope=ldap3.BASE,
                             attributes=attrs)
        for _dn, entry in result:
            return entry

        return None

    def create(self, dn, entry):
        """Creates LDAP record."""
        _LOGGER.debug('create: %s - %s', dn, entry)
        self.add(dn, attributes=entry)


class LdapObject(object):
    """Ldap object base class."""

    def __init__(self, admin):
        self.admin = admin

    def from_entry(self, entry, _dn=None):
        """Converts ldap entry to dict."""
        return _entry_2_dict(entry, self.schema())

    def to_entry(self, obj):
        """Converts object to LDAP entry."""
        return _dict_2_entry(obj, self.schema())

    def attrs(self):
        """Returns list of object attributes."""
        return [ldap_field for ldap_field, _, _, in self.schema()]

    def _query(self):
        """Default search filter, all entries of the object class."""
        return '(objectClass=%s)' % self.oc()

    def container(self):
        """Dn parts of the container holding the objects."""
        return []

    def dn(self, ident=None):
        """Object dn."""
        parts = self.container()
        if ident:
            parts = ['%s=%s' % (self.entity(), dn_utils.escape_rdn(ident))
                     ] + parts

        return self.admin.dn(parts)

    def get(self, ident):
        """Gets object given identity, None if the entry does not exist."""
        try:
            entry = self.admin.get(self.dn(ident),
                                   '(objectClass=*)',
                                   self.attrs())
        except ldap_exceptions.LDAPNoSuchObjectResult:
            return None

        if entry is None:
            return None

        return self.from_entry(entry, self.dn(ident))

    def exists(self, ident):
        """Checks if the object entry exists."""
        return self.get(ident) is not None

    def create(self, ident, attrs):
        """Create new ldap record."""
        entry = _remove_empty(self.to_entry(attrs))
        entry.update({'objectClass': self.object_classes(),
                      self.entity(): [str(ident)]})

        self.admin.create(self.dn(ident), entry)

    def list(self):
        """List all objects of the class in the container."""
        query = self._query()
        _LOGGER.debug('Query: %s', query)
        result = self.admin.search(search_base=self.dn(),
                                   search_filter=query,
                                   search_scope=self.scope(),
                                   attributes=self.attrs())
        return [self.from_entry(entry, dn) for dn, entry in result]

    def _modify_values(self, ident, attrs, operation):
        """Apply the operation to each attribute value given."""
        entry = _remove_empty(self.to_entry(attrs))
        changes = {
            k: [(operation, v)] for k, v in entry.items()
        }
        self.admin.modify(self.dn(ident), changes)

    def add_values(self, ident, attrs):
        """Adds values to (multi valued) attributes of the record."""
        self._modify_values(ident, attrs, ldap3.MODIFY_ADD)

    def remove_values(self, ident, attrs):
        """Removes values from attributes of the record."""
        self._modify_values(ident, attrs, ldap3.MODIFY_DELETE)

    def replace_values(self, ident, attrs):
        """Replaces attribute values of the record."""
        self._modify_values(ident, attrs, ldap3.MODIFY_REPLACE)

    def delete(self, ident):
        """Deletes LDAP record."""
        assert ident is not None
        self.admin.delete(self.dn(ident))


class Zone(LdapObject):
    """DNS zone object."""

    _schema = [
        ('idnsName', '_id', str),
        ('idnsZoneActive', 'active', bool),
        ('idnsSOAmName', 'soa_mname', str),
        ('idnsSOArName', 'soa_rname', str),
        ('idnsSOAserial', 'soa_serial', int),
        ('idnsSOArefresh', 'soa_refresh', int),
        ('idnsSOAretry', 'soa_retry', int),
        ('idnsSOAexpire', 'soa_expire', int),
        ('idnsSOAminimum', 'soa_minimum', int),
        ('nSRecord', 'nameservers', [str]),
    ]

    _oc = 'idnsZone'
    _object_classes = ['top', 'idnsRecord', 'idnsZone']
    _entity = 'idnsName'
    _scope = ldap3.SUBTREE


# pylint: disable=W0212
Zone.schema = staticmethod(lambda: Zone._schema)
Zone.oc = staticmethod(lambda: Zone._oc)
Zone.object_classes = staticmethod(lambda: list(Zone._object_classes))
Zone.entity = staticmethod(lambda: Zone._entity)
Zone.scope = staticmethod(lambda: Zone._scope)


class Record(LdapObject):
    """DNS resource record object, stored under its zone."""

    _schema = [
        ('idnsName', '_id', str),
        ('aRecord', 'ipaddress', [str]),
        ('cNAMERecord', 'cname', [str]),
        ('pTRRecord', 'ptr', [str]),
        ('dNSTTL', 'ttl', int),
    ]

    _oc = 'idnsRecord'
    _object_classes = ['top', 'idnsRecord']
    _entity = 'idnsName'
    _scope = ldap3.LEVEL

    def __init__(self, admin, zone):
        super(Record, self).__init__(admin)
        self.zone = zone

    def container(self):
        """Records live directly under the zone entry."""
        return ['%s=%s' % (Zone.entity(), dn_utils.escape_rdn(self.zone))]


Record.schema = staticmethod(lambda: Record._schema)
Record.oc = staticmethod(lambda: Record._oc)
Record.object_classes = staticmethod(lambda: list(Record._object_classes))
Record.entity = staticmethod(lambda: Record._entity)
Record.scope = staticmethod(lambda: Record._scope)

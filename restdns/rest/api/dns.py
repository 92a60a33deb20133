"""
restdns DNS zone/host REST api.
"""

import http.client

import flask
import flask_restx as restx
from flask_restx import fields

from restdns import exc
from restdns import schema
from restdns import utils
from restdns import webutils


def _not_supported(method, resource):
    """Response for methods a resource does not support."""
    return ({'error': '%s is not supported by %s resources' % (method,
                                                               resource)},
            http.client.METHOD_NOT_ALLOWED)


# Old style classes, no init method.
#
# pylint: disable=W0232
def init(api, cors, impl):
    """Configures REST handlers for DNS zone and host resources."""
    # Disable too many statements warning.
    #
    # pylint: disable=R0915
    namespace = webutils.namespace(
        api, __name__, 'DNS zone and host operations', path='/'
    )

    host_model = api.model('Host', {
        'ipaddress': fields.List(fields.String(description='IP address')),
        'cname': fields.List(fields.String(description='Canonical name')),
        'ttl': fields.Integer(description='Time To Live'),
    })

    reverse_model = api.model('Reverse', {
        'reverse': fields.Boolean(description='Host owns the PTR record'),
    })

    request_model = api.model('HostReq', {
        'reverse': fields.Boolean(description='Manage the PTR record',
                                  default=False),
        'ttl': fields.Integer(description='Time To Live'),
    })

    replace_parser = api.parser()
    replace_parser.add_argument('replace', help='Replace existing PTR record',
                                location='args', required=False)

    def _body():
        """Parsed request body."""
        return schema.parse_body(flask.request.get_data())

    def _replace():
        """Value of the replace query argument."""
        args = replace_parser.parse_args()
        return args.get('replace') == 'true'

    @namespace.route('/')
    class _ZoneList(restx.Resource):
        """DNS zone list resource"""

        @webutils.get_api(api, cors)
        def get(self):
            """Returns list of managed forward zones."""
            return impl.list_zones()

    @namespace.route('/<zone>')
    @api.doc(params={'zone': 'Zone name'})
    class _Zone(restx.Resource):
        """DNS zone resource, lists the zone hosts."""

        @webutils.get_api(api, cors)
        def get(self, zone):
            """Returns list of hosts in the zone."""
            return impl.list_hosts(zone)

        @webutils.post_api(api, cors)
        def post(self, zone):
            """Zones are created implicitly."""
            return _not_supported('POST', 'zone')

        @webutils.put_api(api, cors)
        def put(self, zone):
            """Zones are read only."""
            return _not_supported('PUT', 'zone')

        @webutils.delete_api(api, cors)
        def delete(self, zone):
            """Zones are never deleted."""
            return _not_supported('DELETE', 'zone')

    @namespace.route('/<zone>/<host>')
    @api.doc(params={'zone': 'Zone name', 'host': 'Host name'})
    class _Host(restx.Resource):
        """DNS host resource."""

        @webutils.get_api(api, cors,
                          marshal=api.marshal_with,
                          resp_model=host_model)
        def get(self, zone, host):
            """Returns host addresses, cnames and TTL."""
            return impl.get_host(zone, host)

        @webutils.post_api(api, cors, req_model=request_model)
        def post(self, zone, host):
            """Creates host."""
            body = _body()
            impl.create_host(zone, host, body['ttl'])
            return None, http.client.PARTIAL_CONTENT

        @webutils.put_api(api, cors,
                          req_model=request_model,
                          resp_model=host_model)
        def put(self, zone, host):
            """Changes host TTL."""
            body = _body()
            if body['ttl'] is None:
                raise exc.InvalidInputError('TTL value is mandatory')
            return impl.change_ttl(zone, host, body['ttl'])

        @webutils.delete_api(api, cors)
        def delete(self, zone, host):
            """Deletes host, its addresses and PTR records."""
            impl.delete_host(zone, host)
            return None, http.client.NO_CONTENT

    @namespace.route('/<zone>/<host>/ipaddress')
    @api.doc(params={'zone': 'Zone name', 'host': 'Host name'})
    class _IpAddressList(restx.Resource):
        """Host address list resource."""

        @webutils.get_api(api, cors)
        def get(self, zone, host):
            """Returns host addresses."""
            return impl.get_host(zone, host)['ipaddress']

    @namespace.route('/<zone>/<host>/ipaddress/<ip>')
    @api.doc(params={'zone': 'Zone name', 'host': 'Host name',
                     'ip': 'IP address'})
    class _IpAddress(restx.Resource):
        """Host address resource."""

        def _check_address(self, zone, host, ip):
            """Raise NotFoundError unless host has the ip."""
            if not impl.has_address(zone, host, ip):
                raise exc.NotFoundError(
                    'Host %s does not have ip %s' % (host, ip))

        @webutils.get_api(api, cors,
                          marshal=api.marshal_with,
                          resp_model=reverse_model)
        def get(self, zone, host, ip):
            """Checks if the host owns the PTR record of the address."""
            self._check_address(zone, host, ip)
            return {'reverse': impl.reverse.owns_reverse(ip, zone, host)}

        @webutils.post_api(api, cors,
                           req_model=request_model,
                           parser=replace_parser)
        def post(self, zone, host, ip):
            """Adds address to host, optionally with PTR record."""
            body = _body()
            replace = _replace()
            utils.validate_ipv4(ip)

            if not impl.host_exists(zone, host):
                impl.create_host(zone, host, body['ttl'])
            impl.add_address(zone, host, ip)
            if body['reverse']:
                impl.reverse.create_reverse(ip, zone, host, replace)

            return None, http.client.PARTIAL_CONTENT

        @webutils.put_api(api, cors,
                          req_model=request_model,
                          parser=replace_parser)
        def put(self, zone, host, ip):
            """Creates or removes the PTR record of the address."""
            body = _body()
            replace = _replace()
            self._check_address(zone, host, ip)

            owned = impl.reverse.owns_reverse(ip, zone, host)
            if body['reverse']:
                if not owned:
                    impl.reverse.create_reverse(ip, zone, host, replace)
            elif owned:
                impl.reverse.delete_reverse(zone, ip)

            return None, http.client.NO_CONTENT

        @webutils.delete_api(api, cors)
        def delete(self, zone, host, ip):
            """Removes address from host, with the PTR record it owns."""
            self._check_address(zone, host, ip)
            impl.remove_address(zone, host, ip)
            return None, http.client.NO_CONTENT

    @namespace.route('/<zone>/<host>/cname')
    @api.doc(params={'zone': 'Zone name', 'host': 'Host name'})
    class _CnameList(restx.Resource):
        """Host cname list resource."""

        @webutils.get_api(api, cors)
        def get(self, zone, host):
            """Returns host cnames."""
            return impl.get_host(zone, host)['cname']

    @namespace.route('/<zone>/<host>/cname/<cname>')
    @api.doc(params={'zone': 'Zone name', 'host': 'Host name',
                     'cname': 'Canonical name'})
    class _Cname(restx.Resource):
        """Host cname resource."""

        def _check_cname(self, zone, host, cname):
            """Raise NotFoundError unless host has the cname."""
            if not impl.has_cname(zone, host, cname):
                raise exc.NotFoundError(
                    'Host %s does not have cname %s' % (host, cname))

        @webutils.get_api(api, cors)
        def get(self, zone, host, cname):
            """Checks the host has the cname."""
            self._check_cname(zone, host, cname)
            return {}

        @webutils.post_api(api, cors, req_model=request_model)
        def post(self, zone, host, cname):
            """Adds cname to host, creating the host if needed."""
            body = _body()
            impl.add_cname(zone, host, cname, body['ttl'])
            return None, http.client.PARTIAL_CONTENT

        @webutils.put_api(api, cors)
        def put(self, zone, host, cname):
            """Cnames can only be added or removed."""
            return _not_supported('PUT', 'cname')

        @webutils.delete_api(api, cors)
        def delete(self, zone, host, cname):
            """Removes cname from host."""
            self._check_cname(zone, host, cname)
            impl.remove_cname(zone, host, cname)
            return None, http.client.NO_CONTENT

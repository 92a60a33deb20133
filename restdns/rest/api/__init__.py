"""restdns REST APIs.
"""

import http.client
import json
import logging

import flask
import flask_restx as restx

from restdns import authz
from restdns import exc
from restdns import rest
from restdns import webutils
from restdns.api import dns as dns_api
from restdns.rest import error_handlers
from restdns.rest.api import dns


_LOGGER = logging.getLogger(__name__)


class Api(restx.Api):
    """flask-restx Api without documentation routes, / lists the zones.

    Unrouted paths are answered by the registered error handlers.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('catch_all_404s', True)
        super().__init__(*args, **kwargs)

    def _register_doc(self, app_or_blueprint):
        pass


def register_zone_filter(app, authorizer):
    """Authorize every request naming a zone before it reaches a handler."""

    @app.before_request
    def _before_request_zone_handler():
        zone = authz.zone_from_path(flask.request.path)
        if zone is None:
            return None

        source_ip = flask.request.remote_addr
        try:
            authorizer.authorize(zone, source_ip)
        except exc.NotAllowedError as err:
            _LOGGER.info('Rejected %s %s from %s: %s',
                         flask.request.method, flask.request.path,
                         source_ip, err.message)
            body, status, headers = error_handlers.error_response(
                err.message, http.client.FORBIDDEN)
            return flask.make_response(json.dumps(body), status, headers)

        return None


def base_api(title=None, cors_origin=None):
    """Create base_api object"""

    blueprint = flask.Blueprint('v1', __name__)

    api = Api(blueprint, version='1.0',
              title=title,
              description='restdns REST API Documentation',
              doc=False,
              add_specs=False)

    error_handlers.register(api)

    cors = webutils.cors(origin=cors_origin,
                         content_type='application/json',
                         credentials=True)

    @rest.FLASK_APP.after_request
    def _after_request_cors_handler(response):
        """Process all OPTIONS request, thus don't need to add to each app"""
        if flask.request.method != 'OPTIONS':
            return response

        _LOGGER.debug('This is an OPTIONS call')

        def _noop_options():
            """No noop response handler for all OPTIONS"""
            pass

        headers = flask.request.headers.get('Access-Control-Request-Headers')
        options_cors = webutils.cors(origin=cors_origin,
                                     credentials=True,
                                     headers=headers)
        response = options_cors(_noop_options)()
        return response

    return (api, cors)


def init(settings, admin_ctx, title=None):
    """Module initialization."""
    register_zone_filter(rest.FLASK_APP,
                         authz.ZoneAuthorizer(settings.managed_zones))

    (api, cors) = base_api(title, settings.server.cors_origin)

    impl = dns_api.init(admin_ctx, settings)
    dns.init(api, cors, impl)

    # Resources must be in place before the blueprint is registered.
    rest.FLASK_APP.register_blueprint(api.blueprint)

    _LOGGER.info('Managing zones: %s', ', '.join(settings.managed_zones))
    return api

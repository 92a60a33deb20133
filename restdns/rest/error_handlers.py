"""REST Error Handlers module.

This contains all of the error handlers for possible exceptions being thrown
in our REST endpoints. Every error response body is {"error": <message>}.
"""

import http.client
import logging

import jsonschema
import werkzeug.exceptions
from ldap3.core import exceptions as ldap_exceptions

from restdns import exc
from restdns import webutils


_LOGGER = logging.getLogger(__name__)


def _cors_headers():
    return webutils.cors_make_headers(base_origin='.*',
                                      max_age=21600,
                                      credentials=True,
                                      content_type='application/json')


def error_response(message, status):
    """Error response tuple as returned by the handlers."""
    return {'error': message}, status, _cors_headers()


def register(api):
    """Register common error handlers."""

    @api.errorhandler(exc.NotAllowedError)
    def _not_allowed_exc(err):
        """NotAllowedError exception handler."""
        _LOGGER.info('Not allowed: %s', err.message)
        return error_response(err.message, http.client.FORBIDDEN)

    @api.errorhandler(exc.InvalidInputError)
    def _invalid_input_exc(err):
        """InvalidInputError exception handler."""
        _LOGGER.info('Invalid input error: %s', err.message)
        return error_response(err.message, http.client.BAD_REQUEST)

    @api.errorhandler(exc.NotFoundError)
    def _not_found_exc(err):
        """NotFoundError exception handler."""
        _LOGGER.info('Not found error: %s', err.message)
        return error_response(err.message, http.client.NOT_FOUND)

    @api.errorhandler(exc.AlreadyExistsError)
    def _already_exists_exc(err):
        """AlreadyExistsError exception handler."""
        _LOGGER.info('Resource already exists: %s', err.message)
        return error_response(err.message, http.client.CONFLICT)

    @api.errorhandler(exc.DatabaseError)
    def _database_exc(err):
        """DatabaseError exception handler."""
        _LOGGER.error('Database error: %s', err.message)
        return error_response('Database error: %s' % err.message,
                              http.client.INTERNAL_SERVER_ERROR)

    @api.errorhandler(exc.RestDnsError)
    def _restdns_exc(err):
        """restdns exception handler."""
        _LOGGER.exception('restdns error: %r', err)
        return error_response(err.message, http.client.INTERNAL_SERVER_ERROR)

    @api.errorhandler(jsonschema.exceptions.ValidationError)
    def _json_validation_error_exc(err):
        """JSON Schema Validation error exception handler."""
        _LOGGER.info('Schema validation error: %r', err)
        return error_response(err.message, http.client.BAD_REQUEST)

    @api.errorhandler(ldap_exceptions.LDAPException)
    def _ldap_exc(err):
        """Untranslated LDAP exception handler."""
        _LOGGER.exception('Ldap error: %r', err)
        return error_response('Database error: %s' % err,
                              http.client.INTERNAL_SERVER_ERROR)

    @api.errorhandler(Exception)
    def _unhandled_exc(err):
        """Unhandled exception handler."""
        if isinstance(err, werkzeug.exceptions.HTTPException):
            _LOGGER.info('HTTP error: %r', err)
            return error_response(err.description, err.code)

        _LOGGER.exception('exception: %r', err)
        return error_response(str(err), http.client.INTERNAL_SERVER_ERROR)

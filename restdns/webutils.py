"""Flask method decorators and other web utilities."""


import datetime
import functools
import logging
import json
import re

import flask

from restdns import utils

_LOGGER = logging.getLogger(__name__)


def as_json(func):
    """Marshalls function output as json.

    Handlers may return (payload, status); a None payload is sent as an
    empty body.
    """
    @functools.wraps(func)
    def decorated_function(*args, **kwargs):
        """Marshalls function output as json."""
        result = func(*args, **kwargs)
        if isinstance(result, flask.Response):
            return result

        if isinstance(result, tuple):
            payload, status = result
            if payload is None:
                return '', status
            return json.dumps(payload), status

        return json.dumps(result)

    return decorated_function


def cors_domain_match(base_domain):
    """Backward compatability, where * is used to respond to all"""
    if base_domain == '*':
        return base_domain

    origin_re = re.compile(r'https?://%s' % base_domain)

    key = 'HTTP_ORIGIN'
    if key not in flask.request.environ.keys():
        return None

    origin = flask.request.environ[key]
    if origin and origin_re.match(origin):
        return origin
    else:
        return None


def cors_make_headers(base_origin, max_age, credentials, content_type,
                      headers=None):
    """Creates CORS headers for error responses."""
    hdr = {
        'Access-Control-Max-Age': str(max_age),
        'Access-Control-Allow-Credentials': str(credentials).lower(),
        'Content-Type': content_type,
    }
    origin = cors_domain_match(base_origin)
    if origin is not None:
        hdr['Access-Control-Allow-Origin'] = origin
    if headers is not None:
        hdr['Access-Control-Allow-Headers'] = headers
    return hdr


def cors(origin=None, methods=None, headers=None, max_age=21600,
         attach_to_all=True, automatic_options=True,
         credentials=False, content_type=None):
    # pylint: disable=R0912
    """Flask decorator to insert CORS headers to the response.

    :param origin:
        This can be ``*`` or a regex, e.g. .*.xxx.com
    """
    if methods is not None:
        methods = ', '.join(sorted(mthd.upper() for mthd in methods))
    if headers is not None and not isinstance(headers, str):
        headers = ', '.join(hdr.upper() for hdr in headers)
    if origin is None:
        origin = '*'
    if not isinstance(origin, str):
        origin = ', '.join(origin)
    if isinstance(max_age, datetime.timedelta):
        max_age = max_age.total_seconds()

    if credentials and origin == '*':
        raise ValueError("Cannot allow credentials with Origin set to '*'")

    def get_methods():
        """Return allowed methods for CORS response."""
        if methods is not None:
            return methods

        options_resp = flask.current_app.make_default_options_response()
        return options_resp.headers['allow']

    def decorator(func):
        """Function decorator to insert CORS headers."""
        def wrapped_function(*args, **kwargs):
            """Wrapper function to add required headers."""
            if automatic_options and flask.request.method == 'OPTIONS':
                resp = flask.current_app.make_default_options_response()
            else:
                resp = flask.make_response(func(*args, **kwargs))
            if not attach_to_all and flask.request.method != 'OPTIONS':
                return resp

            hdr = resp.headers

            allow_origin = cors_domain_match(origin)
            if allow_origin is not None:
                hdr['Access-Control-Allow-Origin'] = allow_origin
            hdr['Access-Control-Allow-Methods'] = get_methods()
            hdr['Access-Control-Max-Age'] = str(max_age)
            hdr['Access-Control-Allow-Credentials'] = str(credentials).lower()
            if content_type is not None:
                hdr['Content-Type'] = content_type
            if headers is not None:
                hdr['Access-Control-Allow-Headers'] = headers
            return resp

        func.provide_automatic_options = False
        return functools.update_wrapper(wrapped_function, func)

    return decorator


def log_header(func):
    """Flask decorator to log the request headers at debug level."""
    def wrapped_function(*args, **kwargs):
        """Wrapper function to log the headers."""
        resp = flask.make_response(func(*args, **kwargs))
        _LOGGER.debug('headers: %r', flask.request.headers)
        return resp

    func.provide_automatic_options = False
    return functools.update_wrapper(wrapped_function, func)


def no_cache(func):
    """Decorator to disable proxy response caching."""
    def wrapped_function(*args, **kwargs):
        """Wrapper function to add required headers."""
        if flask.request.method == 'OPTIONS':
            resp = flask.current_app.make_default_options_response()
        else:
            resp = flask.make_response(func(*args, **kwargs))

        hdr = resp.headers
        hdr['Cache-Control'] = 'no-cache, no-store, must-revalidate'

        return resp

    func.provide_automatic_options = False
    return functools.update_wrapper(wrapped_function, func)


def get_api(api, cors_handler, marshal=None, resp_model=None,
            parser=None):
    """Returns default API decorator for GET request.

    :param api: Flask restx API
    :param cors_handler: CORS handler
    :param marshal: The API marshaller, e.g. api.marshal_list_with
    :param resp_model: The API response model
    """
    funcs = [
        cors_handler,
        no_cache,
        log_header,
        as_json,
        api.doc(responses={
            403: 'Not Authorized',
            404: 'Resource does not exist',
        }),
    ]

    if parser:
        funcs.insert(-1, api.doc(expect=[parser]))
    if marshal and resp_model:
        funcs.insert(-1, marshal(resp_model))

    return utils.compose(*funcs)


def _common_api(api, cors_handler, marshal=None, req_model=None,
                resp_model=None, parser=None):
    """Returns default API decorator for common r/w requests.

    :param api: Flask restx API
    :param cors_handler: CORS handler
    :param marshal: The API marshaller, e.g. api.marshal_list_with, this will
        override the default `api.marshal_with()`
    :param req_model: The API request model
    :param resp_model: The API response model
    """
    funcs = [
        cors_handler,
        no_cache,
        log_header,
        as_json,
        api.doc(responses={
            400: 'Invalid input',
            403: 'Not Authorized',
            404: 'Resource does not exist',
            409: 'Resource already exists',
        }),
    ]

    expect = [item for item in (req_model, parser) if item is not None]
    if expect:
        funcs.insert(-1, api.doc(expect=expect))

    if marshal and resp_model:
        funcs.insert(-1, marshal(resp_model))
    elif resp_model:
        funcs.insert(-1, api.marshal_with(resp_model))

    return utils.compose(*funcs)


def post_api(api, cors_handler, marshal=None, req_model=None, resp_model=None,
             parser=None):
    """Returns default API decorator for POST request."""
    return _common_api(
        api, cors_handler,
        marshal=marshal,
        req_model=req_model,
        resp_model=resp_model,
        parser=parser,
    )


def put_api(api, cors_handler, req_model=None, resp_model=None, parser=None):
    """Returns default API decorator for PUT request."""
    return _common_api(
        api, cors_handler,
        req_model=req_model,
        resp_model=resp_model,
        parser=parser,
    )


def delete_api(api, cors_handler, req_model=None, resp_model=None):
    """Returns default API decorator for DELETE request."""
    return _common_api(
        api, cors_handler,
        req_model=req_model,
        resp_model=resp_model,
    )


def namespace(api, name, description, path=None):
    """Return namespace name for the given module."""
    return api.namespace(
        name.split('.')[-1].replace('_', '-'),
        description=description,
        path=path
    )

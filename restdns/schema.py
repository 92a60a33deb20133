"""Request body validation with jsonschema."""

import json
import logging

import jsonschema

from restdns import exc


_LOGGER = logging.getLogger(__name__)

# Largest TTL a dNSTTL attribute accepts.
MAX_TTL = 2147483647

BODY = {
    'type': 'object',
    'properties': {
        'reverse': {'type': ['boolean', 'null']},
        'ttl': {
            'anyOf': [
                {'type': 'integer', 'minimum': 0},
                {'type': 'string', 'pattern': r'^[0-9]+$'},
                {'type': 'null'},
            ],
        },
    },
}

_MESSAGES = {
    'reverse': 'Reverse must be a boolean value',
    'ttl': 'TTL must be a number',
}

_VALIDATOR = jsonschema.Draft4Validator(BODY)


def parse_body(data):
    """Parse and validate POST/PUT request body.

    Returns dict with normalized 'reverse' (bool) and 'ttl' (int or None).
    """
    if isinstance(data, bytes):
        data = data.decode('utf-8', 'replace')

    if data is None or not data.strip():
        body = {}
    else:
        try:
            body = json.loads(data)
        except ValueError as err:
            raise exc.InvalidInputError('JSON parser error : %s' % err)

    try:
        _VALIDATOR.validate(body)
    except jsonschema.exceptions.ValidationError as err:
        _LOGGER.debug('Invalid body: %r, %s', body, err.message)
        field = err.absolute_path[0] if err.absolute_path else None
        raise exc.InvalidInputError(
            _MESSAGES.get(field, 'Request body must be a JSON object'))

    ttl = body.get('ttl')
    if ttl is not None:
        ttl = int(ttl)
        if ttl > MAX_TTL:
            raise exc.InvalidInputError(
                'TTL must not be greater than %d' % MAX_TTL)

    return {
        'reverse': bool(body.get('reverse')),
        'ttl': ttl,
    }

"""restdns exceptions.
"""

import logging

_LOGGER = logging.getLogger(__name__)


class RestDnsError(Exception):
    """Base class for all restdns errors"""

    def __init__(self, msg=None):
        self.message = msg or self.__class__.__name__
        super(RestDnsError, self).__init__(self.message)


class InvalidInputError(RestDnsError):
    """Non-fatal error, indicating incorrect input."""
    pass


class NotFoundError(RestDnsError):
    """Thrown in REST API when a resource is not found"""
    pass


class AlreadyExistsError(RestDnsError):
    """Thrown in REST API when a resource or value already exists"""
    pass


class NotAllowedError(RestDnsError):
    """Zone, source IP or reverse network is not managed by this host."""
    pass


class DatabaseError(RestDnsError):
    """Fatal error, the directory failed to process the request."""
    pass


class ConfigError(RestDnsError):
    """Invalid or unreadable settings file."""
    pass

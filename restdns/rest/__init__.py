"""restdns REST base module
"""

import abc
import logging

import tornado.httpserver
import tornado.ioloop
import tornado.wsgi

import flask


FLASK_APP = flask.Flask(__name__)
FLASK_APP.config['BUNDLE_ERRORS'] = True
# Error bodies are {"error": ...}, see restdns.rest.error_handlers.
FLASK_APP.config['ERROR_INCLUDE_MESSAGE'] = False
FLASK_APP.config['RESTX_ERROR_404_HELP'] = False
FLASK_APP.url_map.strict_slashes = False

_LOGGER = logging.getLogger(__name__)


class RestServer(object):
    """REST Server."""

    @abc.abstractmethod
    def _setup_endpoint(self, http_server):
        """Setup the http server endpoint."""
        pass

    def _http_server_args(self):
        """Extra tornado HTTPServer arguments."""
        return {}

    def run(self):
        """Start server."""
        FLASK_APP.config['REST_SERVER'] = self

        container = tornado.wsgi.WSGIContainer(FLASK_APP)
        http_server = tornado.httpserver.HTTPServer(
            container, **self._http_server_args()
        )

        self._setup_endpoint(http_server)

        tornado.ioloop.IOLoop.current().start()


class TcpRestServer(RestServer):
    """TCP based REST Server."""

    def __init__(self, port, host='0.0.0.0', workers=0, xheaders=False):
        """Init methods

        :param int port: port number to listen on (required)
        :param str host: host IP to listen on, default is '0.0.0.0'
        :param int workers: the number of worker processes to fork, 0 runs
            a single process.
        :param bool xheaders: take the client address from X-Real-Ip /
            X-Forwarded-For headers set by a reverse proxy.
        """
        self.port = int(port)
        self.host = host
        self.workers = workers
        self.xheaders = xheaders

    def _http_server_args(self):
        """Extra tornado HTTPServer arguments."""
        return {'xheaders': self.xheaders}

    def _setup_endpoint(self, http_server):
        """Setup the http server endpoint."""
        _LOGGER.info('Starting REST server on %s:%s, workers: %s',
                     self.host, self.port, self.workers)
        if self.workers:
            http_server.bind(self.port, address=self.host)
            http_server.start(self.workers)
        else:
            http_server.listen(self.port, address=self.host)

"""Unit test for webutils.
"""

import json
import unittest

import flask
import mock

from restdns import webutils


class WebUtilsTest(unittest.TestCase):
    """Tests for restdns.webutils."""

    def test_cors(self):
        """Tests cors decorator."""
        app = flask.Flask(__name__)
        app.testing = True

        @app.route('/xxx')
        @webutils.cors(origin='*', content_type='application/json')
        def handler_unused():
            """Name does not matter, flask will route the request."""
            return flask.jsonify({'zones': 1})

        resp = app.test_client().get('/xxx')
        self.assertEqual(resp.mimetype, 'application/json')
        self.assertEqual({'zones': 1}, json.loads(resp.data))

        self.assertIn('Access-Control-Allow-Origin', resp.headers)
        self.assertEqual('*', resp.headers['Access-Control-Allow-Origin'])
        self.assertEqual('false',
                         resp.headers['Access-Control-Allow-Credentials'])

    def test_cors_origin_regex(self):
        """Tests origin is only echoed back when it matches."""
        app = flask.Flask(__name__)
        app.testing = True

        @app.route('/xxx')
        @webutils.cors(origin=r'.*\.example\.com', credentials=True)
        def handler_unused():
            """Name does not matter, flask will route the request."""
            return 'ok'

        client = app.test_client()
        resp = client.get('/xxx',
                          headers={'Origin': 'https://ui.example.com'})
        self.assertEqual('https://ui.example.com',
                         resp.headers['Access-Control-Allow-Origin'])

        resp = client.get('/xxx', headers={'Origin': 'https://evil.com'})
        self.assertNotIn('Access-Control-Allow-Origin', resp.headers)

        with self.assertRaises(ValueError):
            webutils.cors(origin='*', credentials=True)

    def test_as_json(self):
        """Tests marshalling of handler results."""
        app = flask.Flask(__name__)
        app.testing = True

        @app.route('/data')
        @webutils.as_json
        def data_unused():
            """Plain payload."""
            return ['a', 'b']

        @app.route('/empty')
        @webutils.as_json
        def empty_unused():
            """Empty payload with status."""
            return None, 204

        @app.route('/error')
        @webutils.as_json
        def error_unused():
            """Payload with status."""
            return {'error': 'nope'}, 405

        client = app.test_client()
        self.assertEqual(['a', 'b'], json.loads(client.get('/data').data))

        resp = client.get('/empty')
        self.assertEqual(204, resp.status_code)
        self.assertEqual(b'', resp.data)

        resp = client.get('/error')
        self.assertEqual(405, resp.status_code)
        self.assertEqual({'error': 'nope'}, json.loads(resp.data))

    def test_no_cache(self):
        """Tests proxy caching is disabled."""
        app = flask.Flask(__name__)
        app.testing = True

        @app.route('/xxx')
        @webutils.no_cache
        def handler_unused():
            """Name does not matter, flask will route the request."""
            return 'ok'

        resp = app.test_client().get('/xxx')
        self.assertEqual('no-cache, no-store, must-revalidate',
                         resp.headers['Cache-Control'])

    @mock.patch('restdns.webutils._LOGGER', mock.Mock())
    def test_log_header(self):
        """Tests request headers are logged."""
        app = flask.Flask(__name__)
        app.testing = True

        @app.route('/xxx')
        @webutils.log_header
        def handler_unused():
            """Name does not matter, flask will route the request."""
            return 'ok'

        resp = app.test_client().get('/xxx', headers={'X-Test': 'yes'})
        self.assertEqual(b'ok', resp.data)

        # pylint: disable=protected-access
        (_fmt, headers), _kwargs = webutils._LOGGER.debug.call_args
        self.assertEqual('yes', headers.get('X-Test'))

    def test_namespace(self):
        """Tests namespace()."""
        m_api = mock.Mock()

        # W0613: Unused argument 'kwargs'
        # pylint: disable=W0613
        def noop(*args, **kwargs):
            """Simply return the positional arguments"""
            return args

        m_api.namespace = noop
        (ns,) = webutils.namespace(m_api, 'restdns.rest.api.dns', 'foo')
        self.assertEqual(ns, 'dns')

        (ns,) = webutils.namespace(
            m_api, 'restdns.rest.api.reverse_zone', 'foo', path='/')
        self.assertEqual(ns, 'reverse-zone')


if __name__ == '__main__':
    unittest.main()

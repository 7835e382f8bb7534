#!/usr/bin/env python3
#
# Copyright 2026 portalpub Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Tests for the Portal authentication, transport and client modules.

Run with: python3 -m pytest portalpub/utils/portal/test_portal.py
"""

import base64
import os
import tempfile
import unittest
from unittest.mock import Mock

import requests

from portalpub.utils.portal.auth import (
    ApiKeyAuth,
    HttpBasicAuth,
    HttpBearerAuth,
    create_auth,
    portal_user_token,
)
from portalpub.utils.portal.client import PortalClient
from portalpub.utils.portal.errors import (
    AuthorizationError,
    ConfigurationError,
    DeploymentNotFoundError,
    ProtocolError,
    TransportError,
    UnexpectedResponseError,
)
from portalpub.utils.portal.models import DeploymentState
from portalpub.utils.portal.transport import PortalResponse, PortalTransport

DEPLOYMENT_ID = "28570f16-da32-4c14-bd2e-c1acc0782365"


def make_response(status_code, text='', json_data=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.headers = {'Content-Type': 'application/json' if json_data is not None else 'text/plain'}
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Expecting value")
    return response


class TestPortalAuth(unittest.TestCase):
    """Test authentication providers."""

    def test_basic_auth(self):
        """Basic auth should be base64 encoded."""
        headers = {}
        HttpBasicAuth('testuser', 'testpass').apply({}, headers)

        expected = base64.b64encode(b'testuser:testpass').decode('ascii')
        self.assertEqual(headers['Authorization'], f'Basic {expected}')

    def test_basic_auth_needs_both_parts(self):
        """No header is added when a credential part is missing."""
        for username, password in [('user', None), (None, 'pass'), (None, None)]:
            with self.subTest(username=username, password=password):
                headers = {}
                HttpBasicAuth(username, password).apply({}, headers)
                self.assertNotIn('Authorization', headers)

    def test_bearer_auth_normalizes_scheme(self):
        headers = {}
        HttpBearerAuth('abc', scheme='bearer').apply({}, headers)
        self.assertEqual(headers['Authorization'], 'Bearer abc')

    def test_bearer_auth_derives_portal_token(self):
        """Without an explicit token the user token pair is encoded."""
        auth = create_auth('bearer', username='tokenuser', password='tokenpass')
        headers = {}
        auth.apply({}, headers)

        self.assertEqual(headers['Authorization'], f"Bearer {portal_user_token('tokenuser', 'tokenpass')}")

    def test_api_key_in_query(self):
        query = {}
        headers = {}
        ApiKeyAuth('api_key', 'secret', location='query').apply(query, headers)

        self.assertEqual(query, {'api_key': ['secret']})
        self.assertEqual(headers, {})

    def test_api_key_with_prefix_in_header(self):
        headers = {}
        create_auth('apikey', token='secret', header='X-Api-Key', prefix='Key').apply({}, headers)
        self.assertEqual(headers['X-Api-Key'], 'Key secret')

    def test_unsupported_auth_method(self):
        with self.assertRaises(ConfigurationError) as context:
            create_auth('oauth2')

        self.assertIn('Unsupported auth method', str(context.exception))


class TestPortalTransport(unittest.TestCase):
    """Test the HTTP transport."""

    def setUp(self):
        self.session = Mock()
        self.transport = PortalTransport(
            'https://portal.example.com/',
            HttpBasicAuth('user', 'pass'),
            timeout=30,
            session=self.session,
        )

    def test_request_builds_url_and_applies_auth(self):
        self.session.request.return_value = make_response(200, 'ok')

        response = self.transport.request('POST', '/api/v1/publisher/status', params={'id': 'abc'})

        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ('POST', 'https://portal.example.com/api/v1/publisher/status'))
        self.assertEqual(kwargs['params'], {'id': ['abc']})
        self.assertTrue(kwargs['headers']['Authorization'].startswith('Basic '))
        self.assertEqual(kwargs['timeout'], 30)
        self.assertTrue(response.success)
        self.assertEqual(response.body(), 'ok')

    def test_api_key_in_query_string(self):
        transport = PortalTransport(
            'https://portal.example.com',
            create_auth('apikey', token='secret', header='api_key', location='query'),
            session=self.session,
        )
        self.session.request.return_value = make_response(200)

        transport.request('POST', '/api/v1/publisher/status', params={'id': 'abc'})

        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs['params'], {'id': ['abc'], 'api_key': ['secret']})
        self.assertNotIn('Authorization', kwargs['headers'])

    def test_error_status_is_returned_not_raised(self):
        self.session.request.return_value = make_response(403, 'forbidden')

        response = self.transport.request('POST', '/api/v1/publisher/upload')

        self.assertEqual(response.status, 403)
        self.assertFalse(response.success)

    def test_connection_failure_is_transport_error(self):
        self.session.request.side_effect = requests.ConnectionError("Name or service not known")

        with self.assertRaises(TransportError) as context:
            self.transport.request('POST', '/api/v1/publisher/status')

        self.assertIn('Name or service not known', str(context.exception))

    def test_malformed_json_is_transport_error(self):
        response = PortalResponse(make_response(200, '<html>'))

        with self.assertRaises(TransportError):
            response.json()

    def test_body_is_decoded_lazily(self):
        raw = make_response(200, 'abc')
        response = PortalResponse(raw)
        self.assertEqual(response.status, 200)
        self.assertEqual(response.headers['Content-Type'], 'text/plain')
        self.assertEqual(response.body(), 'abc')


class TestPortalClient(unittest.TestCase):
    """Test the publisher API client."""

    def setUp(self):
        self.transport = Mock()
        self.client = PortalClient(self.transport)

        with tempfile.NamedTemporaryFile(suffix='.zip', delete=False) as f:
            f.write(b'PK bundle content')
            self.bundle_path = f.name

    def tearDown(self):
        os.unlink(self.bundle_path)

    def respond(self, status_code, text='', json_data=None):
        self.transport.request.return_value = PortalResponse(make_response(status_code, text, json_data))

    def test_upload_returns_deployment_id(self):
        for status_code in (200, 201):
            with self.subTest(status_code=status_code):
                self.respond(status_code, DEPLOYMENT_ID)
                self.assertEqual(self.client.upload(self.bundle_path, 'mylib-1.0.0.zip'), DEPLOYMENT_ID)

    def test_upload_request_shape(self):
        self.respond(201, DEPLOYMENT_ID)

        self.client.upload(self.bundle_path, 'mylib-1.0.0.zip', release_after_upload=True)

        args, kwargs = self.transport.request.call_args
        self.assertEqual(args, ('POST', '/api/v1/publisher/upload'))
        self.assertEqual(kwargs['params'], {'name': 'mylib-1.0.0.zip', 'publishingType': 'AUTOMATIC'})
        self.assertIn('bundle', kwargs['files'])
        self.assertEqual(kwargs['files']['bundle'][0], 'mylib-1.0.0.zip')

    def test_upload_defaults_to_user_managed_and_file_name(self):
        self.respond(200, DEPLOYMENT_ID)

        self.client.upload(self.bundle_path)

        _, kwargs = self.transport.request.call_args
        self.assertEqual(kwargs['params']['publishingType'], 'USER_MANAGED')
        self.assertEqual(kwargs['params']['name'], os.path.basename(self.bundle_path))

    def test_upload_server_error(self):
        self.respond(500, 'boom')

        with self.assertRaises(ProtocolError) as context:
            self.client.upload(self.bundle_path)

        self.assertIn('bundle upload', str(context.exception))

    def test_upload_without_deployment_id(self):
        """A success status with a blank body carries no usable id."""
        for body in ('', '  \n'):
            with self.subTest(body=body):
                self.respond(200, body)

                with self.assertRaises(ProtocolError) as context:
                    self.client.upload(self.bundle_path)

                self.assertIn('no deployment id', str(context.exception))

    def test_status_decodes_payload(self):
        self.respond(200, json_data={
            'deploymentId': DEPLOYMENT_ID,
            'deploymentName': 'mylib-1.0.0.zip',
            'deploymentState': 'VALIDATED',
            'purls': ['pkg:maven/com.example/mylib@1.0.0'],
        })

        status = self.client.status(DEPLOYMENT_ID)

        self.assertEqual(status.state, DeploymentState.VALIDATED)
        self.assertEqual(status.purls, ['pkg:maven/com.example/mylib@1.0.0'])
        args, kwargs = self.transport.request.call_args
        self.assertEqual(args, ('POST', '/api/v1/publisher/status'))
        self.assertEqual(kwargs['params'], {'id': DEPLOYMENT_ID})

    def test_status_unknown_state(self):
        self.respond(200, json_data={'deploymentId': DEPLOYMENT_ID, 'deploymentState': 'EXPLODED'})

        status = self.client.status(DEPLOYMENT_ID)

        self.assertIsNone(status.state)
        self.assertEqual(status.raw_state, 'EXPLODED')

    def test_release_and_drop_paths(self):
        self.respond(204)

        self.client.release(DEPLOYMENT_ID)
        self.assertEqual(self.transport.request.call_args[0],
                         ('POST', f'/api/v1/publisher/deployment/{DEPLOYMENT_ID}'))

        self.client.drop(DEPLOYMENT_ID)
        self.assertEqual(self.transport.request.call_args[0],
                         ('DELETE', f'/api/v1/publisher/deployment/{DEPLOYMENT_ID}'))

    def test_transition_not_found(self):
        self.respond(404, 'not found')

        for operation in (self.client.release, self.client.drop):
            with self.subTest(operation=operation.__name__):
                with self.assertRaises(DeploymentNotFoundError):
                    operation(DEPLOYMENT_ID)

    def test_transition_server_error(self):
        self.respond(500, 'boom')

        with self.assertRaises(ProtocolError) as context:
            self.client.release(DEPLOYMENT_ID)

        self.assertNotIsInstance(context.exception, DeploymentNotFoundError)
        self.assertIn('Internal server error', str(context.exception))

    def test_transition_requires_no_content(self):
        """200 is not a valid answer to a state transition."""
        self.respond(200, 'ok')

        with self.assertRaises(UnexpectedResponseError):
            self.client.drop(DEPLOYMENT_ID)

    def test_authorization_errors_for_every_operation(self):
        operations = {
            'upload': lambda: self.client.upload(self.bundle_path),
            'status': lambda: self.client.status(DEPLOYMENT_ID),
            'release': lambda: self.client.release(DEPLOYMENT_ID),
            'drop': lambda: self.client.drop(DEPLOYMENT_ID),
        }
        expected = {
            400: 'Authentication failure',
            401: 'not authenticated',
            403: 'User unauthorized',
        }

        for name, operation in operations.items():
            messages = set()
            for status_code, fragment in expected.items():
                with self.subTest(operation=name, status_code=status_code):
                    self.respond(status_code, 'denied')
                    with self.assertRaises(AuthorizationError) as context:
                        operation()
                    self.assertEqual(context.exception.status_code, status_code)
                    self.assertIn(fragment, str(context.exception))
                    messages.add(str(context.exception))
            self.assertEqual(len(messages), 3)

    def test_unexpected_status(self):
        self.respond(418, 'teapot')

        with self.assertRaises(UnexpectedResponseError) as context:
            self.client.status(DEPLOYMENT_ID)

        self.assertIn('teapot', str(context.exception))
        self.assertEqual(context.exception.response.status, 418)


if __name__ == '__main__':
    unittest.main()

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
Authentication module for the Maven Central Portal.

Supports multiple authentication methods:
- Basic authentication (username/password)
- Bearer token (explicit, or the Portal user token derived from username/password)
- API key sent in a header or a query parameter
"""

import base64
from typing import Dict, List, Optional

from .errors import ConfigurationError


class HttpBasicAuth:
    """Add a Basic Authorization header when both credential parts are known."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        self.username = username
        self.password = password

    def apply(self, query: Dict[str, List[str]], headers: Dict[str, str]):
        if not self.username or not self.password:
            return
        credentials = f"{self.username}:{self.password}"
        encoded = base64.b64encode(credentials.encode()).decode('ascii')
        headers['Authorization'] = f'Basic {encoded}'


class HttpBearerAuth:
    """Add a Bearer Authorization header when a token is known."""

    def __init__(self, token: Optional[str] = None, scheme: Optional[str] = 'bearer'):
        self.token = token
        self.scheme = scheme

    def apply(self, query: Dict[str, List[str]], headers: Dict[str, str]):
        if not self.token:
            return
        if self.scheme:
            headers['Authorization'] = f'{self._normalize_scheme(self.scheme)} {self.token}'
        else:
            headers['Authorization'] = self.token

    @staticmethod
    def _normalize_scheme(scheme: str) -> str:
        return 'Bearer' if scheme.lower() == 'bearer' else scheme


class ApiKeyAuth:
    """Send an API key either as a header or as a query parameter."""

    LOCATIONS = ['header', 'query']

    def __init__(self, param_name: str, api_key: Optional[str] = None,
                 location: str = 'header', prefix: Optional[str] = None):
        if location not in self.LOCATIONS:
            raise ConfigurationError(f"Unsupported API key location: {location}. "
                                     f"Supported: {', '.join(self.LOCATIONS)}")
        self.param_name = param_name
        self.api_key = api_key
        self.location = location
        self.prefix = prefix

    def apply(self, query: Dict[str, List[str]], headers: Dict[str, str]):
        if not self.api_key:
            return
        value = f"{self.prefix} {self.api_key}" if self.prefix else self.api_key
        if self.location == 'query':
            query[self.param_name] = [value]
        else:
            headers[self.param_name] = value


def portal_user_token(username: str, password: str) -> str:
    """
    Build the Portal user token used with Bearer authentication.

    The Central Portal expects ``base64(username:password)`` of a generated
    user token pair.
    """
    return base64.b64encode(f"{username}:{password}".encode('utf-8')).decode('utf-8')


AUTH_METHODS = ['basic', 'bearer', 'apikey']


def create_auth(method: str = 'basic',
                username: Optional[str] = None,
                password: Optional[str] = None,
                token: Optional[str] = None,
                header: str = 'Authorization',
                prefix: Optional[str] = None,
                location: str = 'header'):
    """
    Create the authentication provider for the configured method.

    Args:
        method: Authentication method (basic/bearer/apikey)
        username: Portal username (or user token name)
        password: Portal password (or user token secret)
        token: Explicit bearer token or API key
        header: Header name used by the apikey method
        prefix: Optional prefix placed before the API key
        location: Where the apikey method sends the key (header/query)

    Returns:
        An object exposing ``apply(query, headers)``
    """
    method = (method or 'basic').lower()
    if method not in AUTH_METHODS:
        raise ConfigurationError(f"Unsupported auth method: {method}. "
                                 f"Supported: {', '.join(AUTH_METHODS)}")

    if method == 'basic':
        return HttpBasicAuth(username, password)
    elif method == 'bearer':
        if not token and username and password:
            token = portal_user_token(username, password)
        return HttpBearerAuth(token)
    else:
        return ApiKeyAuth(header, token or password, location=location, prefix=prefix)

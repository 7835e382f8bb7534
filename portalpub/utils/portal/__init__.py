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
Maven Central Portal integration for portalpub.

This module uploads deployment bundles to the Central Portal and drives the
deployment through validation, release or drop.
"""

from .auth import ApiKeyAuth, HttpBasicAuth, HttpBearerAuth, create_auth
from .bundle import create_bundle
from .client import PortalClient
from .config import PortalConfig
from .deployment import PortalDeployment, read_deployment_id_file
from .errors import (
    AuthorizationError,
    ConfigurationError,
    DeploymentFailedError,
    DeploymentNotFoundError,
    DeploymentTimeoutError,
    PortalError,
    ProtocolError,
    TransportError,
    UnexpectedResponseError,
)
from .models import DeploymentState, DeploymentStatus, PublishingType
from .polling import Action, Backoff, Operation, classify
from .transport import PortalResponse, PortalTransport

__all__ = [
    'ApiKeyAuth', 'HttpBasicAuth', 'HttpBearerAuth', 'create_auth',
    'create_bundle',
    'PortalClient',
    'PortalConfig',
    'PortalDeployment', 'read_deployment_id_file',
    'AuthorizationError', 'ConfigurationError', 'DeploymentFailedError',
    'DeploymentNotFoundError', 'DeploymentTimeoutError', 'PortalError',
    'ProtocolError', 'TransportError', 'UnexpectedResponseError',
    'DeploymentState', 'DeploymentStatus', 'PublishingType',
    'Action', 'Backoff', 'Operation', 'classify',
    'PortalResponse', 'PortalTransport',
]

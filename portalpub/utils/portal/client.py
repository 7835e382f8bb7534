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
Maven Central Portal publisher API client.

Wraps the transport with the four deployment operations and turns every
status code the Portal can answer with into either a value or an exception.
"""

from pathlib import Path
from typing import Optional

from .errors import (
    AuthorizationError,
    DeploymentNotFoundError,
    ProtocolError,
    UnexpectedResponseError,
)
from .models import DeploymentStatus, PublishingType
from .transport import PortalResponse, PortalTransport

OK = 200
CREATED = 201
NO_CONTENT = 204
BAD_REQUEST = 400
UNAUTHORIZED = 401
FORBIDDEN = 403
NOT_FOUND = 404
INTERNAL_SERVER_ERROR = 500

UPLOAD_PATH = "/api/v1/publisher/upload"
STATUS_PATH = "/api/v1/publisher/status"
DEPLOYMENT_PATH = "/api/v1/publisher/deployment/{deployment_id}"


def raise_for_unexpected(action: str, response: PortalResponse):
    """
    Raise the error matching a status code the action does not handle itself.

    400, 401 and 403 are credential problems and get a message telling them
    apart. Anything else is an unexpected response.
    """
    status = response.status
    if status == BAD_REQUEST:
        raise AuthorizationError(
            "Authentication failure, make sure that your credentials are correct", status, action)
    elif status == UNAUTHORIZED:
        raise AuthorizationError(
            "No active session or not authenticated, check your credentials", status, action)
    elif status == FORBIDDEN:
        raise AuthorizationError(
            f"User unauthorized to perform the {action} action", status, action)
    raise UnexpectedResponseError(action, response)


class PortalClient:
    """Client for the /api/v1/publisher endpoints."""

    def __init__(self, transport: PortalTransport):
        self.transport = transport

    def upload(self, bundle_file, name: Optional[str] = None, release_after_upload: bool = False) -> str:
        """
        Upload a deployment bundle.

        Args:
            bundle_file: Path to the bundle archive
            name: Deployment name, defaults to the file name
            release_after_upload: Publish automatically once validated

        Returns:
            The deployment id assigned by the Portal
        """
        bundle_file = Path(bundle_file)
        name = name or bundle_file.name
        publishing_type = PublishingType.for_release_after_upload(release_after_upload)

        with open(bundle_file, 'rb') as f:
            files = {'bundle': (name, f, 'application/octet-stream')}
            response = self.transport.request(
                'POST',
                UPLOAD_PATH,
                params={'name': name, 'publishingType': publishing_type.value},
                files=files,
            )

        if response.status in (OK, CREATED):
            deployment_id = response.body().strip()
            if not deployment_id:
                raise ProtocolError(f"Bundle upload returned no deployment id: {response}", response)
            return deployment_id
        elif response.status == INTERNAL_SERVER_ERROR:
            raise ProtocolError(f"Error on bundle upload: {response}", response)
        raise_for_unexpected("upload", response)

    def status(self, deployment_id: str) -> DeploymentStatus:
        """Query the current state of a deployment."""
        response = self.transport.request('POST', STATUS_PATH, params={'id': deployment_id})

        if response.status == OK:
            return DeploymentStatus.from_json(response.json(), deployment_id)
        elif response.status == INTERNAL_SERVER_ERROR:
            raise ProtocolError(f"Error on deployment {deployment_id} status query: {response}", response)
        raise_for_unexpected("deployment status check", response)

    def release(self, deployment_id: str):
        """Publish a VALIDATED deployment."""
        response = self.transport.request('POST', DEPLOYMENT_PATH.format(deployment_id=deployment_id))
        self._check_transition("deployment release", "releasing", deployment_id, response)

    def drop(self, deployment_id: str):
        """Delete a VALIDATED or FAILED deployment."""
        response = self.transport.request('DELETE', DEPLOYMENT_PATH.format(deployment_id=deployment_id))
        self._check_transition("deployment drop", "dropping", deployment_id, response)

    def _check_transition(self, action: str, verb: str, deployment_id: str, response: PortalResponse):
        if response.status == NO_CONTENT:
            return
        elif response.status == NOT_FOUND:
            raise DeploymentNotFoundError(deployment_id, response)
        elif response.status == INTERNAL_SERVER_ERROR:
            raise ProtocolError(f"Internal server error when {verb} {deployment_id}: {response}", response)
        raise_for_unexpected(action, response)

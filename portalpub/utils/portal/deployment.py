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
Publish orchestrator for one Maven Central Portal deployment.

A PortalDeployment resolves everything lazily: the client (which checks the
credentials), the bundle file, and the deployment id (an operator override,
or the id returned by uploading the bundle). validate(), release() and drop()
then poll the deployment state until the operation can finish.
"""

import time
from pathlib import Path
from typing import Optional, Tuple

from ..console import print_info
from .auth import create_auth
from .client import PortalClient
from .errors import ConfigurationError, DeploymentFailedError, ProtocolError
from .models import DeploymentState, DeploymentStatus
from .polling import DEFAULT_INITIAL_DELAY, Action, Backoff, Operation, classify
from .transport import DEFAULT_TIMEOUT, PortalTransport

DEFAULT_PORTAL_URL = "https://central.sonatype.com/"

# Property (or -P build property) naming an existing deployment to reuse
PUBLISH_DEPLOYMENT_ID_PROPERTY_NAME = "publishDeploymentId"

DEPLOYMENT_ID_FILE_NAME = "maven-central-portal-bundle-id"
DEFAULT_DEPLOYMENT_ID_FILE = str(Path("build") / DEPLOYMENT_ID_FILE_NAME)


class PortalDeployment:
    """Stateful operations on a single Portal deployment."""

    def __init__(self,
                 base_url: str = DEFAULT_PORTAL_URL,
                 username: Optional[str] = None,
                 password: Optional[str] = None,
                 bundle: Optional[str] = None,
                 name: Optional[str] = None,
                 deployment_id: Optional[str] = None,
                 release_after_upload: bool = False,
                 auth_method: str = 'basic',
                 token: Optional[str] = None,
                 auth_header: str = 'Authorization',
                 auth_prefix: Optional[str] = None,
                 auth_location: str = 'header',
                 timeout: Optional[float] = DEFAULT_TIMEOUT,
                 initial_delay: float = DEFAULT_INITIAL_DELAY,
                 max_attempts: Optional[int] = None,
                 max_wait: Optional[float] = None,
                 deployment_id_file: Optional[str] = None,
                 verbose: bool = False,
                 client: Optional[PortalClient] = None,
                 sleep=time.sleep,
                 clock=time.monotonic):
        """
        Initialize the deployment.

        Args:
            base_url: Portal base URL
            username: Portal username (or user token name)
            password: Portal password (or user token secret)
            bundle: Path to the bundle archive to upload
            name: Deployment name, defaults to the bundle file name
            deployment_id: Existing deployment id; when set nothing is uploaded
            release_after_upload: Let the Portal publish right after validation
            auth_method: basic, bearer or apikey
            token: Explicit bearer token or API key
            auth_header: Header used by the apikey method
            auth_prefix: Prefix placed before the API key
            auth_location: header or query, for the apikey method
            timeout: Per-request HTTP timeout in seconds
            initial_delay: First delay between status checks, in seconds
            max_attempts: Optional ceiling on the number of waits
            max_wait: Optional ceiling on the seconds spent waiting
            deployment_id_file: Where to record the id right after an upload
            verbose: Print every request
            client: Pre-built client, skips credential resolution
            sleep: Sleep function used between status checks
            clock: Monotonic clock used for max_wait
        """
        self.base_url = base_url
        self.username = username
        self.password = password
        self.bundle = bundle
        self.name = name
        self.deployment_id_override = deployment_id
        self.release_after_upload = release_after_upload
        self.auth_method = (auth_method or 'basic').lower()
        self.token = token
        self.auth_header = auth_header
        self.auth_prefix = auth_prefix
        self.auth_location = auth_location
        self.timeout = timeout
        self.initial_delay = initial_delay
        self.max_attempts = max_attempts
        self.max_wait = max_wait
        self.deployment_id_file = deployment_id_file
        self.verbose = verbose
        self._sleep = sleep
        self._clock = clock

        self._client = client
        self._file_to_upload = None
        self._deployment_id = None
        self.uploaded = False

    @property
    def client(self) -> PortalClient:
        """The Portal client, created on first use."""
        if self._client is None:
            self._check_credentials()
            auth = create_auth(
                self.auth_method,
                username=self.username,
                password=self.password,
                token=self.token,
                header=self.auth_header,
                prefix=self.auth_prefix,
                location=self.auth_location,
            )
            transport = PortalTransport(self.base_url, auth, timeout=self.timeout, verbose=self.verbose)
            self._client = PortalClient(transport)
        return self._client

    def _check_credentials(self):
        if self.token and self.auth_method in ('bearer', 'apikey'):
            return
        if not self.username:
            raise ConfigurationError(f"Username for the central portal at {self.base_url} is not set.")
        if not self.password:
            raise ConfigurationError(f"Password for the central portal at {self.base_url} is not set.")

    @property
    def file_to_upload(self) -> Path:
        """The bundle file, checked to exist on first use."""
        if self._file_to_upload is None:
            if not self.bundle:
                raise ConfigurationError("No bundle file configured, set --bundle or publish.central.bundle")
            path = Path(self.bundle).absolute()
            if not path.is_file():
                raise ConfigurationError(
                    f"File {path} does not exist or is not a file, did the bundle step run?")
            self._file_to_upload = path
        return self._file_to_upload

    @property
    def deployment_id(self) -> str:
        """The override when given, otherwise the id of a fresh upload."""
        if self._deployment_id is None:
            if self.deployment_id_override:
                print_info(f"Using existing deployment id {self.deployment_id_override}")
                self._deployment_id = self.deployment_id_override
            else:
                self.upload_bundle()
        return self._deployment_id

    def upload_bundle(self) -> str:
        """Upload the configured bundle and adopt the returned deployment id."""
        self._deployment_id = self.upload(self.file_to_upload, self.name, self.release_after_upload)
        self.uploaded = True
        if self.deployment_id_file:
            path = self.save_deployment_id(self.deployment_id_file)
            print_info(f"Deployment id saved to {path}")
        return self._deployment_id

    def upload(self, bundle, name: Optional[str] = None, release_after_upload: bool = False) -> str:
        """Upload a bundle to the Portal, returning the deployment id."""
        bundle = Path(bundle)
        print_info(f"Uploading bundle {bundle} to Central Portal at {self.base_url}")
        deployment_id = self.client.upload(bundle, name or bundle.name, release_after_upload)
        print_info(f"Bundle from file {bundle} uploaded successfully, deployment id {deployment_id}")
        return deployment_id

    def status(self) -> DeploymentStatus:
        """Fetch the current status of the deployment."""
        status = self.client.status(self.deployment_id)
        print_info(f"Deployment status: {status}")
        return status

    def validate(self):
        """Wait until the Portal has validated the deployment."""
        print_info(f"Validating deployment {self.deployment_id} on Central Portal at {self.base_url}")
        action, status = self._poll(Operation.VALIDATE)

        if action is Action.SUCCEED:
            print_info(f"Deployment {self.deployment_id} validated")
            return
        self._fail_on_state(status, f"Deployment {self.deployment_id} validation FAILED: {status}")

    def release(self):
        """Publish the deployment once it is validated. Already published is fine."""
        action, status = self._poll(Operation.RELEASE)

        if action is Action.SUCCEED:
            print_info(f"Deployment {self.deployment_id} has been already released")
        elif action is Action.TRANSITION:
            print_info(f"Releasing deployment {self.deployment_id}")
            self.client.release(self.deployment_id)
            print_info(f"Deployment {self.deployment_id} released")
        else:
            self._fail_on_state(status, f"Deployment {self.deployment_id} validation FAILED: {status}")

    def drop(self):
        """Delete a validated or failed deployment. Published ones are refused."""
        action, status = self._poll(Operation.DROP)

        if action is Action.TRANSITION:
            print_info(f"Dropping deployment {self.deployment_id}")
            self.client.drop(self.deployment_id)
            print_info(f"Deployment {self.deployment_id} dropped")
        elif status.state is DeploymentState.PUBLISHED:
            raise ConfigurationError(
                f"Deployment {self.deployment_id} has been published already and cannot get dropped")
        else:
            self._fail_on_state(status, f"Deployment {self.deployment_id} cannot be dropped: {status}")

    def _poll(self, operation: Operation) -> Tuple[Action, DeploymentStatus]:
        backoff = Backoff(
            initial_delay=self.initial_delay,
            max_attempts=self.max_attempts,
            max_wait=self.max_wait,
            sleep=self._sleep,
            clock=self._clock,
        )
        while True:
            status = self.status()
            action = classify(status.state, operation)
            if action is not Action.WAIT:
                return action, status
            if self.verbose:
                print_info(f"Waiting {backoff.delay:g}s before checking {self.deployment_id} again")
            backoff.wait()

    def _fail_on_state(self, status: DeploymentStatus, message: str):
        if status.state is None:
            raise ProtocolError(
                f"Unexpected/unknown deployment state {status.raw_state} for deployment {self.deployment_id}")
        raise DeploymentFailedError(message, status)

    def save_deployment_id(self, path=DEFAULT_DEPLOYMENT_ID_FILE) -> Path:
        """Record ``<bundle>=<deployment id>`` so a later run can resume."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{self.file_to_upload}={self.deployment_id}\n", encoding='utf-8')
        return path


def read_deployment_id_file(path) -> Tuple[str, str]:
    """
    Read a file written by PortalDeployment.save_deployment_id.

    Returns:
        Tuple of (bundle path, deployment id)
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Deployment id file {path} does not exist")

    lines = [line.strip() for line in path.read_text(encoding='utf-8').splitlines() if line.strip()]
    if not lines:
        raise ConfigurationError(f"Deployment id file {path} is empty")

    bundle, sep, deployment_id = lines[-1].rpartition('=')
    if not sep or not deployment_id:
        raise ConfigurationError(f"Deployment id file {path} is malformed: {lines[-1]}")
    return bundle, deployment_id

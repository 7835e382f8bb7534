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
Exception definitions for the Maven Central Portal integration.

Every failure aborts the current action; nothing here is retried except
the waiting states handled by the polling loop.
"""


class PortalError(Exception):
    """Base exception for portalpub"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(PortalError):
    """Missing credentials, missing bundle or invalid operator input"""

    def __init__(self, message: str):
        super().__init__(message, "PP001")


class AuthorizationError(PortalError):
    """The Portal rejected the credentials (HTTP 400/401/403)"""

    def __init__(self, message: str, status_code: int, action: str):
        super().__init__(message, "PP002")
        self.status_code = status_code
        self.action = action


class TransportError(PortalError):
    """Network level failure: DNS, connection, timeout or malformed body"""

    def __init__(self, message: str):
        super().__init__(message, "PP003")


class ProtocolError(PortalError):
    """The Portal answered, but not with what the protocol expects"""

    def __init__(self, message: str, response=None, error_code: str = "PP004"):
        super().__init__(message, error_code)
        self.response = response


class UnexpectedResponseError(ProtocolError):
    """Status code outside of the documented set for the action"""

    def __init__(self, action: str, response):
        super().__init__(f"Unexpected response to {action}: {response}", response, "PP005")
        self.action = action


class DeploymentNotFoundError(ProtocolError):
    """The deployment id is unknown to the Portal"""

    def __init__(self, deployment_id: str, response=None):
        super().__init__(f"Deployment {deployment_id} not found. {response}", response, "PP006")
        self.deployment_id = deployment_id


class DeploymentFailedError(PortalError):
    """The Portal reported the deployment as FAILED"""

    def __init__(self, message: str, status=None):
        super().__init__(message, "PP007")
        self.status = status


class DeploymentTimeoutError(PortalError):
    """The configured polling ceiling was exceeded"""

    def __init__(self, message: str, attempts: int = 0, elapsed: float = 0.0):
        super().__init__(message, "PP008")
        self.attempts = attempts
        self.elapsed = elapsed

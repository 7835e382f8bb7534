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
Data models returned by the Maven Central Portal publisher API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class DeploymentState(Enum):
    """Server side progress of a deployment."""
    PENDING = "PENDING"
    VALIDATING = "VALIDATING"
    VALIDATED = "VALIDATED"
    PUBLISHING = "PUBLISHING"
    PUBLISHED = "PUBLISHED"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, value: Any) -> Optional['DeploymentState']:
        """Map a raw state string to a member, None when unknown."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class PublishingType(Enum):
    """What the Portal does once a bundle is validated."""
    AUTOMATIC = "AUTOMATIC"  # publish right after validation
    USER_MANAGED = "USER_MANAGED"  # stay VALIDATED until released

    @classmethod
    def for_release_after_upload(cls, release_after_upload: bool) -> 'PublishingType':
        return cls.AUTOMATIC if release_after_upload else cls.USER_MANAGED


@dataclass
class DeploymentStatus:
    """Decoded answer of the status endpoint."""
    deployment_id: str
    state: Optional[DeploymentState] = None  # None when the server sent an unknown state
    raw_state: Optional[str] = None
    deployment_name: str = ""
    purls: List[str] = field(default_factory=list)  # files reported by the server
    errors: Any = None
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, payload: Dict[str, Any], deployment_id: str = "") -> 'DeploymentStatus':
        if not isinstance(payload, dict):
            payload = {}
        raw_state = payload.get('deploymentState')
        return cls(
            deployment_id=payload.get('deploymentId') or deployment_id,
            state=DeploymentState.parse(raw_state),
            raw_state=raw_state,
            deployment_name=payload.get('deploymentName') or "",
            purls=list(payload.get('purls') or []),
            errors=payload.get('errors'),
            payload=payload,
        )

    def __str__(self) -> str:
        parts = [f"deploymentId={self.deployment_id}", f"deploymentState={self.raw_state}"]
        if self.deployment_name:
            parts.append(f"deploymentName={self.deployment_name}")
        if self.purls:
            parts.append(f"purls={self.purls}")
        if self.errors:
            parts.append(f"errors={self.errors}")
        return f"DeploymentStatus({', '.join(parts)})"

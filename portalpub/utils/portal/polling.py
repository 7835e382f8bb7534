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
Deployment state machine.

classify() decides, for the state the Portal reports and the operation the
operator asked for, whether to keep waiting, stop successfully, issue the
release/drop transition, or fail. Backoff spaces out the status queries.
"""

import time
from enum import Enum
from typing import Callable, List, Optional

from .errors import DeploymentTimeoutError
from .models import DeploymentState

# Seconds before the second status query; doubles afterwards
DEFAULT_INITIAL_DELAY = 1.0


class Operation(Enum):
    VALIDATE = "validate"
    RELEASE = "release"
    DROP = "drop"


class Action(Enum):
    WAIT = "wait"
    SUCCEED = "succeed"
    TRANSITION = "transition"
    FAIL = "fail"


_S = DeploymentState
_ACTIONS = {
    Operation.VALIDATE: {
        _S.PENDING: Action.WAIT,
        _S.VALIDATING: Action.WAIT,
        _S.VALIDATED: Action.SUCCEED,
        _S.PUBLISHING: Action.SUCCEED,
        _S.PUBLISHED: Action.SUCCEED,
        _S.FAILED: Action.FAIL,
    },
    Operation.RELEASE: {
        _S.PENDING: Action.WAIT,
        _S.VALIDATING: Action.WAIT,
        _S.VALIDATED: Action.TRANSITION,
        _S.PUBLISHING: Action.WAIT,
        _S.PUBLISHED: Action.SUCCEED,
        _S.FAILED: Action.FAIL,
    },
    Operation.DROP: {
        _S.PENDING: Action.WAIT,
        _S.VALIDATING: Action.WAIT,
        _S.VALIDATED: Action.TRANSITION,
        _S.PUBLISHING: Action.WAIT,
        # publication cannot be undone
        _S.PUBLISHED: Action.FAIL,
        _S.FAILED: Action.TRANSITION,
    },
}


def classify(state: Optional[DeploymentState], operation: Operation) -> Action:
    """Decide what to do next. Unknown states always fail."""
    if state is None:
        return Action.FAIL
    return _ACTIONS[operation][state]


class Backoff:
    """
    Exponential delay between status queries.

    Unbounded unless max_attempts (number of waits) or max_wait (seconds
    since the first wait) is given.
    """

    def __init__(self,
                 initial_delay: float = DEFAULT_INITIAL_DELAY,
                 factor: float = 2.0,
                 max_attempts: Optional[int] = None,
                 max_wait: Optional[float] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        self.delay = initial_delay
        self.factor = factor
        self.max_attempts = max_attempts
        self.max_wait = max_wait
        self._sleep = sleep
        self._clock = clock
        self._started = None
        self.attempts = 0
        self.history: List[float] = []

    @property
    def elapsed(self) -> float:
        if self._started is None:
            return 0.0
        return self._clock() - self._started

    def wait(self):
        """Sleep for the current delay, then grow it."""
        if self._started is None:
            self._started = self._clock()

        if self.max_attempts is not None and self.attempts >= self.max_attempts:
            raise DeploymentTimeoutError(
                f"Gave up after {self.attempts} status checks", self.attempts, self.elapsed)
        if self.max_wait is not None and self.elapsed + self.delay > self.max_wait:
            raise DeploymentTimeoutError(
                f"Gave up after waiting {self.elapsed:.0f}s (limit {self.max_wait:.0f}s)",
                self.attempts, self.elapsed)

        self._sleep(self.delay)
        self.history.append(self.delay)
        self.attempts += 1
        self.delay *= self.factor

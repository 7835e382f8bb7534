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
Maven Central Portal configuration handler.

Reads the [publish.central] section of the project TOML file and resolves
credentials from, in order: explicit configuration, environment variables,
property files, and build properties given on the command line.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

try:
    import tomllib
except ImportError:
    # Python < 3.11
    import tomli as tomllib

from .deployment import (
    DEFAULT_DEPLOYMENT_ID_FILE,
    DEFAULT_PORTAL_URL,
    PUBLISH_DEPLOYMENT_ID_PROPERTY_NAME,
    PortalDeployment,
    read_deployment_id_file,
)
from .errors import ConfigurationError
from .polling import DEFAULT_INITIAL_DELAY
from .transport import DEFAULT_TIMEOUT
from .auth import AUTH_METHODS, ApiKeyAuth

DEFAULT_CONFIG_FILE = "portal.toml"

USERNAME_ENV_VARS = ['MAVEN_CENTRAL_PORTAL_USERNAME', 'MAVEN_CENTRAL_USERNAME']
PASSWORD_ENV_VARS = ['MAVEN_CENTRAL_PORTAL_PASSWORD', 'MAVEN_CENTRAL_PASSWORD']

USERNAME_PROPERTIES = [
    'mavenCentralPublishUsername',
    'mavenCentralPortalUsername',
    'centralPortalUsername',
    'centralUsername',
]
PASSWORD_PROPERTIES = [
    'mavenCentralPublishPassword',
    'mavenCentralPortalPassword',
    'centralPortalPassword',
    'centralPassword',
]


def load_properties(path) -> Dict[str, str]:
    """
    Parse a Java style .properties file (key=value or key: value).

    Missing files yield an empty dict.
    """
    properties = {}
    path = Path(path).expanduser()
    if not path.is_file():
        return properties

    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or line.startswith('!'):
                continue
            match = re.match(r'^([^=:\s]+)\s*[=:]\s*(.*)$', line)
            if match:
                properties[match.group(1)] = match.group(2)
    return properties


def default_property_files() -> List[Path]:
    return [Path.cwd() / "gradle.properties", Path.home() / ".gradle" / "gradle.properties"]


def parse_build_properties(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``-P key=value`` arguments into a dict."""
    properties = {}
    for value in values or []:
        key, sep, prop = value.partition('=')
        if not key or not sep:
            raise ConfigurationError(f"Invalid build property '{value}', expected key=value")
        properties[key.strip()] = prop
    return properties


def _number(key: str, value, cast):
    """Cast a numeric setting, None stays None."""
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {key}: {value!r}, expected a number") from e


def load_config_file(path) -> Dict[str, Any]:
    """Load the TOML project configuration."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        with open(path, 'rb') as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e


class PortalConfig:
    """Handle Maven Central Portal publishing configuration."""

    def __init__(self,
                 config: Optional[Dict[str, Any]] = None,
                 property_files: Optional[List[Dict[str, str]]] = None,
                 build_properties: Optional[Dict[str, str]] = None,
                 environ: Optional[Dict[str, str]] = None):
        """
        Initialize the configuration.

        Args:
            config: Configuration dictionary from the project TOML file
            property_files: Parsed property files, highest precedence first
            build_properties: Properties given with -P on the command line
            environ: Environment, defaults to os.environ
        """
        self.raw_config = config or {}
        self.property_files = property_files or []
        self.build_properties = build_properties or {}
        self.environ = os.environ if environ is None else environ

        publish_config = self.raw_config.get('publish', {})
        self.central_config = publish_config.get('central', {})
        self.auth_config = self.central_config.get('auth', {})
        self.poll_config = self.central_config.get('poll', {})

        self.base_url = self._expand_env(self.central_config.get('url', DEFAULT_PORTAL_URL))
        self.bundle = self._expand_env(self.central_config.get('bundle', ''))
        self.name = self._expand_env(self.central_config.get('name', ''))
        self.auto_release = bool(self.central_config.get('auto_release', False))
        self.timeout = _number('timeout', self.central_config.get('timeout', DEFAULT_TIMEOUT), float)
        self.deployment_id_file = self._expand_env(
            self.central_config.get('deployment_id_file', DEFAULT_DEPLOYMENT_ID_FILE))

        # Authentication
        self.auth_method = self.auth_config.get('method', 'basic').lower()
        self.auth_header = self.auth_config.get('header', 'Authorization')
        self.auth_prefix = self.auth_config.get('prefix')
        self.auth_location = self.auth_config.get('location', 'header')
        self.token = self._expand_env(self.auth_config.get('token', ''))
        self.username = self._resolve(
            self.auth_config.get('username', ''), USERNAME_ENV_VARS, USERNAME_PROPERTIES)
        self.password = self._resolve(
            self.auth_config.get('password', ''), PASSWORD_ENV_VARS, PASSWORD_PROPERTIES)

        # Polling
        self.initial_delay = _number(
            'poll.initial_delay', self.poll_config.get('initial_delay', DEFAULT_INITIAL_DELAY), float)
        self.max_attempts = _number('poll.max_attempts', self.poll_config.get('max_attempts'), int)
        self.max_wait = _number('poll.max_wait', self.poll_config.get('max_wait'), float)

        self.deployment_id = self._expand_env(self.central_config.get('deployment_id', ''))
        property_id = self._lookup_properties([PUBLISH_DEPLOYMENT_ID_PROPERTY_NAME])
        if property_id:
            self.deployment_id = property_id

    def _expand_env(self, value: str) -> str:
        """
        Expand environment variables in configuration values.

        Supports ${VAR_NAME} and $VAR_NAME syntax.
        """
        if not isinstance(value, str):
            return value

        pattern1 = re.compile(r'\$\{([^}]+)\}')
        value = pattern1.sub(lambda m: self.environ.get(m.group(1), m.group(0)), value)

        pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
        value = pattern2.sub(lambda m: self.environ.get(m.group(1), m.group(0)), value)

        return value

    def _lookup_properties(self, keys: List[str]) -> str:
        """Property files first, then build properties."""
        for source in list(self.property_files) + [self.build_properties]:
            for key in keys:
                if source.get(key):
                    return source[key]
        return ''

    def _resolve(self, explicit: str, env_vars: List[str], property_keys: List[str]) -> str:
        value = self._expand_env(explicit)
        if value:
            return value
        for var in env_vars:
            if self.environ.get(var):
                return self.environ[var]
        return self._lookup_properties(property_keys)

    def apply_overrides(self, **overrides):
        """Command line options win over everything else. None means not given."""
        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(self, key):
                raise AttributeError(f"Unknown configuration option: {key}")
            setattr(self, key, value)

    def load_deployment_id_file(self, path=None):
        """Adopt the deployment id saved by a previous upload."""
        bundle, deployment_id = read_deployment_id_file(path or self.deployment_id_file)
        self.deployment_id = deployment_id
        if not self.bundle:
            self.bundle = bundle

    def validate(self) -> Tuple[bool, str]:
        """
        Validate the configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.auth_method not in AUTH_METHODS:
            return False, f"Invalid auth method: {self.auth_method}. Must be one of {AUTH_METHODS}"

        if self.auth_location not in ApiKeyAuth.LOCATIONS:
            return False, f"Invalid auth location: {self.auth_location}. Must be one of {ApiKeyAuth.LOCATIONS}"

        if not self.base_url:
            return False, "Portal URL must not be empty"

        if not (self.token and self.auth_method in ('bearer', 'apikey')):
            if not self.username or not self.password:
                return False, "Central Portal publishing requires username and password"

        if self.initial_delay <= 0:
            return False, "poll.initial_delay must be positive"

        if self.max_attempts is not None and self.max_attempts < 0:
            return False, "poll.max_attempts must not be negative"

        return True, ""

    def create_deployment(self, **kwargs) -> PortalDeployment:
        """Build the PortalDeployment described by this configuration."""
        return PortalDeployment(
            base_url=self.base_url,
            username=self.username or None,
            password=self.password or None,
            bundle=self.bundle or None,
            name=self.name or None,
            deployment_id=self.deployment_id or None,
            release_after_upload=self.auto_release,
            auth_method=self.auth_method,
            token=self.token or None,
            auth_header=self.auth_header,
            auth_prefix=self.auth_prefix,
            auth_location=self.auth_location,
            timeout=self.timeout,
            initial_delay=self.initial_delay,
            max_attempts=self.max_attempts,
            max_wait=self.max_wait,
            **kwargs,
        )

    def get_config_summary(self) -> str:
        """Get a summary of the configuration for display."""
        lines = []
        lines.append(f"  Portal URL: {self.base_url}")
        lines.append(f"  Bundle: {self.bundle or 'Not configured'}")
        if self.deployment_id:
            lines.append(f"  Deployment ID: {self.deployment_id}")
        lines.append(f"  Publishing Type: {'AUTOMATIC' if self.auto_release else 'USER_MANAGED'}")
        lines.append(f"  Auth Method: {self.auth_method}")
        lines.append(f"  Username: {'***' if self.username else 'Not configured'}")
        lines.append(f"  Password: {'***' if self.password else 'Not configured'}")
        if self.auth_method != 'basic':
            lines.append(f"  Token: {'***' if self.token else 'Not configured'}")
        ceiling = []
        if self.max_attempts is not None:
            ceiling.append(f"{self.max_attempts} waits")
        if self.max_wait is not None:
            ceiling.append(f"{self.max_wait}s")
        lines.append(f"  Polling: {self.initial_delay:g}s doubling, limit: {', '.join(ceiling) or 'none'}")
        return '\n'.join(lines)

    @classmethod
    def load(cls,
             config_path: Optional[str] = None,
             properties_file: Optional[str] = None,
             build_properties: Optional[Dict[str, str]] = None,
             environ: Optional[Dict[str, str]] = None) -> 'PortalConfig':
        """
        Create PortalConfig from the files on disk.

        Args:
            config_path: TOML file; portal.toml in the working directory when present
            properties_file: Explicit property file replacing the defaults
            build_properties: Properties given with -P
            environ: Environment, defaults to os.environ
        """
        if config_path:
            config = load_config_file(config_path)
        elif Path(DEFAULT_CONFIG_FILE).is_file():
            config = load_config_file(DEFAULT_CONFIG_FILE)
        else:
            config = {}

        if properties_file:
            if not Path(properties_file).expanduser().is_file():
                raise ConfigurationError(f"Properties file not found: {properties_file}")
            property_files = [load_properties(properties_file)]
        else:
            property_files = [load_properties(p) for p in default_property_files()]

        return cls(config, property_files, build_properties, environ)

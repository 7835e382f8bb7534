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
Options and helpers shared by the Portal subcommands.
"""

import argparse

from ..utils.console import print_warning
from ..utils.portal.config import PortalConfig, parse_build_properties
from ..utils.portal.errors import ConfigurationError


def add_portal_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Project configuration file (default: portal.toml when present)",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Central Portal base URL (default: https://central.sonatype.com/)",
    )
    parser.add_argument(
        "--bundle",
        type=str,
        default=None,
        help="Bundle archive to upload",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Deployment name (default: bundle file name)",
    )
    parser.add_argument(
        "--deployment-id",
        type=str,
        default=None,
        help="Use an existing deployment instead of uploading the bundle",
    )
    parser.add_argument(
        "--deployment-id-file",
        type=str,
        default=None,
        help="Resume the deployment recorded in this file by a previous upload",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not record the deployment id after uploading",
    )
    parser.add_argument(
        "--auth",
        type=str,
        choices=["basic", "bearer", "apikey"],
        default=None,
        help="Authentication method (default: basic)",
    )
    parser.add_argument(
        "--properties-file",
        type=str,
        default=None,
        help="Property file with credentials (default: ./gradle.properties, ~/.gradle/gradle.properties)",
    )
    parser.add_argument(
        "-P",
        "--property",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Build property, e.g. -P publishDeploymentId=<id>",
    )
    parser.add_argument(
        "--initial-delay",
        type=float,
        default=None,
        help="Seconds before the second status check, doubled after each check (default: 1)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after waiting this many times between status checks (default: never)",
    )
    parser.add_argument(
        "--max-wait",
        type=float,
        default=None,
        help="Give up after waiting this many seconds (default: never)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP request timeout in seconds (default: 300)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print configuration and every request",
    )


def load_portal_config(args) -> PortalConfig:
    """Read the configuration files and apply the command line on top."""
    config = PortalConfig.load(
        config_path=args.config,
        properties_file=args.properties_file,
        build_properties=parse_build_properties(args.property),
    )
    config.apply_overrides(
        base_url=args.url,
        bundle=args.bundle,
        name=args.name,
        auth_method=args.auth,
        initial_delay=args.initial_delay,
        max_attempts=args.max_attempts,
        max_wait=args.max_wait,
        timeout=args.timeout,
    )
    if getattr(args, "auto_release", False):
        config.auto_release = True

    if args.deployment_id:
        config.deployment_id = args.deployment_id
    elif args.deployment_id_file:
        config.load_deployment_id_file(args.deployment_id_file)
    if config.deployment_id and args.bundle:
        print_warning(f"Deployment {config.deployment_id} is given, bundle {args.bundle} will not be uploaded")

    is_valid, error_msg = config.validate()
    if not is_valid:
        raise ConfigurationError(f"Configuration validation failed: {error_msg}")

    if args.verbose:
        print(config.get_config_summary())
    return config


def create_portal_deployment(args):
    """Build the deployment the command acts on."""
    config = load_portal_config(args)
    deployment = config.create_deployment(
        deployment_id_file=None if args.no_save else config.deployment_id_file,
        verbose=args.verbose,
    )
    return deployment

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

import sys
import argparse

from ..utils.console import print_step
from ..utils.context.namespace import CliNameSpace
from ..utils.context.context import CliContext
from ..utils.context.command import CliCommand
from ..utils.portal.errors import ConfigurationError
from ._shared import add_portal_arguments, create_portal_deployment


class Status(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to show the state of a Maven Central Portal deployment.

        Examples:
            portalpub status --deployment-id 28570f16-da32-4c14-bd2e-c1acc0782365
            portalpub status --deployment-id-file build/maven-central-portal-bundle-id
            portalpub status -P publishDeploymentId=28570f16-da32-4c14-bd2e-c1acc0782365
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="portalpub status",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_portal_arguments(parser)
        input_argv = sys.argv[2:] if argv is None else argv
        return parser.parse_args(input_argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        print_step("Querying Maven Central Portal deployment")
        deployment = create_portal_deployment(args)
        if not deployment.deployment_id_override:
            raise ConfigurationError(
                "No deployment id given, use --deployment-id, --deployment-id-file "
                "or -P publishDeploymentId=<id>")
        status = deployment.status()

        print(f"  Deployment ID: {status.deployment_id}")
        if status.deployment_name:
            print(f"  Name: {status.deployment_name}")
        print(f"  State: {status.raw_state}")
        for purl in status.purls:
            print(f"  - {purl}")
        if status.errors:
            print(f"  Errors: {status.errors}")

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

from ..utils.console import print_step, print_success
from ..utils.context.namespace import CliNameSpace
from ..utils.context.context import CliContext
from ..utils.context.command import CliCommand
from ._shared import add_portal_arguments, create_portal_deployment


class Drop(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to delete a VALIDATED or FAILED deployment. Published deployments cannot be dropped.

        Examples:
            portalpub drop -P publishDeploymentId=28570f16-da32-4c14-bd2e-c1acc0782365
            portalpub drop --deployment-id 28570f16-da32-4c14-bd2e-c1acc0782365
            portalpub drop --deployment-id-file build/maven-central-portal-bundle-id
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="portalpub drop",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_portal_arguments(parser)
        input_argv = sys.argv[2:] if argv is None else argv
        return parser.parse_args(input_argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        print_step("Dropping Maven Central Portal deployment")
        deployment = create_portal_deployment(args)
        deployment.drop()
        print_success(f"Deployment {deployment.deployment_id} dropped")

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
from ..utils.portal.errors import ConfigurationError
from ._shared import add_portal_arguments, create_portal_deployment


class Publish(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to run several deployment actions in one go.

        The bundle is uploaded once (unless a deployment id is given) and the
        actions run in the given order on that deployment. release and drop
        cannot be requested together.

        Examples:
            portalpub publish validate release --bundle build/mylib-bundle.zip
            portalpub publish validate drop --bundle build/mylib-bundle.zip
            portalpub publish release --deployment-id-file build/maven-central-portal-bundle-id
        """

    def get_action_list(self) -> list:
        return ["validate", "release", "drop"]

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="portalpub publish",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "actions",
            metavar=f"{self.get_action_list()}",
            type=str,
            nargs="+",
            choices=self.get_action_list(),
        )
        add_portal_arguments(parser)
        parser.add_argument(
            "--auto-release",
            action="store_true",
            help="Publish automatically once the Portal has validated the bundle",
        )
        input_argv = sys.argv[2:] if argv is None else argv
        return parser.parse_args(input_argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        if "release" in args.actions and "drop" in args.actions:
            raise ConfigurationError("release and drop cannot be executed together")

        print_step(f"Publishing to Maven Central Portal: {' -> '.join(args.actions)}")
        deployment = create_portal_deployment(args)
        for action in args.actions:
            getattr(deployment, action)()
        print_success(f"Deployment {deployment.deployment_id} done")

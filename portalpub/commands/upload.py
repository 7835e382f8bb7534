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


class Upload(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to upload a bundle to the Maven Central Portal.

        The deployment id returned by the Portal is written to
        build/maven-central-portal-bundle-id as <bundle>=<id>, so that
        validate, release and drop can resume it later.

        Examples:
            portalpub upload --bundle build/mylib-bundle.zip
            portalpub upload --bundle build/mylib-bundle.zip --auto-release
            portalpub upload --bundle build/mylib-bundle.zip --no-save
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="portalpub upload",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
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
        print_step("Uploading bundle to Maven Central Portal")
        if args.deployment_id or args.deployment_id_file:
            raise ConfigurationError(
                "upload always creates a new deployment, drop --deployment-id and --deployment-id-file")
        deployment = create_portal_deployment(args)
        if deployment.deployment_id_override:
            raise ConfigurationError(
                f"Deployment id {deployment.deployment_id_override} is configured, "
                "upload always creates a new deployment")
        deployment_id = deployment.upload_bundle()
        print_success(f"Deployment {deployment_id} created")

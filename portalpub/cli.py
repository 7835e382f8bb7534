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

import os
import sys
import importlib
import argparse

from .utils.console import print_error
from .utils.context.namespace import CliNameSpace
from .utils.context.context import CliContext
from .utils.context.command import CliCommand
from .utils.portal.errors import PortalError

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """portalpub - Maven Central Portal publishing tool

Uploads a signed bundle to the Maven Central Portal and drives the
deployment through validation, release or drop.

USAGE:
    portalpub <command> [options]

COMMANDS:
    bundle      Zip a local Maven repository into an upload bundle
    upload      Upload a bundle and record the deployment id
    status      Show the state of a deployment
    validate    Wait until a deployment is validated
    release     Publish a validated deployment
    drop        Delete a validated or failed deployment
    publish     Run validate/release/drop in order on one deployment

EXAMPLES:
    portalpub bundle build/repo -o build/mylib-bundle.zip
    portalpub validate --bundle build/mylib-bundle.zip
    portalpub release --deployment-id-file build/maven-central-portal-bundle-id
    portalpub publish validate release --bundle build/mylib-bundle.zip

CREDENTIALS:
    MAVEN_CENTRAL_PORTAL_USERNAME / MAVEN_CENTRAL_PORTAL_PASSWORD
    (or MAVEN_CENTRAL_USERNAME / MAVEN_CENTRAL_PASSWORD), portal.toml,
    gradle.properties, or -P mavenCentralPortalUsername=... on the command line.

For more information on a specific command:
    portalpub <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if not command.startswith("_") and command.endswith(".py"):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _help_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="portalpub",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        input_argv = sys.argv[1:] if argv is None else argv
        # Only the root help; "portalpub upload --help" belongs to the subcommand
        if len(input_argv) == 1 and input_argv[0] in ['--help', '-h']:
            self._help_parser().print_help()
            sys.exit(0)

        parser = argparse.ArgumentParser(
            prog="portalpub",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=False,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?',
            choices=self.get_command_list(),
        )
        # parse only known args, the rest is handed to the subcommand
        args, unknown = parser.parse_known_args(input_argv[:1], namespace=CliNameSpace())
        args.argv = unknown + input_argv[1:]
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._help_parser().print_help()
            sys.exit(1)

        module_name = f"{PACKAGE_NAME}.commands.{args.subcommand}"
        class_name = args.subcommand.capitalize()
        module = importlib.import_module(module_name)
        klass = getattr(module, class_name)
        sub_cmd = klass()
        sub_cmd.exec(context, sub_cmd.cli(args.argv))


def main(argv=None):
    cmd = Cli()
    try:
        cmd.exec(CliContext(), cmd.cli(argv))
    except PortalError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Interrupted, the deployment is left as it is on the Portal")
        sys.exit(130)


if __name__ == "__main__":
    main()

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
from ..utils.portal.bundle import create_bundle


class Bundle(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to zip a local Maven repository into a Portal bundle.

        The directory must already contain the signed publication
        (group/artifact/version with .pom, .jar, .asc and checksum files).
        maven-metadata files and a root LICENSE are left out.

        Examples:
            portalpub bundle build/repo
            portalpub bundle build/repo -o build/mylib-1.0.0-bundle.zip
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="portalpub bundle",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "repo_dir",
            type=str,
            help="Local Maven repository directory",
        )
        parser.add_argument(
            "-o",
            "--output",
            type=str,
            default=None,
            help="Bundle file to write (default: build/<repo_dir>-bundle.zip)",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="List every file added",
        )
        input_argv = sys.argv[2:] if argv is None else argv
        return parser.parse_args(input_argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        print_step(f"Bundling {args.repo_dir}")
        output = create_bundle(args.repo_dir, args.output, args.verbose)
        print_success(f"Bundle written to {output}")

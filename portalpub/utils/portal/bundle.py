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
Package a local Maven repository directory as a Portal upload bundle.

The directory must already hold the signed repository layout
(group/artifact/version/files). The Portal rejects maven-metadata files and
any file placed at the root of the bundle next to the layout.
"""

import fnmatch
import zipfile
from pathlib import Path
from typing import List, Optional

from .errors import ConfigurationError

ROOT_EXCLUDES = ['LICENSE', 'LICENSE.blob']
EXCLUDE_PATTERNS = ['maven-metadata.*']


def _is_excluded(relative: Path) -> bool:
    if len(relative.parts) == 1 and relative.name in ROOT_EXCLUDES:
        return True
    return any(fnmatch.fnmatch(relative.name, pattern) for pattern in EXCLUDE_PATTERNS)


def collect_bundle_files(repo_dir) -> List[Path]:
    """List the files of repo_dir that belong in the bundle, sorted."""
    repo_dir = Path(repo_dir)
    if not repo_dir.is_dir():
        raise ConfigurationError(f"Repository directory {repo_dir} does not exist or is not a directory")

    files = []
    for path in sorted(repo_dir.rglob('*')):
        if not path.is_file():
            continue
        if _is_excluded(path.relative_to(repo_dir)):
            continue
        files.append(path)
    return files


def create_bundle(repo_dir, output: Optional[str] = None, verbose: bool = False) -> Path:
    """
    Zip repo_dir into a bundle.

    Args:
        repo_dir: Local Maven repository holding the publication
        output: Bundle path, defaults to build/<repo dir name>-bundle.zip
        verbose: Print every added file

    Returns:
        Path of the written bundle
    """
    repo_dir = Path(repo_dir)
    files = collect_bundle_files(repo_dir)
    if not files:
        raise ConfigurationError(f"Nothing to bundle in {repo_dir}")

    if output:
        output_path = Path(output)
    else:
        output_path = Path("build") / f"{repo_dir.resolve().name}-bundle.zip"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(output_path, 'w', zipfile.ZIP_DEFLATED) as zf:
        for path in files:
            arcname = path.relative_to(repo_dir).as_posix()
            zf.write(path, arcname)
            if verbose:
                print(f"\t+ {arcname}")

    return output_path

"""
automatically maintains the latest git tag + revision info in a python file

"""

from __future__ import annotations

import os
import re
import subprocess


def _detached() -> bool:
    try:
        # Returns exit code 1 if detached
        result = subprocess.run(["git", "symbolic-ref", "-q", "HEAD"], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        return result.returncode == 1
    except OSError:
        return False


MAJOR_MINOR_PATCH_MATCHER = re.compile(r"^\d+\.\d+\.\d+$")
VERSION_LINE_MATCHER = re.compile(r"""^__version__\s*=\s*['"]([^'"]+)['"]""", re.MULTILINE)


def pep440ify(git_describe_version: str) -> str:
    if git_describe_version:
        if _detached():
            if MAJOR_MINOR_PATCH_MATCHER.match(git_describe_version):
                return git_describe_version
            else:
                # If in detached state and does not match to major.minor.patch pattern
                # add some mockery to version so it is parseable by setuptools.
                return f"0.0.0+{git_describe_version}"
        else:
            parts = git_describe_version.rsplit("-", 2)
            if len(parts) != 3:
                # HEAD is exactly at the tag
                return git_describe_version
            version, _commits, sha = parts
            # Remove the number of commits.
            return f"{version}+{sha}"
    return git_describe_version


def read_version_file(version_file: str) -> str | None:
    try:
        with open(version_file, encoding="utf-8") as fp:
            match = VERSION_LINE_MATCHER.search(fp.read())
    except OSError:
        return None
    return match.group(1) if match else None


def get_project_version(version_file: str) -> str:
    version_file = os.path.join(os.path.dirname(os.path.realpath(__file__)), version_file)
    file_ver = read_version_file(version_file)

    try:
        proc = subprocess.Popen(
            ["git", "describe", "--tags"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=os.path.dirname(version_file),
        )
        stdout, _ = proc.communicate()
        if stdout and proc.returncode == 0:
            git_ver = stdout.splitlines()[0].strip().decode("utf-8")
            git_ver = pep440ify(git_ver)
            if git_ver and ((git_ver != file_ver) or not file_ver):
                with open(version_file, "w", encoding="utf-8") as fp:
                    fp.write("__version__ = '%s'\n" % git_ver)
                return git_ver
    except OSError:
        pass

    if not file_ver:
        raise Exception("version not available from git or from file %r" % version_file)

    return file_ver


if __name__ == "__main__":
    import sys

    get_project_version(sys.argv[1])

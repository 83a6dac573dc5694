#!/usr/bin/env python3
import os
import re
import sys

PYPROJECT = 'pyproject.toml'
PACKAGE_INIT = os.path.join('sessig', '__init__.py')

PYPROJECT_VERSION = re.compile(r'^version = "([^"]+)"', re.MULTILINE)
INIT_VERSION = re.compile(r'^__version__ = "([^"]+)"', re.MULTILINE)

BUMP_TYPES = ('major', 'minor', 'patch')


def bump_version(current: str, bump_type: str) -> str:
    major, minor, patch = map(int, current.split('.'))
    if bump_type == 'major':
        return f"{major + 1}.0.0"
    elif bump_type == 'minor':
        return f"{major}.{minor + 1}.0"
    elif bump_type == 'patch':
        return f"{major}.{minor}.{patch + 1}"
    else:
        raise ValueError(f"Invalid bump type: {bump_type}")


def read_version(path: str, pattern: re.Pattern) -> str:
    with open(path, 'r') as f:
        match = pattern.search(f.read())
    if not match:
        raise ValueError(f"Could not find version in {path}")
    return match.group(1)


def write_version(path: str, pattern: re.Pattern, version: str) -> None:
    with open(path, 'r') as f:
        content = f.read()
    new_content = pattern.sub(lambda m: m.group(0).replace(m.group(1), version), content, count=1)
    with open(path, 'w') as f:
        f.write(new_content)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1 or argv[0] not in BUMP_TYPES:
        print("Usage: bump_version.py <major|minor|patch>", file=sys.stderr)
        sys.exit(1)

    try:
        current_version = read_version(PYPROJECT, PYPROJECT_VERSION)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    new_version = bump_version(current_version, argv[0])
    write_version(PYPROJECT, PYPROJECT_VERSION, new_version)
    write_version(PACKAGE_INIT, INIT_VERSION, new_version)

    # Output for GitHub Actions
    github_output = os.environ.get('GITHUB_OUTPUT')
    if github_output:
        with open(github_output, 'a') as f:
            f.write(f"current_version={current_version}\n")
            f.write(f"new_version={new_version}\n")
    else:
        print(f"Bumped version: {current_version} -> {new_version}")


if __name__ == '__main__':
    main()

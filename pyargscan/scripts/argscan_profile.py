#!/usr/bin/env python
"""Create / convert pyargscan profiles (configurations).
"""

import sys

from pyargscan.cmdline import ArgumentParser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    if not argv or argv[0] != "profile":
        argv.insert(0, "profile")

    ap = ArgumentParser(description="Create / convert pyargscan profiles (configurations).")

    try:
        ap.run(argv)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

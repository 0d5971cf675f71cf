#!/usr/bin/env python3
"""Smart Prompt: launcher for a source checkout."""

import os
import sys

# Ensure src/ is on the import path
_root = os.path.dirname(os.path.abspath(__file__))
_src = os.path.join(_root, "src")
if _src not in sys.path:
    sys.path.insert(0, _src)


def main():
    from smart_prompt.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())

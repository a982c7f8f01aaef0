#!/usr/bin/env python


import os.path
import sys

try:
    from ormgen.cli.main import run_ormgen
except ImportError as err:
    ormgen_root = os.path.dirname(__file__)
    requirements_path = os.path.join(ormgen_root, "requirements.txt")
    print(f"Python environment for ormgen is not set up: module `{err.name}` is missing.", file=sys.stderr)
    print(
        f"Please install the required dependencies with: {sys.executable} -m pip install -r {requirements_path}",
        file=sys.stderr,
    )
    sys.exit(255)

sys.exit(run_ormgen())

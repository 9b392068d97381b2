#!/usr/bin/env python3
"""
Test runner for the short URL service.
Extra arguments are passed straight to pytest, e.g.:

    python run_tests.py -k concurrency
"""

import subprocess
import sys
import os


def run_tests(extra_args):
    """Run the test suite"""
    print("Running short URL service tests")
    print("=" * 40)

    # Tests import main.py from the project root
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    try:
        subprocess.run([
            sys.executable, "-m", "pytest",
            "tests/",
            "-v",
            "--tb=short",
            *extra_args
        ], check=True)

        print("\nAll tests passed!")
        return 0

    except subprocess.CalledProcessError as e:
        print(f"\nTests failed with exit code {e.returncode}")
        return e.returncode
    except FileNotFoundError:
        print("pytest not found. Install with: pip install -e '.[test]'")
        return 1


if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))

#!/usr/bin/env python
"""
Run the test suite for the catalog scraper.

Usage:
    python run_smoke_tests.py
    python run_smoke_tests.py --verbose
"""

import sys
import argparse
import unittest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def run_tests(verbosity=1):
    """Discover and run every test module under tests/."""
    suite = unittest.defaultTestLoader.discover(str(project_root / 'tests'))
    return unittest.TextTestRunner(verbosity=verbosity).run(suite)


def main():
    """Main entry point for the test runner."""
    parser = argparse.ArgumentParser(description='Run tests')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    args = parser.parse_args()

    print("=" * 70)
    print("TESTS - Mod APK Catalog Scraper")
    print("=" * 70)
    print()

    result = run_tests(verbosity=2 if args.verbose else 1)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Tests run: {result.testsRun}")
    print(f"Failures: {len(result.failures)}")
    print(f"Errors: {len(result.errors)}")
    print(f"Skipped: {len(result.skipped)}")
    print("=" * 70)

    if result.wasSuccessful():
        print("\n✓ All tests passed!")
        return 0
    else:
        print("\n✗ Some tests failed!")
        return 1


if __name__ == '__main__':
    sys.exit(main())

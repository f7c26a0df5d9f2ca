"""CLI entry point: python -m noteorganizer"""

import sys

from noteorganizer.cli import main

if __name__ == "__main__":
    sys.exit(main())

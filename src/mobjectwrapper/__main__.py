"""Command-line interface."""
import sys

from mobjectwrapper.main import main

if __name__ == "__main__":
    sys.exit(main())

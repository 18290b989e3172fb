"""
Entry point for `python -m bashist`.

Same behavior as the `bashist` console script defined in pyproject.toml.
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())

"""
Build the keyword index and answer top-5 two keyword queries.

Usage:
    python run_search.py --docs docs.txt --noise noisewords.txt
    python run_search.py --docs docs.txt --noise noisewords.txt deer train

The docs file lists document file names (resolved against the docs file's
directory); the noise file lists words that are never indexed. Without
keywords on the command line, prompts for "keyword 1" / "keyword 2" until
an empty line.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from littlesearch.search import main


if __name__ == "__main__":
    sys.exit(main())

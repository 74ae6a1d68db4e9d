"""
Search component: top-k "kw1 OR kw2" queries over the keyword index.

A document matches if either keyword occurs in it. Results are ordered by
descending frequency, each document appears once, ties go to the first
keyword, and at most k (default 5) documents are returned.

Usage (from repo root):
    python -m littlesearch.search --docs docs.txt --noise noisewords.txt
    python -m littlesearch.search --docs docs.txt --noise noisewords.txt deer train
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from .index_builder import build_index_from_files
from .posting import KeywordIndex, Occurrence
from .tokenizer import SourceUnavailableError

TOP_K = 5
DEFAULT_DOCS_FILE = Path("docs.txt")
DEFAULT_NOISE_FILE = Path("noisewords.txt")


def _documents(occurrences: Sequence[Occurrence], k: int) -> List[str]:
    return [occ.document for occ in occurrences[:k]]


def merge_postings_top_k(
    list_a: Sequence[Occurrence],
    list_b: Sequence[Occurrence],
    k: int = TOP_K,
) -> List[str]:
    """
    Merge two descending-frequency occurrence lists into at most k distinct
    documents. The higher frequency goes first; on equal frequencies list_a
    wins. Only the pointer of the list the candidate came from advances, and
    a document already in the result is skipped.
    """
    result: List[str] = []
    i = j = 0
    while len(result) < k and (i < len(list_a) or j < len(list_b)):
        if i >= len(list_a):
            candidate = list_b[j]
            j += 1
        elif j >= len(list_b):
            candidate = list_a[i]
            i += 1
        elif list_a[i].frequency >= list_b[j].frequency:
            candidate = list_a[i]
            i += 1
        else:
            candidate = list_b[j]
            j += 1

        if candidate.document in result:
            continue
        result.append(candidate.document)
    return result


def top_k_search(index: KeywordIndex, kw1: str, kw2: str, k: int = TOP_K) -> List[str]:
    """
    Search result for "kw1 or kw2": up to k documents in which either keyword
    occurs, in descending order of frequency. Empty list if neither keyword
    is in the index.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    list_a = index.get_postings(kw1.lower())
    list_b = index.get_postings(kw2.lower())

    if not list_a and not list_b:
        return []
    if not list_b:
        return _documents(list_a, k)
    if not list_a:
        return _documents(list_b, k)
    return merge_postings_top_k(list_a, list_b, k)


def top5search(index: KeywordIndex, kw1: str, kw2: str) -> List[str]:
    """Top 5 documents for "kw1 or kw2"."""
    return top_k_search(index, kw1, kw2, k=5)


def _print_results(results: List[str]) -> None:
    if results:
        print(results)
    else:
        print("No matches.")


def run_search_loop(index: KeywordIndex, top_k: int = TOP_K) -> None:
    """
    Interactive command-line search loop.
    """
    print(f"Indexed {len(index.documents())} documents, {len(index)} keywords.")
    print("Enter two keywords per query. Empty line or Ctrl+C to exit.")

    while True:
        try:
            kw1 = input("keyword 1: ").strip()
            if not kw1:
                break
            kw2 = input("keyword 2: ").strip()
            if not kw2:
                break
        except (EOFError, KeyboardInterrupt):
            print()
            break

        _print_results(top_k_search(index, kw1, kw2, k=top_k))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Little search engine: top-k two keyword search.")
    parser.add_argument(
        "keywords",
        nargs="*",
        metavar="KEYWORD",
        help="Two keywords to search for (omit for interactive mode).",
    )
    parser.add_argument(
        "--docs",
        type=Path,
        default=DEFAULT_DOCS_FILE,
        help="File listing the document file names.",
    )
    parser.add_argument(
        "--noise",
        type=Path,
        default=DEFAULT_NOISE_FILE,
        help="File listing the noise words.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=TOP_K,
        help="Number of top results to show.",
    )
    parser.add_argument(
        "--show-index",
        action="store_true",
        help="Print the keyword index as JSON after building it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each indexed document.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.keywords and len(args.keywords) != 2:
        parser.error("expected exactly two keywords")
    if args.top < 1:
        parser.error("--top must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        index = build_index_from_files(args.docs, args.noise)
    except (SourceUnavailableError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.show_index:
        print(json.dumps(index.to_dict(), indent=2, ensure_ascii=False))

    if args.keywords:
        kw1, kw2 = args.keywords
        _print_results(top_k_search(index, kw1, kw2, k=args.top))
    else:
        run_search_loop(index, top_k=args.top)
    return 0


if __name__ == "__main__":
    sys.exit(main())

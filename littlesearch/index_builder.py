"""
Index builder: constructs the keyword index from documents.
Each document's keywords are counted, then merged into the master index,
inserting every occurrence at its place in descending frequency order.
"""

import logging
from pathlib import Path
from typing import Collection, Iterable

from .posting import KeywordIndex, Occurrence
from .tokenizer import (
    get_keyword,
    load_noise_words,
    read_document,
    read_text_file,
    split_tokens,
)

logger = logging.getLogger(__name__)


def load_keywords_from_tokens(
    tokens: Iterable[str],
    doc_id: str,
    noise_words: Collection[str] = frozenset(),
) -> dict[str, Occurrence]:
    """
    Count the keywords among a document's words.
    Returns keyword -> Occurrence(doc_id, count), in first-seen order.
    """
    keywords: dict[str, Occurrence] = {}
    for token in tokens:
        keyword = get_keyword(token, noise_words)
        if keyword is None:
            continue
        if keyword not in keywords:
            keywords[keyword] = Occurrence(doc_id, 1)
        else:
            keywords[keyword].frequency += 1
    return keywords


def load_keywords_from_document(
    doc_file: Path | str,
    noise_words: Collection[str] = frozenset(),
    doc_id: str | None = None,
) -> dict[str, Occurrence]:
    """
    Read a document file and count its keywords.
    The document id defaults to the file name as given.
    Raises SourceUnavailableError if the file does not exist.
    """
    text = read_document(Path(doc_file))
    return load_keywords_from_tokens(
        split_tokens(text),
        doc_id if doc_id is not None else str(doc_file),
        noise_words,
    )


def merge_keywords(index: KeywordIndex, keywords: dict[str, Occurrence]) -> None:
    """
    Merge one document's keywords into the master index. Each occurrence is
    appended to its keyword's list and moved into descending frequency order.
    """
    for keyword, occurrence in keywords.items():
        index.add_occurrence(keyword, occurrence)


def build_index(
    documents: Iterable[tuple[str, Iterable[str]]],
    noise_words: Iterable[str] = (),
) -> KeywordIndex:
    """
    Build a keyword index from (doc_id, tokens) pairs, processed in order.
    Noise words are taken as-is. Returns the index frozen (read-only).
    Raises ValueError if a document id is supplied more than once.
    """
    noise = frozenset(noise_words)
    logger.info("Loaded %d noise words", len(noise))

    index = KeywordIndex()
    seen: set[str] = set()
    for doc_id, tokens in documents:
        if doc_id in seen:
            raise ValueError(f"duplicate document id: {doc_id}")
        seen.add(doc_id)
        keywords = load_keywords_from_tokens(tokens, doc_id, noise)
        merge_keywords(index, keywords)
        logger.debug("Indexed %s (%d keywords)", doc_id, len(keywords))

    logger.info("Indexed %d documents, %d unique keywords", len(seen), len(index))
    return index.freeze()


def _resolve_document(docs_dir: Path, name: str) -> Path:
    path = Path(name)
    if path.is_absolute():
        return path
    return docs_dir / path


def build_index_from_files(
    docs_file: Path | str,
    noise_words_file: Path | str,
) -> KeywordIndex:
    """
    Build the keyword index from files on disk.
    - noise_words_file: noise words, whitespace separated.
    - docs_file: document file names, whitespace separated. Relative names are
      resolved against the docs file's directory; the document id is the name
      exactly as listed.
    Raises SourceUnavailableError if any file is missing, ValueError if a
    document cannot be read or is listed twice. Nothing is returned for a
    failed build.
    """
    docs_file = Path(docs_file)
    noise = load_noise_words(Path(noise_words_file))
    doc_names = split_tokens(read_text_file(docs_file))
    docs_dir = docs_file.parent

    def documents():
        for name in doc_names:
            text = read_document(_resolve_document(docs_dir, name))
            yield name, split_tokens(text)

    return build_index(documents(), noise)

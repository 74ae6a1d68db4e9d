"""
Keyword extraction and document reading for the search engine index.
Splits document text on whitespace and turns each word into a keyword
(lowercase, trailing punctuation stripped, alphabetic only, not a noise word).
HTML documents are reduced to their visible text first.
"""

import json
import re
import warnings
from pathlib import Path
from typing import Collection

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

from nltk.tokenize import WhitespaceTokenizer

# Characters stripped from the end of a word before the keyword test
PUNCTUATION = ".,?:;!"

# latin-1 accepts any byte sequence, so it must come last
DOCUMENT_ENCODINGS = ("utf-8", "cp1252", "latin-1")
HTML_SUFFIXES = {".html", ".htm"}

_KEYWORD_RE = re.compile(r"[a-z]+")
_WHITESPACE_TOKENIZER = WhitespaceTokenizer()


class SourceUnavailableError(FileNotFoundError):
    """A document or noise word file could not be found."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Source not found: {self.path}")


def get_keyword(word: str, noise_words: Collection[str] = frozenset()) -> str | None:
    """
    Return word as a keyword if it passes the keyword test, otherwise None.
    A keyword is a word that, after losing any trailing punctuation
    (. , ? : ; !), consists only of letters a-z and is not a noise word.
    Matching is case-insensitive; the keyword is returned in lower case.
    """
    key = word.lower().strip()
    key = key.rstrip(PUNCTUATION)
    if not key:
        return None
    if not _KEYWORD_RE.fullmatch(key):
        return None
    if key in noise_words:
        return None
    return key


def split_tokens(text: str) -> list[str]:
    """Split text into raw whitespace-delimited words."""
    if not text:
        return []
    return _WHITESPACE_TOKENIZER.tokenize(text)


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def read_text_file(filepath: Path) -> str:
    """
    Read file content, handling common encodings.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise SourceUnavailableError(filepath)
    for encoding in DOCUMENT_ENCODINGS:
        try:
            return filepath.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode file: {filepath}")


def read_document(filepath: Path) -> str:
    """
    Read a document's text.
    - .html/.htm: visible text only.
    - .json: the "content" field.
    - anything else: the file as plain text.
    """
    filepath = Path(filepath)
    content = read_text_file(filepath)
    suffix = filepath.suffix.lower()
    if suffix in HTML_SUFFIXES:
        return extract_text_from_html(content)
    if suffix == ".json":
        data = json.loads(content)
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            raise ValueError(f"JSON file has no string 'content' field: {filepath}")
        return data["content"]
    return content


def load_noise_words(filepath: Path) -> frozenset[str]:
    """
    Load noise words, one or more per line. Words are stored exactly as
    written (no lower-casing or punctuation stripping).
    """
    return frozenset(split_tokens(read_text_file(filepath)))

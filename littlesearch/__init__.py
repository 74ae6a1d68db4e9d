"""Little search engine package."""

from .posting import Occurrence, KeywordIndex, insert_last_occurrence
from .index_builder import build_index, build_index_from_files, load_keywords_from_tokens
from .search import top_k_search, top5search
from .tokenizer import get_keyword, SourceUnavailableError

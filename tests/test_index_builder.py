"""
Tests for building the keyword index from tokens and from files.
"""

import json

import pytest

from littlesearch.index_builder import (
    build_index,
    build_index_from_files,
    load_keywords_from_document,
    load_keywords_from_tokens,
    merge_keywords,
)
from littlesearch.posting import KeywordIndex, Occurrence
from littlesearch.tokenizer import SourceUnavailableError


def _postings(index, keyword):
    return [(occ.document, occ.frequency) for occ in index.get_postings(keyword)]


class TestLoadKeywords:
    """Tests for counting a single document's keywords."""

    def test_counts_matches(self):
        tokens = ["Cat", "cat.", "dog!", "don't", "the", "42", "CAT"]
        keywords = load_keywords_from_tokens(tokens, "d1", frozenset({"the"}))
        assert list(keywords) == ["cat", "dog"]
        assert keywords["cat"] == Occurrence("d1", 3)
        assert keywords["dog"] == Occurrence("d1", 1)

    def test_no_keywords(self):
        assert load_keywords_from_tokens(["...", "123", "it's"], "d1") == {}

    def test_from_document_file(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("The cat sat. The cat ran!", encoding="utf-8")
        keywords = load_keywords_from_document(path, frozenset({"the"}))
        assert keywords["cat"] == Occurrence(str(path), 2)
        assert set(keywords) == {"cat", "sat", "ran"}

    def test_from_document_file_custom_id(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("cat", encoding="utf-8")
        keywords = load_keywords_from_document(path, doc_id="doc.txt")
        assert keywords["cat"].document == "doc.txt"

    def test_from_missing_document(self, tmp_path):
        with pytest.raises(SourceUnavailableError):
            load_keywords_from_document(tmp_path / "missing.txt")


class TestMergeKeywords:
    """Tests for folding a document into the master index."""

    def test_merge_inserts_in_order(self):
        index = KeywordIndex()
        merge_keywords(index, {"cat": Occurrence("d1", 1)})
        merge_keywords(index, {"cat": Occurrence("d2", 4), "dog": Occurrence("d2", 1)})
        assert _postings(index, "cat") == [("d2", 4), ("d1", 1)]
        assert _postings(index, "dog") == [("d2", 1)]


class TestBuildIndex:
    """Tests for building the index from token streams."""

    def test_end_to_end_scenario(self):
        index = build_index(
            [("d1", ["cat", "cat", "dog"]), ("d2", ["dog", "dog", "dog"])],
            noise_words=[],
        )
        assert _postings(index, "cat") == [("d1", 2)]
        assert _postings(index, "dog") == [("d2", 3), ("d1", 1)]

    def test_index_is_frozen(self):
        index = build_index([("d1", ["cat"])])
        assert index.frozen

    def test_noise_words_excluded(self):
        index = build_index([("d1", ["The", "cat", "is", "here."])], noise_words=["the", "is"])
        assert set(index.keywords()) == {"cat", "here"}

    def test_noise_words_match_exactly(self):
        """Noise words are not normalized, so an upper-case entry filters nothing."""
        index = build_index([("d1", ["the"])], noise_words=["The"])
        assert "the" in index

    def test_every_list_sorted(self):
        documents = [
            (f"d{i}", ["alpha"] * ((i * 7) % 5 + 1) + ["beta"] * ((i * 3) % 4 + 1))
            for i in range(12)
        ]
        index = build_index(documents)
        for keyword in index.keywords():
            freqs = [occ.frequency for occ in index.get_postings(keyword)]
            assert freqs == sorted(freqs, reverse=True)
            docs = [occ.document for occ in index.get_postings(keyword)]
            assert len(docs) == len(set(docs))

    def test_empty_collection(self):
        index = build_index([])
        assert len(index) == 0

    def test_duplicate_document_id_rejected(self):
        with pytest.raises(ValueError, match="duplicate document id: d1"):
            build_index([("d1", ["cat"]), ("d2", ["dog"]), ("d1", ["cat", "cat"])])


class TestBuildIndexFromFiles:
    """Tests for building the index from a docs list and a noise file."""

    def _write_collection(self, tmp_path):
        (tmp_path / "noise.txt").write_text("the\nis\na\n", encoding="utf-8")
        (tmp_path / "d1.txt").write_text("The cat is a cat. Dog!", encoding="utf-8")
        (tmp_path / "d2.html").write_text(
            "<html><body><p>dog dog</p><script>cat cat cat</script><p>dog</p></body></html>",
            encoding="utf-8",
        )
        (tmp_path / "d3.json").write_text(
            json.dumps({"content": "bird cat"}), encoding="utf-8"
        )
        (tmp_path / "docs.txt").write_text("d1.txt\nd2.html\nd3.json\n", encoding="utf-8")

    def test_builds_from_files(self, tmp_path):
        self._write_collection(tmp_path)
        index = build_index_from_files(tmp_path / "docs.txt", tmp_path / "noise.txt")
        assert _postings(index, "cat") == [("d1.txt", 2), ("d3.json", 1)]
        assert _postings(index, "dog") == [("d2.html", 3), ("d1.txt", 1)]
        assert _postings(index, "bird") == [("d3.json", 1)]
        assert "the" not in index
        assert index.frozen

    def test_missing_document_fails_build(self, tmp_path):
        self._write_collection(tmp_path)
        (tmp_path / "docs.txt").write_text("d1.txt\nmissing.txt\n", encoding="utf-8")
        with pytest.raises(SourceUnavailableError) as excinfo:
            build_index_from_files(tmp_path / "docs.txt", tmp_path / "noise.txt")
        assert excinfo.value.path.name == "missing.txt"

    def test_document_listed_twice_fails_build(self, tmp_path):
        self._write_collection(tmp_path)
        (tmp_path / "docs.txt").write_text("d1.txt\nd3.json\nd1.txt\n", encoding="utf-8")
        with pytest.raises(ValueError, match="duplicate document id: d1.txt"):
            build_index_from_files(tmp_path / "docs.txt", tmp_path / "noise.txt")

    def test_non_string_json_content_fails_build(self, tmp_path):
        self._write_collection(tmp_path)
        (tmp_path / "d3.json").write_text(json.dumps({"content": 5}), encoding="utf-8")
        with pytest.raises(ValueError):
            build_index_from_files(tmp_path / "docs.txt", tmp_path / "noise.txt")

    def test_missing_noise_file_fails_build(self, tmp_path):
        self._write_collection(tmp_path)
        with pytest.raises(SourceUnavailableError):
            build_index_from_files(tmp_path / "docs.txt", tmp_path / "nope.txt")

    def test_missing_docs_file_fails_build(self, tmp_path):
        self._write_collection(tmp_path)
        with pytest.raises(SourceUnavailableError):
            build_index_from_files(tmp_path / "nope.txt", tmp_path / "noise.txt")

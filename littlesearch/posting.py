"""
Occurrence and keyword index data structures.

An occurrence records how many times a keyword appears in one document.
Each keyword's occurrence list is kept in DESCENDING order of frequency.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass
class Occurrence:
    """
    A keyword's occurrence in a document.
    - document: document identifier (file name as listed in the docs file)
    - frequency: number of times the keyword appears in the document
    """

    document: str
    frequency: int

    def __repr__(self) -> str:
        return f"({self.document},{self.frequency})"


def _is_descending(occurrences: Sequence[Occurrence]) -> bool:
    return all(
        occurrences[i].frequency >= occurrences[i + 1].frequency
        for i in range(len(occurrences) - 1)
    )


def insert_last_occurrence(occurrences: list[Occurrence]) -> list[int] | None:
    """
    Move the last occurrence in the list to its place in descending-frequency
    order. Elements 0..n-2 must already be in order; the position is found by
    binary search, then the element is shifted in.

    Returns the sequence of midpoint indexes probed by the search, or None if
    the list holds fewer than two occurrences.
    """
    if len(occurrences) < 2:
        return None
    assert _is_descending(occurrences[:-1]), "occurrence list is not in descending order"

    new = occurrences[-1]
    mids: list[int] = []
    low, high, target = 0, len(occurrences) - 2, 0

    while high >= low:
        mid = (low + high) // 2
        mids.append(mid)
        if new.frequency == occurrences[mid].frequency:
            target = mid
            break
        if new.frequency < occurrences[mid].frequency:
            low = mid + 1
            target = mid + 1
        else:
            high = mid - 1
            target = mid

    occurrences.insert(target, occurrences.pop())
    return mids


class KeywordIndex:
    """
    Keyword index: map from keyword -> occurrence list in descending frequency.
    Writable while it is being built; freeze() makes it read-only.
    """

    def __init__(self) -> None:
        self._index: dict[str, list[Occurrence] | tuple[Occurrence, ...]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "KeywordIndex":
        """
        Stop accepting occurrences. Each occurrence list becomes a tuple, so
        get_postings can hand it out without copying. Returns self for chaining.
        """
        if not self._frozen:
            self._index = {keyword: tuple(occs) for keyword, occs in self._index.items()}
            self._frozen = True
        return self

    def add_occurrence(self, keyword: str, occurrence: Occurrence) -> list[int] | None:
        """
        Append an occurrence to the keyword's list and move it into order.
        Returns the midpoints probed by insert_last_occurrence.
        """
        if self._frozen:
            raise RuntimeError("cannot add occurrences to a frozen index")
        if keyword not in self._index:
            self._index[keyword] = []
        occurrences = self._index[keyword]
        occurrences.append(occurrence)
        return insert_last_occurrence(occurrences)

    def get_postings(self, keyword: str) -> tuple[Occurrence, ...]:
        """
        Return a keyword's occurrences as a tuple, or empty tuple. Once the
        index is frozen this is the stored tuple itself, not a copy.
        """
        return tuple(self._index.get(keyword, ()))

    def keywords(self) -> Iterator[str]:
        """Iterate over all keywords in the index."""
        return iter(self._index)

    def documents(self) -> set[str]:
        """Every document that contributed at least one keyword."""
        return {occ.document for occs in self._index.values() for occ in occs}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, keyword: str) -> bool:
        return keyword in self._index

    def to_dict(self) -> dict:
        """Serialize to a JSON-serializable dict for display."""
        return {
            keyword: [
                {"document": occ.document, "frequency": occ.frequency}
                for occ in occurrences
            ]
            for keyword, occurrences in sorted(self._index.items())
        }

"""
Posting and posting list data structures.

A posting records that a term occurs in a document, and how many times.
A posting list holds the postings of one term, sorted by document id with no
duplicates; every mutation keeps it that way.
"""

from bisect import bisect_left
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Iterable, Iterator

_DOC_ID = attrgetter("doc_id")


@dataclass(order=True)
class Posting:
    """
    Occurrence of a term in a document.
    - doc_id: document identifier (identity and ordering)
    - frequency: number of occurrences in that document, >= 1
    """

    doc_id: int
    frequency: int = field(default=1, compare=False)

    def __repr__(self) -> str:
        return f"Posting(doc_id={self.doc_id!r}, frequency={self.frequency})"


class PostingList:
    """
    Postings of one term in strictly increasing doc_id order.

    intersect() and union() are linear merge-joins that return new lists and
    sum the frequencies of postings present on both sides.
    """

    def __init__(self) -> None:
        self._postings: list[Posting] = []

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> "PostingList":
        """Build from (doc_id, frequency) pairs already sorted by doc_id."""
        result = cls()
        last_id = None
        for doc_id, frequency in pairs:
            if last_id is not None and doc_id <= last_id:
                raise ValueError(
                    f"doc ids must be strictly increasing: {doc_id} after {last_id}"
                )
            if frequency < 1:
                raise ValueError(f"frequency must be >= 1, got {frequency} for doc {doc_id}")
            result._postings.append(Posting(doc_id, frequency))
            last_id = doc_id
        return result

    def _position(self, doc_id: int) -> int:
        return bisect_left(self._postings, doc_id, key=_DOC_ID)

    def add(self, doc_id: int, frequency: int = 1) -> bool:
        """
        Record frequency more occurrences in doc_id.
        Returns True if doc_id is new to this list.
        """
        if frequency < 1:
            raise ValueError(f"frequency must be >= 1, got {frequency}")
        pos = self._position(doc_id)
        if pos < len(self._postings) and self._postings[pos].doc_id == doc_id:
            self._postings[pos].frequency += frequency
            return False
        self._postings.insert(pos, Posting(doc_id, frequency))
        return True

    def find(self, doc_id: int) -> Posting | None:
        pos = self._position(doc_id)
        if pos < len(self._postings) and self._postings[pos].doc_id == doc_id:
            return self._postings[pos]
        return None

    def intersect(self, other: "PostingList") -> "PostingList":
        """Documents in both lists; frequencies are summed."""
        result = PostingList()
        a, b = self._postings, other._postings
        i = j = 0
        while i < len(a) and j < len(b):
            d1 = a[i].doc_id
            d2 = b[j].doc_id
            if d1 == d2:
                result._postings.append(Posting(d1, a[i].frequency + b[j].frequency))
                i += 1
                j += 1
            elif d1 < d2:
                i += 1
            else:
                j += 1
        return result

    def union(self, other: "PostingList") -> "PostingList":
        """Documents in either list; frequencies are summed where both have the document."""
        if not self._postings:
            return other.copy()
        if not other._postings:
            return self.copy()
        result = PostingList()
        out = result._postings
        a, b = self._postings, other._postings
        i = j = 0
        while i < len(a) and j < len(b):
            d1 = a[i].doc_id
            d2 = b[j].doc_id
            if d1 == d2:
                out.append(Posting(d1, a[i].frequency + b[j].frequency))
                i += 1
                j += 1
            elif d1 < d2:
                out.append(Posting(d1, a[i].frequency))
                i += 1
            else:
                out.append(Posting(d2, b[j].frequency))
                j += 1
        out.extend(Posting(p.doc_id, p.frequency) for p in a[i:])
        out.extend(Posting(p.doc_id, p.frequency) for p in b[j:])
        return result

    def copy(self) -> "PostingList":
        result = PostingList()
        result._postings = [Posting(p.doc_id, p.frequency) for p in self._postings]
        return result

    def doc_ids(self) -> list[int]:
        return [p.doc_id for p in self._postings]

    def as_pairs(self) -> list[tuple[int, int]]:
        return [(p.doc_id, p.frequency) for p in self._postings]

    def total_frequency(self) -> int:
        return sum(p.frequency for p in self._postings)

    def __iter__(self) -> Iterator[Posting]:
        return iter(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def __getitem__(self, index: int) -> Posting:
        return self._postings[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PostingList):
            return NotImplemented
        return self.as_pairs() == other.as_pairs()

    def __repr__(self) -> str:
        return "PostingList([" + ", ".join(f"{d}:{f}" for d, f in self.as_pairs()) + "])"

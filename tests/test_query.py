import itertools

import pytest

from boolir.dictionary import Dictionary
from boolir.normalizer import TermNormalizer
from boolir.query import (
    BooleanOperator,
    QueryProcessor,
    document_frequency_ordering,
    identity_ordering,
    optimized_query_processor,
    split_query,
)


@pytest.fixture
def processor(sample_dictionary, normalizer):
    return QueryProcessor(sample_dictionary, normalizer)


@pytest.fixture
def optimized(sample_dictionary, normalizer):
    return optimized_query_processor(sample_dictionary, normalizer)


def test_and_query(processor):
    assert processor.process_conjunctive_query(["cat", "mat"]).as_pairs() == [(1, 2)]


def test_or_query(processor):
    result = processor.process_disjunctive_query(["cat", "dog"])
    assert result.doc_ids() == [1, 2, 3]
    assert result.as_pairs() == [(1, 1), (2, 2), (3, 1)]


def test_query_terms_are_normalized(processor):
    assert processor.process_term("Cats").doc_ids() == [1, 2]
    assert processor.process_term("RUNNING").doc_ids() == [2]
    assert processor.process_term("the").doc_ids() == []


def test_absent_term_gives_empty_list(processor):
    assert processor.process_term("elephant").as_pairs() == []
    assert processor.process_disjunctive_query(["elephant"]).as_pairs() == []


def test_absent_terms_are_dropped_from_and(processor):
    assert processor.process_conjunctive_query(["cat", "elephant", "mat"]).doc_ids() == [1]


def test_stop_words_are_dropped_from_and(processor):
    assert processor.process_conjunctive_query(["the", "dog"]).doc_ids() == [2, 3]


def test_empty_queries(processor, optimized):
    for p in (processor, optimized):
        assert p.process_conjunctive_query([]).as_pairs() == []
        assert p.process_disjunctive_query([]).as_pairs() == []
        assert p.process_conjunctive_query(["the", "on"]).as_pairs() == []


def test_disjoint_and_is_empty(processor):
    assert processor.process_conjunctive_query(["mat", "ran"]).as_pairs() == []


def test_results_do_not_alias_dictionary(processor, sample_dictionary):
    result = processor.process_conjunctive_query(["cat"])
    result.add(99)
    assert sample_dictionary.get_posting_list("cat").doc_ids() == [1, 2]
    result = processor.process_term("cat")
    result.add(98)
    assert sample_dictionary.get_posting_list("cat").doc_ids() == [1, 2]


def test_optimized_matches_unoptimized_for_every_order():
    d = Dictionary()
    for doc_id, words in enumerate(
        ["a b c d", "a b c", "a b", "a", "a c d", "b c d", "a b c d", "d"], start=1
    ):
        for word in words.split():
            d.add_posting(word, doc_id)
    plain = QueryProcessor(d)
    fast = optimized_query_processor(d)
    for n in (2, 3, 4):
        for terms in itertools.permutations("abcd", n):
            expected = plain.process_conjunctive_query(terms)
            assert fast.process_conjunctive_query(terms) == expected
            assert plain.process_conjunctive_query(sorted(terms)) == expected


def test_frequency_ordering_sorts_by_document_frequency(sample_dictionary):
    terms = [sample_dictionary.get_term(t) for t in ["dog", "mat", "cat", "ran"]]
    ordered = document_frequency_ordering(terms)
    assert [t.text for t in ordered] == ["mat", "ran", "dog", "cat"]
    assert identity_ordering(terms) == terms


def test_optimized_merges_rarest_first(sample_dictionary, normalizer):
    seen = []

    def recording(terms):
        ordered = document_frequency_ordering(terms)
        seen.extend(t.text for t in ordered)
        return ordered

    p = QueryProcessor(sample_dictionary, normalizer, ordering=recording)
    p.process_conjunctive_query(["cat", "dog", "mat"])
    assert seen == ["mat", "cat", "dog"]


def test_process_query_dispatch(processor):
    assert processor.process_query(["cat", "mat"], "and").doc_ids() == [1]
    assert processor.process_query(["cat", "mat"], BooleanOperator.OR).doc_ids() == [1, 2]
    with pytest.raises(ValueError):
        processor.process_query(["cat"], "xor")


def test_default_normalizer_does_not_stem(sample_dictionary):
    p = QueryProcessor(sample_dictionary)
    assert p.process_term("cats").as_pairs() == []
    assert p.process_term("cat").doc_ids() == [1, 2]


def test_split_query():
    assert split_query("  cat,  DOG\tmat ") == ["cat", "DOG", "mat"]
    assert split_query("") == []


def test_stemming_only_normalizer(sample_dictionary):
    p = QueryProcessor(sample_dictionary, TermNormalizer(use_stemming=True))
    assert p.process_term("dogs").doc_ids() == [2, 3]

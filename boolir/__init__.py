"""Boolean information retrieval package."""

from .posting import Posting, PostingList
from .dictionary import Dictionary, Term
from .documents import Document, load_documents_from_directory
from .indexer import Indexer, IndexingReport
from .normalizer import TermNormalizer
from .query import (
    BooleanOperator,
    QueryProcessor,
    document_frequency_ordering,
    identity_ordering,
    optimized_query_processor,
)
from .stemmer import PorterStemmer, stem_token, stem_tokens
from .stoplist import StopList
from .tokenizer import tokenize

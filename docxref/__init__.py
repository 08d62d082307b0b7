from .collect import collect_corpus, collect_ids
from .corpus import list_documents, read_document, write_document
from .rewrite import crossreference, link_ids, rewrite_corpus, rewrite_document

__version__ = "0.1.0"


import re
from typing import Iterable, List

from .corpus import read_document

# "." stops at line breaks, so each line holding `id="` yields one greedy capture
ID_PATTERN = re.compile(r'.*id="(.*)".*')


def collect_ids(contents: Iterable[str]) -> List[str]:
    """
    Collect the identifiers declared in raw document contents.

    Every content is scanned with the regex `.*id="(.*)".*`. The scan works on
    raw text and not on a parsed tree. Because both wildcards are greedy, a line
    containing several quoted attributes yields a single capture spanning from
    its last `id="` to its last quote, e.g. `<a id="x" role="y">` gives
    `x" role="y`. This is the behavior of the documentation tool this package
    replaces and is kept for output compatibility. Use
    :func:`docxref.tree.collect_declarations` for attribute-exact collection.

    Parameters
    ----------
    contents : Iterable[str]
        Raw text of the documents, in corpus order.

    Returns
    -------
    ids : List[str]
        The captured identifiers in document order then line order. Duplicates
        are kept.
    """
    ids = []
    for content in contents:
        ids.extend(ID_PATTERN.findall(content))
    return ids


def collect_corpus(paths: Iterable[str]) -> List[str]:
    """Read every document in `paths` and collect its identifiers."""
    return collect_ids(read_document(p) for p in paths)

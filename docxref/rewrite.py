import re
from typing import Iterable, List, Optional

from .collect import collect_corpus
from .corpus import (
    DEFAULT_DIR,
    DEFAULT_PATTERN,
    document_stem,
    list_documents,
    read_document,
    write_document,
)

# a mention must sit between two characters that are neither a quote nor a
# word character, which keeps attribute values like linkend="ID" untouched
BOUNDARY = r'[^"\w\d]'
LINK_TEMPLATE = r'\1<link linkend="\2">\2</link>\3'
CLOSE_RUN = re.compile(r"(</link>)+")
OPEN_RUN = re.compile(r"(<link[^>]*>)+")


def mention_pattern(ident: str) -> re.Pattern:
    return re.compile(
        "({b})({i})({b})".format(b=BOUNDARY, i=re.escape(ident)), flags=re.ASCII
    )


def collapse_links(content: str) -> str:
    """
    Collapse runs of consecutive link tags.

    A run of `</link>` becomes a single `</link>`, and a run of opening
    `<link ...>` tags is replaced by the last tag of the run. Linking an already
    linked mention a second time produces exactly such runs, so collapsing them
    brings the content back to its previous state.
    """
    content = CLOSE_RUN.sub(r"\1", content)
    return OPEN_RUN.sub(r"\1", content)


def link_ids(content: str, ids: Iterable[str], name: Optional[str] = None) -> str:
    """
    Wrap every mention of the identifiers in link markup.

    Identifiers are processed in the given order. For each of them, every
    occurrence bounded on both sides by a character that is not `"`, a word
    character or a digit is replaced with `<link linkend="ID">ID</link>`, then
    doubled link tags are collapsed with :func:`collapse_links`. Since the
    boundary characters are consumed by the match, an occurrence at the very
    start or end of `content` is never linked, and of two mentions separated by
    a single character only the first one is.

    When the text of one identifier contains another one, the result depends on
    which of the two comes first in `ids`. No disambiguation is attempted.

    Parameters
    ----------
    content : str
        Raw text of the document.
    ids : Iterable[str]
        Identifiers to link, usually the output of
        :func:`docxref.collect.collect_ids`.
    name : str, optional
        Filename stem of the document. The identifier equal to it is assumed to
        be declared by this document and is skipped, so a document never links
        to itself. By default `None`, in which case no identifier is skipped.

    Returns
    -------
    content : str
        The rewritten text.
    """
    for ident in ids:
        if not ident or ident == name:
            continue
        content = mention_pattern(ident).sub(LINK_TEMPLATE, content)
        content = collapse_links(content)
    return content


def rewrite_document(path: str, ids: List[str], dry_run=False) -> bool:
    """
    Link the identifiers of `ids` in the document at `path` and write it back.

    The file is truncated and rewritten whether or not the content changed,
    unless `dry_run` is `True`, in which case nothing is written. Returns whether
    the content changed.
    """
    content = read_document(path)
    linked = link_ids(content, ids, document_stem(path))
    if not dry_run:
        write_document(path, linked)
    return linked != content


def rewrite_corpus(paths: Iterable[str], ids: List[str], dry_run=False) -> List[str]:
    """
    Rewrite every document of `paths` with :func:`rewrite_document`.

    Documents are processed one after the other. Any I/O error aborts the run
    and leaves the documents processed so far rewritten. Returns the paths of
    the documents whose content changed.
    """
    changed = []
    for path in paths:
        print("linking {}".format(path))
        if rewrite_document(path, ids, dry_run=dry_run):
            changed.append(path)
    return changed


def crossreference(
    dpath: str = DEFAULT_DIR,
    pattern=DEFAULT_PATTERN,
    mode="legacy",
    dry_run=False,
) -> List[str]:
    """
    Cross-reference all the documents in a folder.

    Run the collection pass over every document matching `pattern` under
    `dpath`, and only once it is complete, run the rewrite pass over the same
    documents.

    Parameters
    ----------
    dpath : str, optional
        The folder containing the documents. By default `"xml"`.
    pattern : regexp, optional
        The regexp matching the filenames of the documents. By default
        `r"\\.xml$"`.
    mode : str, optional
        Either `"legacy"`, where identifiers are collected and linked with
        regex substitutions on raw text (see :func:`collect_ids` and
        :func:`link_ids`), or `"tree"`, where documents are parsed and links are
        inserted as elements (see :mod:`docxref.tree`). By default `"legacy"`.
    dry_run : bool, optional
        Whether to skip writing the documents back. By default `False`.

    Returns
    -------
    changed : List[str]
        Paths of the documents whose content changed (or would change when
        `dry_run` is `True`).

    Raises
    ------
    FileNotFoundError
        if `dpath` does not exist
    NotImplementedError
        if `mode` is not "legacy" or "tree"
    """
    if mode not in ("legacy", "tree"):
        raise NotImplementedError("mode {} not understood".format(mode))
    dlist = list_documents(dpath, pattern)
    print("cross-referencing {} documents in folder {}".format(len(dlist), dpath))
    if mode == "legacy":
        ids = collect_corpus(dlist)
        return rewrite_corpus(dlist, ids, dry_run=dry_run)
    from .tree import collect_declarations, rewrite_tree_corpus

    decls = collect_declarations(dlist)
    return rewrite_tree_corpus(dlist, decls, dry_run=dry_run)

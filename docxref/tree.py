"""
Cross-referencing on parsed documents.

Unlike :mod:`docxref.rewrite`, which substitutes raw text, the functions here
parse each document with lxml. Identifiers are taken from `id` attributes
verbatim and remembered together with the document declaring them, and links
are inserted as new elements into text that is not already part of a link. No
collapsing of doubled tags is needed, and running the rewrite twice leaves the
documents untouched.

Parsing is strict: a document that is not well-formed (several root elements,
an entity that is neither predefined nor declared in the DOCTYPE, ...) raises
:class:`lxml.etree.XMLSyntaxError` instead of being repaired, so nothing is
ever written back from a partial tree. Entity references are not expanded and
the DOCTYPE, internal subset included, is written back with the document.
"""

import re
import warnings
from typing import Dict, Iterable, List

from lxml import etree

from .corpus import read_document, write_document

PROLOG = re.compile(r"^\s*<\?xml[^>]*\?>\s*")
TRAILER = re.compile(r"\s*\Z")
CDATA_TEXT = re.compile(r"^<[^>]*>\s*<!\[CDATA\[")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        recover=False,
        resolve_entities=False,
        load_dtd=False,
        no_network=True,
        strip_cdata=False,
        remove_blank_text=False,
    )


def _parse(content: str) -> etree._Element:
    # lxml refuses str input carrying an encoding declaration
    return etree.fromstring(content.encode("utf-8"), _parser())


def _serialize(root: etree._Element, content: str) -> str:
    out = etree.tostring(root.getroottree(), encoding="unicode")
    # keep the original declaration and trailing whitespace byte for byte
    prolog = PROLOG.match(content)
    if prolog:
        out = prolog.group(0) + out.lstrip()
    return out.rstrip() + TRAILER.search(content).group(0)


def collect_declarations(paths: Iterable[str]) -> Dict[str, str]:
    """
    Collect the identifiers declared in the documents and where they come from.

    Parameters
    ----------
    paths : Iterable[str]
        Paths of the documents, in corpus order.

    Returns
    -------
    decls : Dict[str, str]
        Mapping from each identifier to the path of the document declaring it,
        in collection order. When several elements declare the same identifier
        the first one wins and a warning is issued for the others.

    Raises
    ------
    lxml.etree.XMLSyntaxError
        if a document is not well-formed
    """
    decls = dict()
    for path in paths:
        root = _parse(read_document(path))
        for el in root.iter(etree.Element):
            ident = el.get("id")
            if ident is None:
                continue
            if ident in decls:
                warnings.warn(
                    "identifier {} declared in {} already declared in {}".format(
                        ident, path, decls[ident]
                    )
                )
                continue
            decls[ident] = path
    return decls


def mention_pattern(idents: List[str]) -> re.Pattern:
    # longest first, so that "category" is preferred to "cat" at the same spot
    alts = "|".join(re.escape(i) for i in sorted(idents, key=len, reverse=True))
    return re.compile(r'(?<![\w"])(?:{})(?![\w"])'.format(alts), flags=re.ASCII)


def _in_link(el: etree._Element) -> bool:
    return el.tag == "link" or any(a.tag == "link" for a in el.iterancestors())


def _split(text, pattern):
    """Split `text` into the text before the first mention and (mention, text after) pairs."""
    if not text:
        return None
    matches = list(pattern.finditer(text))
    if not matches:
        return None
    parts = []
    for m, nxt in zip(matches, matches[1:] + [None]):
        parts.append((m.group(0), text[m.end() : nxt.start() if nxt else len(text)]))
    return text[: matches[0].start()], parts


def _make_link(ident, tail):
    link = etree.Element("link", linkend=ident)
    link.text = ident
    link.tail = tail
    return link


def link_tree(content: str, decls: Dict[str, str], path: str) -> str:
    """
    Insert link elements around the mentions of identifiers in a document.

    Only identifiers declared by a document other than `path` are linked. Text
    of comments, processing instructions, existing `<link>` elements and
    element text held in a CDATA section is left alone, and so are entity
    references. Returns `content` untouched if nothing was linked, otherwise
    the serialized document with its original XML declaration and trailing
    whitespace.

    Raises
    ------
    lxml.etree.XMLSyntaxError
        if the document is not well-formed
    """
    idents = [i for i, p in decls.items() if i and p != path]
    if not idents:
        return content
    pattern = mention_pattern(idents)
    root = _parse(content)
    has_cdata = "<![CDATA[" in content
    # snapshot the nodes first, the links inserted below must not be revisited
    nodes = list(root.iter())
    linked = False
    for node in nodes:
        if isinstance(node.tag, str) and not _in_link(node):
            if has_cdata and CDATA_TEXT.match(
                etree.tostring(node, with_tail=False, encoding="unicode")
            ):
                split = None
            else:
                split = _split(node.text, pattern)
            if split:
                node.text, parts = split
                for i, (ident, tail) in enumerate(parts):
                    node.insert(i, _make_link(ident, tail))
                linked = True
        parent = node.getparent()
        if parent is None or _in_link(parent):
            continue
        split = _split(node.tail, pattern)
        if split:
            node.tail, parts = split
            idx = parent.index(node)
            for i, (ident, tail) in enumerate(parts):
                parent.insert(idx + 1 + i, _make_link(ident, tail))
            linked = True
    if not linked:
        return content
    return _serialize(root, content)


def rewrite_tree_corpus(
    paths: Iterable[str], decls: Dict[str, str], dry_run=False
) -> List[str]:
    """Tree-mode counterpart of :func:`docxref.rewrite.rewrite_corpus`."""
    changed = []
    for path in paths:
        print("linking {}".format(path))
        content = read_document(path)
        linked = link_tree(content, decls, path)
        if linked != content:
            changed.append(path)
            if not dry_run:
                write_document(path, linked)
    return changed

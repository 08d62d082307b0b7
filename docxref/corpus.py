import os
import re
import warnings
from typing import List

from natsort import natsorted

DEFAULT_DIR = "xml"
DEFAULT_PATTERN = r"\.xml$"


def list_documents(dpath: str = DEFAULT_DIR, pattern=DEFAULT_PATTERN) -> List[str]:
    """
    List the documents of a folder that should be cross-referenced.

    Only the top level of `dpath` is searched. The file names are matched
    against the regex `pattern` and the result is sorted with
    :func:`natsort.natsorted`, so that the collection order of identifiers is
    deterministic across platforms.

    Parameters
    ----------
    dpath : str, optional
        The folder containing the documents. By default `"xml"`, relative to the
        current working directory.
    pattern : regexp, optional
        The regexp matching the filenames of the documents. By default
        `r"\\.xml$"`.

    Returns
    -------
    dlist : List[str]
        Paths of the matched documents, each one being `dpath` joined with the
        file name.

    Raises
    ------
    FileNotFoundError
        if `dpath` is not an existing folder
    """
    dpath = os.path.normpath(dpath)
    if not os.path.isdir(dpath):
        raise FileNotFoundError("folder {} does not exist".format(dpath))
    dlist = natsorted(
        [
            os.path.join(dpath, d)
            for d in os.listdir(dpath)
            if re.search(pattern, d) and os.path.isfile(os.path.join(dpath, d))
        ]
    )
    if not dlist:
        warnings.warn(
            "No document with pattern {} found in the specified folder {}".format(
                pattern, dpath
            )
        )
    return dlist


def document_stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def read_document(path: str) -> str:
    # newline="" keeps "\r\n" intact so that unchanged documents stay byte-identical
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: str, content: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

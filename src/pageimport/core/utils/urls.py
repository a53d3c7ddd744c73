"""Helpers for turning src/href attribute values into plain filenames"""

import posixpath
import re
from urllib.parse import unquote


QUERY_RE = re.compile(r'\?.*$')


def filename_from_ref(ref: str) -> str:
    """URL-decode ref and reduce it to its basename with any query string removed.

    '../../images/original/photo.jpeg%3Fv=4613' -> 'photo.jpeg'
    """
    decoded = unquote(ref)
    return QUERY_RE.sub('', posixpath.basename(decoded))

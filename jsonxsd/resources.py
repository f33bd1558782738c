#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Loading of schema sources from local files."""
import codecs
import io
import logging
import os
import re
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit, unquote
from urllib.request import url2pathname
from xml.etree.ElementTree import Element, iterparse

from jsonxsd.exceptions import SchemaReadError, SchemaSyntaxError
from jsonxsd.translation import gettext as _
from jsonxsd.utils.qnames import get_namespace

logger = logging.getLogger('jsonxsd')

NsmapType = dict[str, str]

_XML_DECLARATION = re.compile(r'^(\s*<\?xml\b[^>]*?\bencoding\s*=\s*)(["\'])([^"\']*)\2')
_DECLARED_ENCODING = re.compile(
    rb'^\s*<\?xml\b[^>]*?\bencoding\s*=\s*["\']([A-Za-z][A-Za-z0-9._\-]*)["\']'
)

_BOMS = (
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)


def normalize_location(location: Union[str, Path], base_dir: Optional[str] = None) -> str:
    """
    Returns the absolute path of a schema location. Relative locations are
    resolved against *base_dir*, or the current working directory.
    """
    if isinstance(location, str) and '://' in location:
        parts = urlsplit(location)
        if parts.scheme != 'file':
            msg = _("can't load {!r}: only local files are supported")
            raise SchemaReadError(msg.format(location))
        location = url2pathname(unquote(parts.path))

    path = Path(location).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir).joinpath(path)
    return str(path.resolve())


def detect_encoding(data: bytes) -> str:
    """Detects the encoding of raw XML data from BOM or from the XML declaration."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding

    match = _DECLARED_ENCODING.match(data)
    if match is None:
        return 'utf-8'
    return match.group(1).decode('ascii')


def decode_xml(data: bytes, location: str = '') -> str:
    """
    Decodes raw XML data using its detected encoding. The encoding of the
    XML declaration is rewritten to UTF-8, so the decoded text can be parsed
    regardless of the original encoding.
    """
    encoding = detect_encoding(data)
    try:
        text = data.decode(encoding)
    except LookupError as err:
        msg = _("unknown encoding {!r} declared by {!r}")
        raise SchemaReadError(msg.format(encoding, location)) from err
    except UnicodeDecodeError as err:
        msg = _("can't decode {!r} using encoding {!r}: {}")
        raise SchemaReadError(msg.format(location, encoding, err)) from err

    return _XML_DECLARATION.sub(r'\1\2UTF-8\2', text, count=1)


class SchemaResource:
    """
    A schema source document, loaded from a local file and parsed into an
    ElementTree structure. The in-scope namespace map of each element is
    kept for resolving prefixed names in attribute values.

    :param location: a file path or a file URL.
    :param base_dir: the directory for resolving a relative location.
    """
    def __init__(self, location: Union[str, Path], base_dir: Optional[str] = None) -> None:
        self.path = normalize_location(location, base_dir)
        self._nsmaps: dict[Element, NsmapType] = {}

        logger.debug("Load schema source %r", self.path)
        try:
            data = Path(self.path).read_bytes()
        except OSError as err:
            msg = _("can't read schema source {!r}: {}")
            raise SchemaReadError(msg.format(self.path, err.strerror or err)) from err

        self.text = decode_xml(data, self.path)
        self.root = self._parse(self.text)

    def __repr__(self) -> str:
        return '%s(%r)' % (self.__class__.__name__, self.path)

    @property
    def base_dir(self) -> str:
        return os.path.dirname(self.path)

    @property
    def namespace(self) -> str:
        """The namespace of the root element."""
        return get_namespace(self.root.tag)

    def get_namespaces(self, elem: Optional[Element] = None) -> NsmapType:
        """Returns the namespace map in scope for an element, for default the root."""
        return self._nsmaps.get(self.root if elem is None else elem, {})

    def _parse(self, text: str) -> Element:
        root: Optional[Element] = None
        start_ns: list[tuple[str, str]] = []
        nsmap_stack: list[NsmapType] = [{}]

        try:
            for event, node in iterparse(io.StringIO(text), ('start-ns', 'start', 'end')):
                if event == 'start':
                    if root is None:
                        root = node
                    if start_ns:
                        nsmap_stack.append({**nsmap_stack[-1], **dict(start_ns)})
                        start_ns = []
                    else:
                        nsmap_stack.append(nsmap_stack[-1])
                    self._nsmaps[node] = nsmap_stack[-1]
                elif event == 'start-ns':
                    start_ns.append(node)
                else:
                    nsmap_stack.pop()
        except SyntaxError as err:
            msg = _("schema source {!r} is not well-formed XML: {}")
            raise SchemaSyntaxError(msg.format(self.path, err)) from err

        if root is None:  # pragma: no cover
            raise SchemaSyntaxError(_("schema source {!r} is empty").format(self.path))
        return root

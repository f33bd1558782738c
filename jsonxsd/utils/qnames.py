#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Helper functions for QNames and namespaces."""
from collections.abc import Mapping
from typing import Optional

from jsonxsd.exceptions import JsonXsdTypeError
from jsonxsd.names import XSD_NAMESPACE, XSD_PREFIX, XSD_BUILTIN_TYPES


def get_namespace(qname: str) -> str:
    """
    Returns the namespace URI of an extended QName, or the empty string
    for local names and prefixed names.
    """
    try:
        if qname[0] != '{':
            return ''
        namespace, _ = qname[1:].split('}')
    except (IndexError, ValueError):
        return ''
    except TypeError:
        raise JsonXsdTypeError("the argument must be a string-like object")
    else:
        return namespace


def local_name(qname: str) -> str:
    """
    Return the local part of an extended QName or a prefixed name.

    :param qname: an extended QName or a prefixed name or a local name.
    """
    try:
        if qname[0] == '{':
            return qname.rsplit('}', 1)[-1]
        return qname.rsplit(':', 1)[-1]
    except IndexError:
        return ''
    except (TypeError, AttributeError):
        raise JsonXsdTypeError("the argument 'qname' must be a string-like object")


def split_prefixed_name(name: str) -> tuple[str, str]:
    """Splits a name in a couple (prefix, local name). Unprefixed names have an empty prefix."""
    prefix, sep, local = name.partition(':')
    return (prefix, local) if sep else ('', name)


def get_namespace_prefixes(namespaces: Mapping[str, str], uri: Optional[str]) -> list[str]:
    """Returns the non-empty prefixes that a namespace map binds to an URI."""
    if not uri:
        return []
    return [pfx for pfx, ns in namespaces.items() if pfx and ns == uri]


def canonical_type_name(name: str, namespaces: Mapping[str, str]) -> str:
    """
    Normalizes a type reference of a schema document. A name in the XSD
    namespace takes the canonical prefix (eg. 'xsd:string' -> 'xs:string'),
    other names are returned unchanged.

    :param name: a prefixed or unprefixed type name.
    :param namespaces: the namespace map in scope for the reference.
    """
    prefix, local = split_prefixed_name(name.strip())
    if prefix:
        if namespaces.get(prefix) == XSD_NAMESPACE:
            return f'{XSD_PREFIX}:{local}'
        return f'{prefix}:{local}'
    elif namespaces.get('') == XSD_NAMESPACE and f'{XSD_PREFIX}:{local}' in XSD_BUILTIN_TYPES:
        return f'{XSD_PREFIX}:{local}'
    return local

#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Helpers for reading JSON objects and rendering JSON values as text."""
import json
from collections.abc import Iterable, Mapping
from typing import Any, Optional


def lookup_key(obj: Mapping[str, Any], name: str) -> Optional[str]:
    """
    Returns the key of a JSON object that matches a name, trying the exact
    name first and then a case-insensitive match. Returns `None` if no key
    matches.
    """
    if name in obj:
        return name

    folded = name.casefold()
    for key in obj:
        if isinstance(key, str) and key.casefold() == folded:
            return key
    return None


def folded_names(names: Iterable[str]) -> set[str]:
    return {x.casefold() for x in names}


def is_json_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_json_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def text_value(value: Any) -> str:
    """Renders a JSON value as XML text content."""
    if isinstance(value, str):
        return value
    elif value is None:
        return ''
    elif isinstance(value, bool):
        return 'true' if value else 'false'
    elif isinstance(value, (int, float)):
        return str(value)
    elif isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    return str(value)

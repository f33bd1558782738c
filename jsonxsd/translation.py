#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Translation of the messages of mapping errors and validation issues."""
import gettext as _gettext
from pathlib import Path
from typing import Iterable, Optional, Union

__all__ = ['activate', 'deactivate', 'is_active', 'gettext', 'ngettext']

DOMAIN = 'jsonxsd'

_translation: Optional[_gettext.NullTranslations] = None


def activate(localedir: Union[str, Path],
             languages: Optional[Iterable[str]] = None,
             fallback: bool = True) -> None:
    """
    Activate a message catalog for the jsonxsd domain.

    :param localedir: a string or Path-like object to the directory with the \
    message catalogs. The package doesn't ship any catalog.
    :param languages: list of language codes.
    :param fallback: if `True` (default) a missing catalog activates \
    the identity translation instead of raising an `OSError`.
    """
    global _translation

    _translation = _gettext.translation(
        domain=DOMAIN,
        localedir=str(localedir),
        languages=list(languages) if languages is not None else None,
        fallback=fallback,
    )


def deactivate() -> None:
    """Restore untranslated messages."""
    global _translation
    _translation = None


def is_active() -> bool:
    return _translation is not None


def gettext(message: str) -> str:
    if _translation is None:
        return message
    return _translation.gettext(message)


def ngettext(singular: str, plural: str, n: int) -> str:
    if _translation is None:
        return singular if n == 1 else plural
    return _translation.ngettext(singular, plural, n)

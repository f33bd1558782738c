#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Descriptors for validated conversion options."""
import codecs
import os
from collections.abc import Callable
from functools import partial
from typing import Any, cast, Generic, Optional, TypeVar, Union

from jsonxsd.exceptions import JsonXsdTypeError, JsonXsdValueError, JsonXsdAttributeError
from jsonxsd.translation import gettext as _
from jsonxsd.utils.logger import check_logging_level

T = TypeVar('T')


class Option(Generic[T]):
    """
    A descriptor for optional arguments. An option is validated when it's set,
    and it can't be changed nor deleted after.

    :param default: The default value for the optional argument.
    """
    __slots__ = ('_name', '_default')

    _validators: tuple[Callable[['Option[T]', Any], None], ...] = ()

    def __init__(self, *, default: T) -> None:
        self._default = default

    def __set_name__(self, owner: type[Any], name: str) -> None:
        self._name = f'_{name}'

    def __str__(self) -> str:
        return _('option {!r}').format(self._name[1:])

    def __get__(self, instance: Optional[Any], owner: type[Any]) -> T:
        if instance is None:
            return self._default
        return cast(T, getattr(instance, self._name, self._default))

    def __set__(self, instance: Any, value: Any) -> None:
        if hasattr(instance, self._name):
            raise JsonXsdAttributeError(_("can't change {}").format(self))
        setattr(instance, self._name, self.validated_value(value))

    def __delete__(self, instance: Any) -> None:
        raise JsonXsdAttributeError(_("can't delete {}").format(self))

    def validated_value(self, value: Any) -> T:
        for validator in self._validators:
            validator(self, value)
        return cast(T, value)


###
# Validation helpers for options

def validate_type(option: Option[Any], value: Any,
                  types: Union[type[Any], tuple[type[Any], ...]],
                  none: bool = False) -> None:
    if none and value is None or isinstance(value, types):
        return None

    if none:
        msg = _("invalid type {!r} for {}, must be None or a {!r}")
    else:
        msg = _("invalid type {!r} for {}, must be a {!r}")
    raise JsonXsdTypeError(msg.format(type(value), option, types))


def validate_not_empty(option: Option[Any], value: Any) -> None:
    if isinstance(value, str) and not value.strip():
        raise JsonXsdValueError(_("{} can't be an empty string").format(option))


def validate_encoding(option: Option[Any], value: Any) -> None:
    try:
        codecs.lookup(value)
    except LookupError:
        msg = _("invalid value {!r} for {}: unknown encoding")
        raise JsonXsdValueError(msg.format(value, option)) from None


def validate_loglevel(option: Option[Any], value: Any) -> None:
    if value is not None:
        check_logging_level(value)


bool_validator = partial(validate_type, types=bool)
str_validator = partial(validate_type, types=str)
none_str_validator = partial(validate_type, types=str, none=True)


class BooleanOption(Option[bool]):
    _validators = (bool_validator,)


class StringOption(Option[str]):
    _validators = (str_validator,)


class NonEmptyStringOption(Option[str]):
    _validators = (str_validator, validate_not_empty)


class OptionalStringOption(Option[Optional[str]]):
    _validators = (none_str_validator, validate_not_empty)


class EncodingOption(Option[str]):
    _validators = (str_validator, validate_encoding)


class LogLevelOption(Option[Union[None, str, int]]):
    _validators = (validate_loglevel,)


class PathOption(Option[Optional[str]]):
    def validated_value(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        elif not isinstance(value, (str, os.PathLike)):
            msg = _("invalid type {!r} for {}, must be None or a path")
            raise JsonXsdTypeError(msg.format(type(value), self))
        return os.fspath(value)

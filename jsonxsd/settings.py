#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Package settings for JSON to XML conversions."""
import dataclasses as dc
from typing import Any

from jsonxsd.arguments import BooleanOption, NonEmptyStringOption, \
    OptionalStringOption, EncodingOption, LogLevelOption, PathOption
from jsonxsd.exceptions import JsonXsdTypeError
from jsonxsd.translation import gettext as _


@dc.dataclass
class ConverterSettings:
    """Settings of a JSON to XML conversion."""

    pretty_print: BooleanOption = BooleanOption(default=False)
    """Indent the XML output, two spaces for each level. Default is `False`."""

    xml_declaration: BooleanOption = BooleanOption(default=True)
    """Write the XML declaration before the root element. Default is `True`."""

    encoding: EncodingOption = EncodingOption(default='UTF-8')
    """The encoding name written into the XML declaration."""

    attr_prefix: NonEmptyStringOption = NonEmptyStringOption(default='@')
    """The prefix of JSON keys that are mapped to XML attributes."""

    text_key: NonEmptyStringOption = NonEmptyStringOption(default='#text')
    """The JSON key that is mapped to the text content of an element."""

    strict: BooleanOption = BooleanOption(default=False)
    """
    Validate the JSON value against the schema before building the XML,
    raising a single error with all the issues found.
    """

    root_element: OptionalStringOption = OptionalStringOption(default=None)
    """An explicit name for the root element, overriding the schema's root."""

    base_dir: PathOption = PathOption(default=None)
    """The directory used for resolving a relative schema path."""

    loglevel: LogLevelOption = LogLevelOption(default=None)

    @classmethod
    def get_settings(cls, **kwargs: Any) -> 'ConverterSettings':
        settings = kwargs.pop('settings', _DEFAULT_CONVERTER_SETTINGS)
        if not isinstance(settings, ConverterSettings):
            msg = _("expected a ConverterSettings instance for 'settings', got {!r}")
            raise JsonXsdTypeError(msg.format(settings))
        return dc.replace(settings, **kwargs)

    @classmethod
    def update_defaults(cls, **kwargs: Any) -> None:
        global _DEFAULT_CONVERTER_SETTINGS
        _DEFAULT_CONVERTER_SETTINGS = ConverterSettings.get_settings(**kwargs)

    @classmethod
    def reset_defaults(cls) -> None:
        global _DEFAULT_CONVERTER_SETTINGS
        _DEFAULT_CONVERTER_SETTINGS = ConverterSettings()


# Default package settings
_DEFAULT_CONVERTER_SETTINGS = ConverterSettings()

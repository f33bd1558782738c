#
# Copyright (c), 2016-2025, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
"""Command Line Interface"""
import sys
import os
import argparse
import json
import logging
import pathlib

from jsonxsd.documents import from_json, iter_issues
from jsonxsd.exceptions import JsonXsdException, JsonXsdValueError, SchemaValidationError
from jsonxsd.parser import parse_schema
from jsonxsd.translation import ngettext


PROGRAM_NAME = os.path.basename(sys.argv[0])


def get_loglevel(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.ERROR
    elif verbosity == 1:
        return logging.WARNING
    elif verbosity == 2:
        return logging.INFO
    else:
        return logging.DEBUG


def json2xml() -> None:
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=True,
                                     description="encode a set of JSON files to XML.")
    parser.usage = "%(prog)s [OPTION]... [FILE]...\n" \
                   "Try '%(prog)s --help' for more information."

    parser.add_argument('-v', dest='verbosity', action='count', default=0,
                        help="increase output verbosity.")
    parser.add_argument('--schema', type=str, metavar='PATH', required=True,
                        help="path to an XSD schema or to a WSDL document.")
    parser.add_argument('--root', type=str, metavar='NAME', default=None,
                        help="name of the root element, overrides the schema's root.")
    parser.add_argument('--strict', action='store_true', default=False,
                        help="validate JSON data against the schema before the conversion.")
    parser.add_argument('--pretty', action='store_true', default=False,
                        help="indent the XML output.")
    parser.add_argument('--no-declaration', dest='xml_declaration',
                        action='store_false', default=True,
                        help="don't write the XML declaration.")
    parser.add_argument('--encoding', type=str, default='UTF-8',
                        help="encoding of the XML output (default is UTF-8).")
    parser.add_argument('--attr-prefix', type=str, default='@',
                        help="prefix of the JSON keys mapped to attributes (default is '@').")
    parser.add_argument('--text-key', type=str, default='#text',
                        help="JSON key mapped to the text content (default is '#text').")
    parser.add_argument('-o', '--output', type=str, default='.',
                        help="where to write the encoded XML files, current dir by default.")
    parser.add_argument('-f', '--force', action="store_true", default=False,
                        help="do not prompt before overwriting")
    parser.add_argument('files', metavar='[JSON_FILE ...]', nargs='+',
                        help="JSON files to be encoded to XML.")

    args = parser.parse_args()

    loglevel = get_loglevel(args.verbosity)
    schema = parse_schema(args.schema, loglevel=loglevel)

    base_path = pathlib.Path(args.output)
    if not base_path.exists():
        base_path.mkdir()
    elif not base_path.is_dir():
        raise JsonXsdValueError(f"{str(base_path)!r} is not a directory")

    tot_errors = 0
    for json_path in map(pathlib.Path, args.files):
        xml_path = base_path.joinpath(json_path.name).with_suffix('.xml')
        if xml_path.exists() and not args.force:
            print(f"skip {str(xml_path)}: the destination file exists!")
            continue

        with open(str(json_path)) as fp:
            try:
                xml_text = from_json(
                    source=fp,
                    schema=schema,
                    root_element=args.root,
                    strict=args.strict,
                    pretty_print=args.pretty,
                    xml_declaration=args.xml_declaration,
                    encoding=args.encoding,
                    attr_prefix=args.attr_prefix,
                    text_key=args.text_key,
                    loglevel=loglevel,
                )
            except SchemaValidationError as err:
                tot_errors += 1
                print("error with {}: {}".format(str(json_path), ngettext(
                    "{} validation issue", "{} validation issues", len(err.issues)
                ).format(len(err.issues))))
                if args.verbosity > 0:
                    for issue in err.issues:
                        print(f"  {issue}")
                continue
            except (JsonXsdException, json.JSONDecodeError) as err:
                tot_errors += 1
                print(f"error with {str(json_path)}: {str(err)}")
                continue

        with open(str(xml_path), 'w', encoding=args.encoding) as fp:
            fp.write(xml_text)
        print(f"{str(json_path)} converted to {str(xml_path)}")

    sys.exit(tot_errors)


def validate() -> None:
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME, add_help=True,
                                     description="validate a set of JSON files.")
    parser.usage = "%(prog)s [OPTION]... [FILE]...\n" \
                   "Try '%(prog)s --help' for more information."
    parser.add_argument('-v', dest='verbosity', action='count', default=0,
                        help="increase output verbosity.")
    parser.add_argument('--schema', type=str, metavar='PATH', required=True,
                        help="path to an XSD schema or to a WSDL document.")
    parser.add_argument('--root', type=str, metavar='NAME', default=None,
                        help="name of the root element, overrides the schema's root.")
    parser.add_argument('--attr-prefix', type=str, default='@',
                        help="prefix of the JSON keys mapped to attributes (default is '@').")
    parser.add_argument('--text-key', type=str, default='#text',
                        help="JSON key mapped to the text content (default is '#text').")
    parser.add_argument('files', metavar='[JSON_FILE ...]', nargs='+',
                        help="JSON files to be validated.")

    args = parser.parse_args()

    loglevel = get_loglevel(args.verbosity)
    tot_errors = 0
    try:
        schema = parse_schema(args.schema, loglevel=loglevel)
    except JsonXsdException as err:
        sys.stderr.write(f"{err}\n")
        sys.exit(1)

    for filepath in args.files:
        try:
            with open(filepath) as fp:
                obj = json.load(fp)
            issues = list(iter_issues(obj, schema, root_element=args.root,
                                      attr_prefix=args.attr_prefix,
                                      text_key=args.text_key))
        except (JsonXsdException, OSError, json.JSONDecodeError) as err:
            tot_errors += 1
            sys.stderr.write(f"{err}\n")
            continue
        else:
            if not issues:
                sys.stdout.write(f"{filepath} is valid\n")
            else:
                tot_errors += len(issues)
                sys.stderr.write(f"{filepath} is not valid\n")
                if args.verbosity > 0:
                    for issue in issues:
                        sys.stderr.write(f"{issue}\n")

    sys.exit(tot_errors)

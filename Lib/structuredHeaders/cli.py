# Copyright 2020 Google Inc. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import json
import logging
import sys

import structuredHeaders


logger = logging.getLogger(__name__)

description = """\n
Parses an HTTP structured field value and prints it in canonical form.
If several VALUEs are given, they are treated as repeated lines of the
same field and combined before parsing.
"""


def parse_options(args):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--version",
        action="version",
        version="structuredHeaders %s" % (structuredHeaders.__version__),
    )
    parser.add_argument(
        "field_type",
        metavar="TYPE",
        choices=["item", "list", "dictionary"],
        help="Type of the field: item, list or dictionary.",
    )
    parser.add_argument(
        "values", metavar="VALUE", nargs="+", help="Field value to parse."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed value as JSON instead of re-serializing it.",
    )
    parser.add_argument(
        "--lenient-padding",
        action="store_true",
        help="Accept byte sequences without their trailing '=' padding.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print debug messages."
    )
    return parser.parse_args(args)


def main(args=None):
    opt = parse_options(args)
    logging.basicConfig(
        level=logging.DEBUG if opt.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s: %(message)s",
    )
    try:
        value = structuredHeaders.loads(
            opt.values, opt.field_type, strict_padding=not opt.lenient_padding
        )
    except structuredHeaders.ParseError as e:
        logger.error("Invalid %s field: %s", opt.field_type, e)
        return 1
    if opt.json:
        print(json.dumps(structuredHeaders.to_json(value)))
    else:
        print(structuredHeaders.dumps(value))
    return 0


def _main_entry_point():
    sys.exit(main())

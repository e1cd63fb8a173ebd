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

import base64
from collections.abc import Mapping
from decimal import Decimal

from structuredHeaders.types import ByteSequence, InnerList, Item, Token


def join_field_lines(lines):
    """Combine the values of a field that occurred more than once into one
    field value, the way HTTP does: joined with ", ".

    Lines may be str or bytes. Return bytes.
    """
    encoded = []
    for line in lines:
        if isinstance(line, str):
            line = line.encode("utf-8")
        encoded.append(bytes(line))
    return b", ".join(encoded)


def bare_item_to_json(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Token):
        return {"__type": "token", "value": str(value)}
    if isinstance(value, str):
        return value
    if isinstance(value, ByteSequence):
        return {
            "__type": "binary",
            "value": base64.b32encode(value.value).decode("ascii"),
        }
    raise TypeError("not a bare item: %r" % (value,))


def parameters_to_json(parameters):
    return [[key, bare_item_to_json(value)] for key, value in parameters.items()]


def member_to_json(member):
    if isinstance(member, InnerList):
        return [[member_to_json(item) for item in member], parameters_to_json(member.parameters)]
    if isinstance(member, Item):
        return [bare_item_to_json(member.bare_item), parameters_to_json(member.parameters)]
    raise TypeError("not an Item or InnerList: %r" % (member,))


def to_json(value):
    """Convert a parsed field into plain JSON-compatible data.

    Items become [bare_item, parameters] and inner lists
    [[item, ...], parameters]; parameters and dictionaries become lists of
    [key, value] pairs so that their order survives. Tokens and byte
    sequences become {"__type": "token"|"binary", "value": ...}, with the
    payload of a byte sequence given in base32. Decimals become floats.
    """
    if isinstance(value, (Item, InnerList)):
        return member_to_json(value)
    if isinstance(value, Mapping):
        return [[key, member_to_json(member)] for key, member in value.items()]
    if isinstance(value, (list, tuple)):
        return [member_to_json(member) for member in value]
    raise TypeError("cannot convert %r" % (value,))

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
import logging
from collections.abc import Mapping
from decimal import ROUND_DOWN, ROUND_HALF_EVEN, Decimal
from io import StringIO

from structuredHeaders.errors import SerializationError
from structuredHeaders.types import (
    MAX_DECIMAL_INTEGER_DIGITS,
    MAX_INTEGER,
    MIN_INTEGER,
    ByteSequence,
    InnerList,
    Item,
    Token,
    is_bare_item,
    is_key,
    is_token,
    is_visible_ascii,
)


logger = logging.getLogger(__name__)

__all__ = ["Writer", "dump", "dumps", "dumps_item", "dumps_list", "dumps_dictionary"]

"""
    Usage

    >> fp = open('Path/to/File.txt', 'w')
    >> writer = structuredHeaders.writer.Writer(fp)
    >> writer.write(value)
"""

DECIMAL_QUANTUM = Decimal("0.001")
MAX_DECIMAL_INTEGER_PART = 10**MAX_DECIMAL_INTEGER_DIGITS


class Writer:
    """Serializes structured field values to a text file object."""

    def __init__(self, fp):
        self.file = fp

    def write(self, value):
        """Write a Dictionary (any Mapping), a List (list or tuple) or an
        Item. Plain bare items and bytes are written as Items without
        parameters."""
        if isinstance(value, Mapping):
            self.writeDictionary(value)
        elif isinstance(value, (list, tuple)):
            self.writeList(value)
        else:
            self.writeItem(value)

    def writeItem(self, item):
        item = _as_item(item)
        self.writeBareItem(item.bare_item)
        self.writeParameters(item.parameters)

    def writeList(self, members):
        for idx, member in enumerate(members):
            if idx:
                self.file.write(", ")
            self.writeMember(member)

    def writeDictionary(self, members):
        for idx, (key, member) in enumerate(members.items()):
            if idx:
                self.file.write(", ")
            self.writeKey(key)
            member = _as_member(member)
            if isinstance(member, Item) and member.bare_item is True:
                self.writeParameters(member.parameters)
            else:
                self.file.write("=")
                self.writeMember(member)

    def writeMember(self, member):
        member = _as_member(member)
        if isinstance(member, InnerList):
            self.writeInnerList(member)
        else:
            self.writeItem(member)

    def writeInnerList(self, inner_list):
        self.file.write("(")
        for idx, item in enumerate(inner_list):
            if idx:
                self.file.write(" ")
            self.writeItem(item)
        self.file.write(")")
        self.writeParameters(inner_list.parameters)

    def writeParameters(self, parameters):
        for key, value in parameters.items():
            self.file.write(";")
            self.writeKey(key)
            if value is not True:
                self.file.write("=")
                self.writeBareItem(value)

    def writeKey(self, key):
        if not isinstance(key, str) or not is_key(key):
            raise SerializationError("invalid key %r" % (key,))
        self.file.write(key)

    def writeBareItem(self, value):
        if isinstance(value, bool):
            self.file.write("?1" if value else "?0")
        elif isinstance(value, int):
            self.writeInteger(value)
        elif isinstance(value, (Decimal, float)):
            self.writeDecimal(value)
        elif isinstance(value, Token):
            self.writeToken(value)
        elif isinstance(value, str):
            self.writeString(value)
        elif isinstance(value, ByteSequence):
            self.writeByteSequence(value.value)
        elif isinstance(value, (bytes, bytearray)):
            self.writeByteSequence(value)
        else:
            raise SerializationError("cannot serialize %r" % (value,))

    def writeInteger(self, value):
        if not MIN_INTEGER <= value <= MAX_INTEGER:
            raise SerializationError("integer %d is out of range" % value)
        self.file.write(str(value))

    def writeDecimal(self, value):
        if isinstance(value, float):
            value = Decimal(repr(value))
        if not value.is_finite():
            raise SerializationError("decimal %s is not finite" % value)
        # quantize() raises InvalidOperation for very large values
        if abs(value) >= MAX_DECIMAL_INTEGER_PART:
            raise SerializationError("decimal %s is out of range" % value)
        value = value.quantize(DECIMAL_QUANTUM, rounding=ROUND_HALF_EVEN)
        if abs(value).to_integral_value(rounding=ROUND_DOWN) >= MAX_DECIMAL_INTEGER_PART:
            raise SerializationError("decimal %s is out of range" % value)
        if value.is_zero():
            value = abs(value)
        text = "{:f}".format(value).rstrip("0")
        if text.endswith("."):
            text += "0"
        self.file.write(text)

    def writeString(self, value):
        chars = []
        for char in value:
            if not is_visible_ascii(ord(char)):
                raise SerializationError("invalid character %r in string" % char)
            if char in '"\\':
                chars.append("\\")
            chars.append(char)
        self.file.write('"%s"' % "".join(chars))

    def writeToken(self, value):
        if not is_token(value):
            raise SerializationError("invalid token %r" % str(value))
        self.file.write(value)

    def writeByteSequence(self, value):
        self.file.write(":%s:" % base64.b64encode(value).decode("ascii"))


def _as_item(value):
    if isinstance(value, Item):
        return value
    if isinstance(value, (bytes, bytearray)):
        return Item(ByteSequence(bytes(value)))
    if isinstance(value, float):
        return Item(Decimal(repr(value)))
    if is_bare_item(value):
        return Item(value)
    raise SerializationError("cannot serialize %r as an item" % (value,))


def _as_member(value):
    if isinstance(value, InnerList):
        return value
    if isinstance(value, (list, tuple)):
        return InnerList(_as_item(item) for item in value)
    return _as_item(value)


def dump(value, fp):
    """Write a structured field value to a (writable) file object."""
    logger.debug("Writing %s", type(value).__name__)
    Writer(fp).write(value)


def dumps(value):
    """Serialize a structured field value to a str."""
    string = StringIO()
    dump(value, string)
    return string.getvalue()


def _dumps_with(method, value):
    string = StringIO()
    method(Writer(string), value)
    return string.getvalue()


def dumps_item(item):
    return _dumps_with(Writer.writeItem, item)


def dumps_list(members):
    return _dumps_with(Writer.writeList, members)


def dumps_dictionary(members):
    return _dumps_with(Writer.writeDictionary, members)

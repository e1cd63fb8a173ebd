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

"""Python representations of structured field values.

A bare item is one of:

    int            Integer
    Decimal        Decimal (decimal.Decimal, exact)
    str            String
    Token          Token (a str subclass)
    ByteSequence   Byte Sequence
    bool           Boolean

An Item pairs a bare item with its parameters; an InnerList pairs a tuple of
Items with its own parameters. Parameters and dictionaries are OrderedMaps.
"""

import base64
from decimal import Decimal
from string import ascii_letters, ascii_lowercase, digits

from structuredHeaders.orderedMap import OrderedMap

__all__ = [
    "Token",
    "ByteSequence",
    "Item",
    "InnerList",
    "is_bare_item",
    "MAX_INTEGER",
    "MIN_INTEGER",
]

MAX_INTEGER = 999_999_999_999_999
MIN_INTEGER = -MAX_INTEGER

MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_INTEGER_DIGITS = 12
MAX_DECIMAL_FRACTION_DIGITS = 3

DIGITS = frozenset(digits.encode("ascii"))
ALPHA = frozenset(ascii_letters.encode("ascii"))
TCHAR = frozenset((ascii_letters + digits + "!#$%&'*+-.^_`|~").encode("ascii"))
TOKEN_START_CHARS = ALPHA | {ord("*")}
TOKEN_CHARS = TCHAR | {ord(":"), ord("/")}
KEY_START_CHARS = frozenset((ascii_lowercase + "*").encode("ascii"))
KEY_CHARS = frozenset((ascii_lowercase + digits + "_-.*").encode("ascii"))


def is_visible_ascii(c):
    return 0x20 <= c <= 0x7E


def is_token(s):
    """Return True if the str `s` matches the token grammar."""
    raw = s.encode("ascii", "replace")
    if not raw or raw[0] not in TOKEN_START_CHARS:
        return False
    return all(c in TOKEN_CHARS for c in raw)


def is_key(s):
    """Return True if the str `s` is a valid parameter or dictionary key."""
    raw = s.encode("ascii", "replace")
    if not raw or raw[0] not in KEY_START_CHARS:
        return False
    return all(c in KEY_CHARS for c in raw)


class Token(str):
    """A token bare item. Compares equal to the str with the same text, but
    is kept distinct from String by its type."""

    __slots__ = ()

    def __repr__(self):
        return "Token(%s)" % str.__repr__(self)


class ByteSequence:
    """A byte sequence bare item.

    Keeps the base64 text exactly as it appeared in the field (`encoded`)
    next to the decoded payload (`value`). Two byte sequences are equal when
    their payloads are equal, whatever their encoding looked like.
    """

    __slots__ = ("_encoded", "_value")

    def __init__(self, value=None, encoded=None):
        if value is None and encoded is None:
            value = b""
        if value is None:
            value = base64.b64decode(encoded, validate=True)
        elif encoded is None:
            encoded = base64.b64encode(value)
        self._value = bytes(value)
        self._encoded = bytes(encoded)

    @classmethod
    def from_base64(cls, encoded, strict_padding=True):
        """Decode the base64 text `encoded`. Raises binascii.Error if it is
        not valid; with strict_padding=False missing '=' padding is
        tolerated."""
        encoded = bytes(encoded)
        text = encoded
        if not strict_padding and b"=" not in text:
            text += b"=" * (-len(text) % 4)
        return cls(base64.b64decode(text, validate=True), encoded)

    @property
    def value(self):
        return self._value

    @property
    def encoded(self):
        return self._encoded

    def __eq__(self, other):
        if isinstance(other, ByteSequence):
            return self._value == other._value
        if isinstance(other, (bytes, bytearray)):
            return self._value == bytes(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __len__(self):
        return len(self._value)

    def __bytes__(self):
        return self._value

    def __repr__(self):
        return "ByteSequence(%r)" % self._value


def is_bare_item(value):
    return isinstance(value, (int, Decimal, str, ByteSequence))


def same_bare_item(a, b):
    """Compare two bare items, telling apart the variants that Python would
    otherwise consider equal (True and 1, Token and str, 1 and Decimal(1))."""
    return type(a) is type(b) and a == b


def same_parameters(a, b):
    if len(a) != len(b):
        return False
    for (key_a, value_a), (key_b, value_b) in zip(a.items(), b.items()):
        if key_a != key_b or not same_bare_item(value_a, value_b):
            return False
    return True


class Item:
    """A bare item with its parameters. Immutable."""

    __slots__ = ("_bare_item", "_parameters")

    def __init__(self, bare_item, parameters=None):
        if not is_bare_item(bare_item):
            raise TypeError("not a bare item: %r" % (bare_item,))
        self._bare_item = bare_item
        self._parameters = OrderedMap(parameters)

    @property
    def bare_item(self):
        return self._bare_item

    @property
    def parameters(self):
        return self._parameters

    def __eq__(self, other):
        if not isinstance(other, Item):
            return NotImplemented
        return same_bare_item(self._bare_item, other._bare_item) and same_parameters(
            self._parameters, other._parameters
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        if self._parameters:
            return "Item(%r, %r)" % (self._bare_item, self._parameters)
        return "Item(%r)" % (self._bare_item,)


class InnerList:
    """A parenthesized sequence of Items with its own parameters. Immutable.

    The parameters of the inner list are distinct from those of its members.
    """

    __slots__ = ("_items", "_parameters")

    def __init__(self, items=(), parameters=None):
        items = tuple(items)
        for item in items:
            if not isinstance(item, Item):
                raise TypeError("inner list members must be Items: %r" % (item,))
        self._items = items
        self._parameters = OrderedMap(parameters)

    @property
    def items(self):
        return self._items

    # The grammar calls the member sequence a "bare inner list".
    bare_inner_list = items

    @property
    def parameters(self):
        return self._parameters

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __eq__(self, other):
        if not isinstance(other, InnerList):
            return NotImplemented
        return self._items == other._items and same_parameters(
            self._parameters, other._parameters
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        if self._parameters:
            return "InnerList(%r, %r)" % (list(self._items), self._parameters)
        return "InnerList(%r)" % (list(self._items),)

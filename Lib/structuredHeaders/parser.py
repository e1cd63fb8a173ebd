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


import binascii
import logging
from decimal import Decimal

from structuredHeaders.errors import (
    InvalidBinary,
    InvalidBoolean,
    InvalidInnerList,
    InvalidKey,
    InvalidNumber,
    InvalidString,
    NumberTooLong,
    ParseError,
    TrailingGarbage,
    UnexpectedCharacter,
    UnexpectedEnd,
)
from structuredHeaders.orderedMap import OrderedMap
from structuredHeaders.types import (
    DIGITS,
    KEY_CHARS,
    KEY_START_CHARS,
    MAX_DECIMAL_FRACTION_DIGITS,
    MAX_DECIMAL_INTEGER_DIGITS,
    MAX_INTEGER_DIGITS,
    TOKEN_CHARS,
    TOKEN_START_CHARS,
    ByteSequence,
    InnerList,
    Item,
    Token,
)
from structuredHeaders.util import join_field_lines


logger = logging.getLogger(__name__)

__all__ = [
    "ByteCursor",
    "Parser",
    "loads",
    "loads_item",
    "loads_list",
    "loads_dictionary",
]

SP = ord(" ")
HTAB = ord("\t")
OWS = frozenset((SP, HTAB))
MINUS = ord("-")
DOT = ord(".")
DQUOTE = ord('"')
BACKSLASH = ord("\\")
COLON = ord(":")
QUESTION = ord("?")
SEMICOLON = ord(";")
EQUALS = ord("=")
COMMA = ord(",")
OPEN_PAREN = ord("(")
CLOSE_PAREN = ord(")")
ZERO = ord("0")
ONE = ord("1")

# Visible ASCII that can appear in a string without an escape.
STRING_CHARS = frozenset(range(0x20, 0x7F)) - {DQUOTE, BACKSLASH}
# Bytes that may directly follow a closing quote in any valid field. Anything
# else, with a further '"' later on, is taken for an unescaped quote.
STRING_FOLLOWERS = frozenset((SEMICOLON, COMMA, CLOSE_PAREN)) | OWS


class ByteCursor:
    """A forward-only position over an immutable view of the input octets.

    Slices handed out by consume_while() are memoryviews into the input; the
    parser copies what it keeps, so parse results never refer back to the
    caller's buffer.
    """

    __slots__ = ("_data", "_offset")

    def __init__(self, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = memoryview(data).cast("B")
        self._offset = 0

    @property
    def offset(self):
        return self._offset

    @property
    def at_end(self):
        return self._offset >= len(self._data)

    def peek(self):
        """Return the next byte without consuming it, or None at the end."""
        if self._offset >= len(self._data):
            return None
        return self._data[self._offset]

    def consume(self):
        """Return the next byte and advance past it, or None at the end."""
        if self._offset >= len(self._data):
            return None
        c = self._data[self._offset]
        self._offset += 1
        return c

    def consume_while(self, predicate):
        """Advance over the bytes for which `predicate` holds and return
        them as a memoryview slice."""
        data = self._data
        start = end = self._offset
        length = len(data)
        while end < length and predicate(data[end]):
            end += 1
        self._offset = end
        return data[start:end]

    def text_since(self, start):
        """Return the ASCII text consumed since offset `start`."""
        return self._data[start : self._offset].tobytes().decode("ascii")

    def skip_sp(self):
        self.consume_while(SP.__eq__)

    def skip_ows(self):
        self.consume_while(OWS.__contains__)

    def remaining_contains(self, byte):
        return byte in self._data[self._offset :]

    def remaining_is_only_ows(self):
        data = self._data
        return all(data[i] in OWS for i in range(self._offset, len(data)))


class Parser:
    """Parses one structured field value.

    A Parser wraps a single input; call exactly one of parse_item_field(),
    parse_list_field() or parse_dictionary_field() on it. With
    strict_padding=False, byte sequences whose base64 lacks its trailing
    '=' padding are accepted.
    """

    def __init__(self, data, strict_padding=True):
        self.cursor = ByteCursor(data)
        self.strict_padding = strict_padding

    # Top-level fields

    def parse_item_field(self):
        self.cursor.skip_sp()
        item = self._parse_item()
        self._finish()
        return item

    def parse_list_field(self):
        cursor = self.cursor
        cursor.skip_sp()
        members = []
        while not cursor.at_end:
            members.append(self._parse_item_or_inner_list())
            if self._end_of_member():
                break
        return members

    def parse_dictionary_field(self):
        cursor = self.cursor
        cursor.skip_sp()
        members = OrderedMap()
        while not cursor.at_end:
            key = self._parse_key()
            if cursor.peek() == EQUALS:
                cursor.consume()
                member = self._parse_item_or_inner_list()
            else:
                member = Item(True, self._parse_parameters())
            members[key] = member
            if self._end_of_member():
                break
        return members

    def _end_of_member(self):
        """Consume the separator after a list or dictionary member. Return
        True if the member was the last one."""
        cursor = self.cursor
        cursor.skip_ows()
        if cursor.at_end:
            return True
        offset = cursor.offset
        if cursor.consume() != COMMA:
            raise TrailingGarbage("expected ',' after member", offset)
        cursor.skip_ows()
        if cursor.at_end:
            raise UnexpectedEnd("expected a member after ','", cursor.offset)
        return False

    def _finish(self):
        cursor = self.cursor
        if not cursor.remaining_is_only_ows():
            cursor.skip_ows()
            raise TrailingGarbage(
                "unexpected %r after value" % chr(cursor.peek()), cursor.offset
            )

    # Items and inner lists

    def _parse_item_or_inner_list(self):
        if self.cursor.peek() == OPEN_PAREN:
            return self._parse_inner_list()
        return self._parse_item()

    def _parse_inner_list(self):
        cursor = self.cursor
        start = cursor.offset
        cursor.consume()
        items = []
        while True:
            cursor.skip_sp()
            c = cursor.peek()
            if c is None:
                raise InvalidInnerList("inner list is missing its ')'", start)
            if c == CLOSE_PAREN:
                cursor.consume()
                return InnerList(items, self._parse_parameters())
            items.append(self._parse_item())
            c = cursor.peek()
            if c is not None and c != SP and c != CLOSE_PAREN:
                raise InvalidInnerList(
                    "expected ' ' or ')' after inner list member", cursor.offset
                )

    def _parse_item(self):
        bare_item = self._parse_bare_item()
        return Item(bare_item, self._parse_parameters())

    def _parse_parameters(self):
        cursor = self.cursor
        parameters = OrderedMap()
        while cursor.peek() == SEMICOLON:
            cursor.consume()
            cursor.skip_sp()
            key = self._parse_key()
            value = True
            if cursor.peek() == EQUALS:
                cursor.consume()
                value = self._parse_bare_item()
            parameters[key] = value
        return parameters

    def _parse_key(self):
        cursor = self.cursor
        c = cursor.peek()
        if c is None:
            raise UnexpectedEnd("expected a key", cursor.offset)
        if c not in KEY_START_CHARS:
            raise InvalidKey("key cannot start with %r" % chr(c), cursor.offset)
        return cursor.consume_while(KEY_CHARS.__contains__).tobytes().decode("ascii")

    # Bare items

    def _parse_bare_item(self):
        cursor = self.cursor
        c = cursor.peek()
        if c is None:
            raise UnexpectedEnd("expected a bare item", cursor.offset)
        if c == MINUS or c in DIGITS:
            return self._parse_number()
        if c == DQUOTE:
            return self._parse_string()
        if c in TOKEN_START_CHARS:
            return self._parse_token()
        if c == COLON:
            return self._parse_byte_sequence()
        if c == QUESTION:
            return self._parse_boolean()
        raise UnexpectedCharacter("unexpected %r" % chr(c), cursor.offset)

    def _parse_number(self):
        cursor = self.cursor
        start = cursor.offset
        if cursor.peek() == MINUS:
            cursor.consume()
        integer_digits = len(cursor.consume_while(DIGITS.__contains__))
        if not integer_digits:
            raise InvalidNumber("expected a digit", cursor.offset)
        if cursor.peek() != DOT:
            if integer_digits > MAX_INTEGER_DIGITS:
                raise NumberTooLong("integer has too many digits", start)
            return int(cursor.text_since(start))

        if integer_digits > MAX_DECIMAL_INTEGER_DIGITS:
            raise NumberTooLong("decimal has too many integer digits", start)
        cursor.consume()
        fraction_digits = len(cursor.consume_while(DIGITS.__contains__))
        if not fraction_digits:
            raise InvalidNumber("decimal cannot end with '.'", cursor.offset)
        if fraction_digits > MAX_DECIMAL_FRACTION_DIGITS:
            raise InvalidNumber("decimal has too many fractional digits", start)
        return Decimal(cursor.text_since(start))

    def _parse_string(self):
        cursor = self.cursor
        start = cursor.offset
        cursor.consume()
        chars = bytearray()
        while True:
            chars += cursor.consume_while(STRING_CHARS.__contains__)
            offset = cursor.offset
            c = cursor.consume()
            if c == DQUOTE:
                c = cursor.peek()
                if (
                    c is not None
                    and c not in STRING_FOLLOWERS
                    and cursor.remaining_contains(DQUOTE)
                ):
                    raise InvalidString("unescaped '\"' in string", offset)
                return chars.decode("ascii")
            if c is None:
                raise InvalidString("string is missing its closing '\"'", start)
            if c != BACKSLASH:
                raise InvalidString("invalid character %r in string" % chr(c), offset)
            c = cursor.consume()
            if c != DQUOTE and c != BACKSLASH:
                raise InvalidString("invalid escape in string", offset)
            chars.append(c)

    def _parse_token(self):
        token = self.cursor.consume_while(TOKEN_CHARS.__contains__)
        return Token(token.tobytes().decode("ascii"))

    def _parse_byte_sequence(self):
        cursor = self.cursor
        start = cursor.offset
        cursor.consume()
        encoded = cursor.consume_while(COLON.__ne__)
        if cursor.consume() != COLON:
            raise InvalidBinary("byte sequence is missing its closing ':'", start)
        try:
            return ByteSequence.from_base64(encoded, strict_padding=self.strict_padding)
        except binascii.Error as e:
            raise InvalidBinary("invalid base64 in byte sequence", start) from e

    def _parse_boolean(self):
        cursor = self.cursor
        cursor.consume()
        offset = cursor.offset
        c = cursor.consume()
        if c == ONE:
            return True
        if c == ZERO:
            return False
        raise InvalidBoolean("boolean must be ?0 or ?1", offset)


_FIELD_PARSERS = {
    "item": Parser.parse_item_field,
    "list": Parser.parse_list_field,
    "dictionary": Parser.parse_dictionary_field,
}


def loads(data, field_type, strict_padding=True):
    """Parse a structured field value of the given type ("item", "list" or
    "dictionary").

    'data' is the field value as bytes or str. A list or tuple is taken to
    be the lines of a field that occurred more than once; they are combined
    before parsing.
    Raise a ParseError (a ValueError) if the value is not valid.
    """
    try:
        parse = _FIELD_PARSERS[field_type]
    except KeyError:
        raise ValueError("unknown field type %r" % (field_type,)) from None
    if isinstance(data, (list, tuple)):
        data = join_field_lines(data)
    logger.debug("Parsing %s field", field_type)
    try:
        return parse(Parser(data, strict_padding=strict_padding))
    except ParseError as e:
        logger.debug("Failed to parse %s field: %s", field_type, e)
        raise


def loads_item(data, strict_padding=True):
    """Parse an Item field. Return an Item."""
    return loads(data, "item", strict_padding=strict_padding)


def loads_list(data, strict_padding=True):
    """Parse a List field. Return a list of Items and InnerLists."""
    return loads(data, "list", strict_padding=strict_padding)


def loads_dictionary(data, strict_padding=True):
    """Parse a Dictionary field. Return an OrderedMap of keys to Items and
    InnerLists."""
    return loads(data, "dictionary", strict_padding=strict_padding)

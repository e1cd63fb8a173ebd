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

__all__ = [
    "StructuredHeaderError",
    "ParseError",
    "UnexpectedCharacter",
    "InvalidNumber",
    "NumberTooLong",
    "InvalidString",
    "InvalidKey",
    "InvalidInnerList",
    "InvalidBinary",
    "InvalidBoolean",
    "UnexpectedEnd",
    "TrailingGarbage",
    "SerializationError",
]


class StructuredHeaderError(ValueError):
    """Base class for all errors raised by structuredHeaders."""


class ParseError(StructuredHeaderError):
    """A field value could not be parsed.

    `offset` is the position in the input at which the problem was found,
    or None when it is not known.
    """

    def __init__(self, message, offset=None):
        if offset is not None:
            message = "%s at offset %d" % (message, offset)
        super().__init__(message)
        self.offset = offset


class UnexpectedCharacter(ParseError):
    pass


class InvalidNumber(ParseError):
    pass


class NumberTooLong(InvalidNumber):
    pass


class InvalidString(ParseError):
    pass


class InvalidKey(ParseError):
    pass


class InvalidInnerList(ParseError):
    pass


class InvalidBinary(ParseError):
    pass


class InvalidBoolean(ParseError):
    pass


class UnexpectedEnd(ParseError):
    pass


class TrailingGarbage(ParseError):
    pass


class SerializationError(StructuredHeaderError):
    """A value cannot be represented as a structured field."""

#
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

import unittest
from decimal import Decimal
from io import StringIO

import pytest

from structuredHeaders.errors import SerializationError
from structuredHeaders.orderedMap import OrderedMap
from structuredHeaders.parser import loads
from structuredHeaders.types import ByteSequence, InnerList, Item, Token
from structuredHeaders.writer import (
    Writer,
    dump,
    dumps,
    dumps_dictionary,
    dumps_item,
    dumps_list,
)


class WriterTest(unittest.TestCase):
    def assertWritesValue(self, value, text):
        """Assert that the writer produces the given text for the given
        bare item."""
        self.assertEqual(dumps_item(Item(value)), text)

    def test_integers(self):
        self.assertWritesValue(42, "42")
        self.assertWritesValue(-42, "-42")
        self.assertWritesValue(999999999999999, "999999999999999")
        with self.assertRaises(SerializationError):
            dumps_item(1000000000000000)

    def test_decimals(self):
        self.assertWritesValue(Decimal("1.5"), "1.5")
        self.assertWritesValue(Decimal("1.500"), "1.5")
        self.assertWritesValue(Decimal("10"), "10.0")
        self.assertWritesValue(Decimal("-0.0"), "0.0")
        self.assertWritesValue(Decimal("123456789012.345"), "123456789012.345")

    def test_decimal_rounding(self):
        self.assertWritesValue(Decimal("1.0005"), "1.0")
        self.assertWritesValue(Decimal("1.0015"), "1.002")
        self.assertWritesValue(Decimal("1.23456"), "1.235")

    def test_decimal_range(self):
        with self.assertRaises(SerializationError):
            dumps_item(Decimal("1000000000000"))
        with self.assertRaises(SerializationError):
            dumps_item(Decimal("999999999999.9999"))
        with self.assertRaises(SerializationError):
            dumps_item(Decimal("1e40"))
        with self.assertRaises(SerializationError):
            dumps_item(Decimal("NaN"))

    def test_floats(self):
        self.assertEqual(dumps_item(1.25), "1.25")

    def test_strings(self):
        self.assertWritesValue("foo", '"foo"')
        self.assertWritesValue('a"b', r'"a\"b"')
        self.assertWritesValue("a\\b", r'"a\\b"')
        with self.assertRaises(SerializationError):
            dumps_item("café")
        with self.assertRaises(SerializationError):
            dumps_item("a\nb")

    def test_tokens(self):
        self.assertWritesValue(Token("foo/bar"), "foo/bar")
        with self.assertRaises(SerializationError):
            dumps_item(Token("1foo"))
        with self.assertRaises(SerializationError):
            dumps_item(Token("foo bar"))

    def test_byte_sequences(self):
        self.assertWritesValue(ByteSequence(b"hello"), ":aGVsbG8=:")
        self.assertEqual(dumps_item(b""), "::")

    def test_booleans(self):
        self.assertWritesValue(True, "?1")
        self.assertWritesValue(False, "?0")

    def test_parameters(self):
        item = Item(1, OrderedMap([("a", True), ("b", False), ("c", Token("x"))]))
        self.assertEqual(dumps_item(item), "1;a;b=?0;c=x")
        with self.assertRaises(SerializationError):
            dumps_item(Item(1, {"A": 1}))

    def test_list(self):
        members = [Item(1), InnerList([Item(2), Item(3, {"p": 1})], {"q": True})]
        self.assertEqual(dumps_list(members), "1, (2 3;p=1);q")
        self.assertEqual(dumps_list([]), "")

    def test_plain_values(self):
        self.assertEqual(dumps([1, [2, "x"], Token("t")]), '1, (2 "x"), t')
        self.assertEqual(dumps({"a": 1, "b": True}), "a=1, b")

    def test_dictionary(self):
        members = OrderedMap(
            [
                ("a", Item(1)),
                ("b", Item(True, {"x": True})),
                ("c", InnerList([Item(1), Item(2)])),
                ("d", Item(False)),
            ]
        )
        self.assertEqual(dumps_dictionary(members), "a=1, b;x, c=(1 2), d=?0")

    def test_unserializable(self):
        with self.assertRaises(SerializationError):
            dumps_item(object())
        with self.assertRaises(SerializationError):
            dumps_list([{"a": 1}])

    def test_dump_to_file(self):
        fp = StringIO()
        dump(Item(Token("foo")), fp)
        self.assertEqual(fp.getvalue(), "foo")
        fp = StringIO()
        Writer(fp).write(OrderedMap([("a", Item(1))]))
        self.assertEqual(fp.getvalue(), "a=1")


@pytest.mark.parametrize(
    "field_type,text,canonical",
    [
        ("item", "  42  ", "42"),
        ("item", "1.50", "1.5"),
        ("item", "foo;a=?1", "foo;a"),
        ("item", ":aGVsbG8:", ":aGVsbG8=:"),
        ("list", "1 ,2,( a  b );c", "1, 2, (a b);c"),
        ("dictionary", "a=?1, b=2, a=?0", "a=?0, b=2"),
        ("dictionary", "a=1;x=?1", "a=1;x"),
    ],
)
def test_canonical_form(field_type, text, canonical):
    value = loads(text, field_type, strict_padding=False)
    assert dumps(value) == canonical
    assert loads(canonical, field_type) == value


if __name__ == "__main__":
    unittest.main()

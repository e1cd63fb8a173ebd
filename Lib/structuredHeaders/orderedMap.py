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

from collections.abc import Mapping

__all__ = ["OrderedMap"]


class OrderedMap(Mapping):
    """A mapping that remembers the position at which each key was first
    inserted.

    Setting a key that is already present replaces its value but keeps the
    entry where it was, which is how repeated parameter and dictionary keys
    behave in structured fields:

    >>> m = OrderedMap()
    >>> m["a"] = 1
    >>> m["b"] = 2
    >>> m["a"] = 3
    >>> list(m.items())
    [('a', 3), ('b', 2)]

    There is no way to remove an entry.
    """

    __slots__ = ("_index", "_slots")

    def __init__(self, entries=None):
        self._index = {}
        self._slots = []
        if entries is None:
            return
        if isinstance(entries, Mapping):
            entries = entries.items()
        for key, value in entries:
            self[key] = value

    def __setitem__(self, key, value):
        slot = self._index.get(key)
        if slot is None:
            self._index[key] = len(self._slots)
            self._slots.append([key, value])
        else:
            self._slots[slot][1] = value

    def __getitem__(self, key):
        return self._slots[self._index[key]][1]

    def __contains__(self, key):
        return key in self._index

    def __iter__(self):
        for key, _ in self._slots:
            yield key

    def __len__(self):
        return len(self._slots)

    def items(self):
        return [(key, value) for key, value in self._slots]

    def values(self):
        return [value for _, value in self._slots]

    def keys(self):
        return [key for key, _ in self._slots]

    def __eq__(self, other):
        if isinstance(other, OrderedMap):
            return self.items() == other.items()
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.items())

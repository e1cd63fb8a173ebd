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


from structuredHeaders.errors import *  # noqa: F401,F403
from structuredHeaders.errors import __all__ as __all_errors__
from structuredHeaders.orderedMap import OrderedMap
from structuredHeaders.types import ByteSequence, InnerList, Item, Token
from structuredHeaders.parser import (
    Parser,
    loads,
    loads_dictionary,
    loads_item,
    loads_list,
)
from structuredHeaders.writer import (
    Writer,
    dump,
    dumps,
    dumps_dictionary,
    dumps_item,
    dumps_list,
)
from structuredHeaders.util import join_field_lines, to_json

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "0.0.0+unknown"


__all__ = [
    "OrderedMap",
    "ByteSequence",
    "InnerList",
    "Item",
    "Token",
    "Parser",
    "Writer",
    "loads",
    "loads_item",
    "loads_list",
    "loads_dictionary",
    "dump",
    "dumps",
    "dumps_item",
    "dumps_list",
    "dumps_dictionary",
    "join_field_lines",
    "to_json",
] + __all_errors__

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

import json

import pytest

import structuredHeaders.cli


def test_main_prints_canonical_form(capsys):
    assert structuredHeaders.cli.main(["dictionary", "a=1,  b=?1;x"]) == 0
    out, _ = capsys.readouterr()
    assert out == "a=1, b;x\n"


def test_main_joins_repeated_values(capsys):
    assert structuredHeaders.cli.main(["list", "1", "2"]) == 0
    out, _ = capsys.readouterr()
    assert out == "1, 2\n"


def test_main_json(capsys):
    assert structuredHeaders.cli.main(["item", "--json", ":aGVsbG8=:"]) == 0
    out, _ = capsys.readouterr()
    assert json.loads(out) == [{"__type": "binary", "value": "NBSWY3DP"}, []]


def test_main_lenient_padding(capsys):
    assert structuredHeaders.cli.main(["item", ":aGVsbG8:"]) == 1
    assert structuredHeaders.cli.main(["item", "--lenient-padding", ":aGVsbG8:"]) == 0
    out, _ = capsys.readouterr()
    assert out == ":aGVsbG8=:\n"


def test_main_invalid_value(caplog):
    assert structuredHeaders.cli.main(["item", "1.1234"]) == 1
    assert "Invalid item field" in caplog.text


def test_main_unknown_type():
    with pytest.raises(SystemExit):
        structuredHeaders.cli.main(["header", "1"])

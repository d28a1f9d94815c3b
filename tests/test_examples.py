import runpy
from pathlib import Path

import pytest

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(scope="module")
def json_example():
    return runpy.run_path(str(EXAMPLES / "json_parser.py"), run_name="json_example")


def test_json_document(json_example):
    text = '{"name": "statecomb", "tags": ["a", "b"], "n": 3, "x": -1.5, "ok": true, "none": null}'
    result, err = json_example["run_parser"](json_example["parser"], text)
    assert err is None
    assert result == {
        "name": "statecomb",
        "tags": ["a", "b"],
        "n": 3,
        "x": -1.5,
        "ok": True,
        "none": None,
    }


def test_json_nested_and_empty(json_example):
    result, err = json_example["run_parser"](json_example["parser"], ' [ [], {}, [[1]] ] ')
    assert err is None
    assert result == [[], {}, [[1]]]


def test_json_trailing_garbage(json_example):
    result, err = json_example["run_parser"](json_example["parser"], '[1, 2] x')
    assert result is None
    assert "end of input" in err.message

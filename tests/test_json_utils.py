import pytest

from heyweb.services.json_utils import safe_json_loads, strip_code_fence


def test_strip_code_fence() -> None:
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence("  plain  ") == "plain"


@pytest.mark.parametrize(
    "content,expected",
    [
        ('{"summary": "s"}', {"summary": "s"}),
        ('Sure! {"summary": "s", "keyPoints": []} Hope that helps.', {"summary": "s", "keyPoints": []}),
        ('{"summary": "s", "keyPoints": ["a", "b",]}', {"summary": "s", "keyPoints": ["a", "b"]}),
    ],
)
def test_safe_json_loads_recovers_objects(content: str, expected: dict) -> None:
    assert safe_json_loads(content) == expected


@pytest.mark.parametrize("content", ["", "   ", "just words", "[1, 2]", '"string"'])
def test_safe_json_loads_rejects_non_objects(content: str) -> None:
    assert safe_json_loads(content) is None

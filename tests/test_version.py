"""
Тест версии инструмента.
"""

from docfill import tool_version


def test_tool_version_is_string():
    version = tool_version()
    assert isinstance(version, str)
    assert version.count(".") >= 2

"""
Тесты разбора JSON-данных для шаблонов.
"""

import pytest

from docfill import TemplateDataError, parse_json_data


class TestParseJsonData:

    def test_nested_object(self):
        data = parse_json_data('{"Customer": {"Name": "Ann"}, "Items": [{"Qty": 2}], "Paid": true, "Note": null}')

        assert data["Customer"]["Name"] == "Ann"
        assert data["Items"][0]["Qty"] == 2
        assert data["Paid"] is True
        assert data["Note"] is None

    def test_integral_floats_become_int(self):
        data = parse_json_data('{"A": 10.0, "B": 2.5, "C": 7}')

        assert data["A"] == 10 and isinstance(data["A"], int)
        assert data["B"] == 2.5
        assert isinstance(data["C"], int)

    def test_invalid_json(self):
        with pytest.raises(TemplateDataError, match="Invalid JSON data"):
            parse_json_data('{"A": ')

    @pytest.mark.parametrize("text,kind", [("[]", "list"), ('"x"', "str"), ("3", "int")])
    def test_root_must_be_object(self, text, kind):
        with pytest.raises(TemplateDataError, match=f"got {kind}$"):
            parse_json_data(text)

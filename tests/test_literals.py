import ast

from api_doc_annotations.generator.literals import to_php_literal, to_python_literal


class TestPhpLiteral:
    def test_scalars(self):
        assert to_php_literal(True) == "true"
        assert to_php_literal(False) == "false"
        assert to_php_literal(None) == "null"
        assert to_php_literal(3) == "3"
        assert to_php_literal(2.5) == "2.5"

    def test_string_escaping(self):
        assert to_php_literal("it's") == "'it\\'s'"
        assert to_php_literal("a\\b") == "'a\\\\b'"

    def test_empty_containers(self):
        assert to_php_literal({}) == "[]"
        assert to_php_literal([]) == "[]"

    def test_nested_array(self):
        assert to_php_literal({"name": "John", "tags": ["a", 1]}) == (
            "[\n"
            "    'name' => 'John',\n"
            "    'tags' => [\n"
            "        'a',\n"
            "        1,\n"
            "    ],\n"
            "]"
        )


class TestPythonLiteral:
    def test_keywords(self):
        assert to_python_literal({"a": True, "b": None}) == "{\n    'a': True,\n    'b': None,\n}"

    def test_evaluates_back(self):
        value = {"name": "O'Brien", "nested": {"list": [1, 2.5, False]}, "empty": {}, "none": []}
        assert ast.literal_eval(to_python_literal(value)) == value

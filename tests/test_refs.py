import pytest

from openapi_cli.errors import DocumentLoadError
from openapi_cli.parser.refs import inline_schema, resolve_pointer, resolve_ref

DOC = {
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "discriminator": {"propertyName": "kind"},
                "properties": {
                    "name": {"type": "string"},
                    "owner": {"$ref": "#/components/schemas/Owner"},
                    "friends": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                },
            },
            "Owner": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Alias": {"$ref": "#/components/schemas/Owner"},
            "a/b": {"type": "string"},
        },
        "parameters": {
            "Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}},
            "LimitAlias": {"$ref": "#/components/parameters/Limit"},
        },
    }
}


class TestResolvePointer:
    def test_resolves_component(self):
        assert resolve_pointer(DOC, "#/components/schemas/Owner")["type"] == "object"

    def test_escaped_token(self):
        assert resolve_pointer(DOC, "#/components/schemas/a~1b") == {"type": "string"}

    def test_unknown_pointer(self):
        with pytest.raises(DocumentLoadError, match="unresolvable"):
            resolve_pointer(DOC, "#/components/schemas/Nope")

    def test_remote_reference_rejected(self):
        with pytest.raises(DocumentLoadError, match="only local"):
            resolve_pointer(DOC, "other.yaml#/Pet")


class TestResolveRef:
    def test_follows_chain(self):
        param = resolve_ref(DOC, {"$ref": "#/components/parameters/LimitAlias"})
        assert param["name"] == "limit"

    def test_plain_object_returned_as_is(self):
        obj = {"name": "q"}
        assert resolve_ref(DOC, obj) is obj


class TestInlineSchema:
    def test_inlines_nested_refs(self):
        schema = inline_schema(DOC, {"$ref": "#/components/schemas/Pet"})
        assert schema["properties"]["owner"] == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
        }
        assert "$ref" not in schema

    def test_drops_discriminator(self):
        schema = inline_schema(DOC, {"$ref": "#/components/schemas/Pet"})
        assert "discriminator" not in schema

    def test_recursive_reference_cut(self):
        schema = inline_schema(DOC, {"$ref": "#/components/schemas/Pet"})
        assert schema["properties"]["friends"]["items"] == {}

    def test_does_not_mutate_document(self):
        inline_schema(DOC, {"$ref": "#/components/schemas/Pet"})
        pet = DOC["components"]["schemas"]["Pet"]
        assert "discriminator" in pet
        assert pet["properties"]["owner"] == {"$ref": "#/components/schemas/Owner"}

    def test_ref_to_ref(self):
        schema = inline_schema(DOC, {"$ref": "#/components/schemas/Alias"})
        assert schema["type"] == "object"

    def test_sibling_keys_override(self):
        schema = inline_schema(
            DOC, {"$ref": "#/components/schemas/Owner", "description": "The owner"}
        )
        assert schema["description"] == "The owner"
        assert schema["type"] == "object"

    def test_combinators(self):
        schema = inline_schema(
            DOC,
            {
                "oneOf": [{"$ref": "#/components/schemas/Owner"}, {"type": "null"}],
                "not": {"$ref": "#/components/schemas/a~1b"},
            },
        )
        assert schema["oneOf"][0]["type"] == "object"
        assert schema["not"] == {"type": "string"}

    def test_shared_refs_inlined_twice(self):
        schema = inline_schema(
            DOC,
            {
                "type": "object",
                "properties": {
                    "a": {"$ref": "#/components/schemas/Owner"},
                    "b": {"$ref": "#/components/schemas/Owner"},
                },
            },
        )
        assert schema["properties"]["a"] == schema["properties"]["b"]
        assert schema["properties"]["a"] is not schema["properties"]["b"]

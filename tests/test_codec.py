"""
Tests for decoding and encoding documents.
"""

import json

import pytest
import yaml

from backend.openapidoc.codec import dump, dump_file, from_dict, load, load_file, to_dict
from backend.openapidoc.errors import DecodeError, FieldError, InvalidValueError, root_cause
from backend.openapidoc.models import Info, OpenAPI, Operation, Paths, Response
from backend.openapidoc.validator import validate


PETSTORE_YAML = """\
openapi: 3.0.3
x-api-id: petstore-v1
info:
  title: Pet Store
  version: 1.0.0
  x-logo:
    url: https://example.com/logo.png
    backgroundColor: '#FFFFFF'
paths:
  /pets:
    get:
      operationId: listPets
      x-codegen-request-body-name: body
      responses:
        200:
          description: A list of pets
    x-rate-limit: 100
webhooks:
  newPet:
    post:
      summary: not part of the 3.0 model
components:
  schemas:
    Pet:
      type: object
      properties:
        id:
          type: integer
"""


BASE_YAML = """\
openapi: 3.0.3
info:
  title: Pet Store
  version: 1.0.0
paths:
  /pets:
    get:
      responses:
        '200':
          description: A list of pets
"""


class TestLoad:
    """Tests for load and load_file."""

    def test_load_yaml(self):
        """Test a YAML document decodes into the graph."""
        doc = load(PETSTORE_YAML)
        assert doc.openapi == "3.0.3"
        assert doc.info.title == "Pet Store"
        assert doc.paths["/pets"].get.operation_id == "listPets"
        assert "Pet" in doc.components.schemas

    def test_load_bytes_json(self):
        """Test JSON bytes decode too."""
        raw = json.dumps({
            "openapi": "3.1.0",
            "info": {"title": "A", "version": "1"},
            "paths": {},
        }).encode("utf-8")
        doc = load(raw)
        assert doc.info.title == "A"
        assert len(doc.paths) == 0

    def test_load_stamps_declared_minor(self):
        """Test decoding stamps the minor version parsed from openapi."""
        doc = load(PETSTORE_YAML.replace("openapi: 3.0.3", "openapi: 3.1.0"))
        assert doc.declared_minor_version() == 1
        assert doc.paths["/pets"].get.minor_openapi_version == 1
        assert doc.info.minor_openapi_version == 1

    def test_unparseable_version_stamps_base(self):
        """Test a bad version string falls back to the base stamp."""
        doc = load("openapi: nonsense\ninfo: {title: A, version: '1'}\npaths: {}\n")
        assert doc.declared_minor_version() == 0

    def test_integer_status_codes(self):
        """Test unquoted YAML status codes become strings."""
        doc = load(PETSTORE_YAML)
        assert list(doc.paths["/pets"].get.responses) == ["200"]

    def test_absent_vs_empty(self):
        """Test absent paths decode to None and empty paths to an empty collection."""
        absent = load("openapi: 3.0.3\ninfo: {title: A, version: '1'}\n")
        empty = load("openapi: 3.0.3\ninfo: {title: A, version: '1'}\npaths: {}\n")
        assert absent.paths is None
        assert empty.paths is not None and len(empty.paths) == 0

    def test_numeric_versions_become_strings(self):
        """Test unquoted numeric versions decode and are left to validation."""
        doc = load("openapi: 3.1\ninfo: {title: A, version: 1.0}\npaths: {}\n")
        assert doc.openapi == "3.1"
        assert doc.info.version == "1.0"

        with pytest.raises(FieldError) as exc_info:
            validate(doc)
        assert exc_info.value.field == "openapi"
        assert isinstance(root_cause(exc_info.value), InvalidValueError)

    def test_numeric_info_version_is_valid(self):
        """Test a float info version passes once coerced."""
        doc = load("openapi: 3.0.3\ninfo: {title: A, version: 2.5}\npaths: {}\n")
        validate(doc)
        assert doc.info.version == "2.5"

    def test_paths_scalar_extension(self):
        """Test x- keys under paths may hold any value."""
        doc = load(BASE_YAML + "  x-rate-limit: 100\n")
        assert doc.paths.extensions == {"x-rate-limit": 100}
        assert "x-rate-limit" not in doc.paths
        assert list(doc.paths) == ["/pets"]
        validate(doc)

    def test_malformed_yaml(self):
        """Test malformed input raises DecodeError."""
        with pytest.raises(DecodeError):
            load("openapi: [3.0.3\n")

    def test_non_mapping_document(self):
        """Test a top-level list raises DecodeError."""
        with pytest.raises(DecodeError) as exc_info:
            load("- a\n- b\n")
        assert exc_info.value.kind == "DecodeError"

    def test_type_mismatch(self):
        """Test a field of the wrong type raises DecodeError."""
        with pytest.raises(DecodeError):
            load("openapi: 3.0.3\ninfo: just a string\npaths: {}\n")

    def test_invalid_utf8(self):
        """Test undecodable bytes raise DecodeError."""
        with pytest.raises(DecodeError):
            load(b"\xff\xfeopenapi")

    def test_load_file(self, tmp_path):
        """Test loading from a file."""
        path = tmp_path / "openapi.yaml"
        path.write_text(PETSTORE_YAML, encoding="utf-8")
        doc = load_file(path)
        assert doc.info.version == "1.0.0"


class TestDump:
    """Tests for dump, dump_file and to_dict."""

    def get_document(self):
        doc = OpenAPI(openapi="3.0.3", info=Info(title="A", version="1"), paths=Paths())
        doc.add_operation("/pets", "get", Operation(responses={"200": Response(description="ok")}))
        return doc

    def test_empty_components_omitted(self):
        """Test an empty registry is not emitted."""
        data = to_dict(self.get_document())
        assert "components" not in data

    def test_absent_fields_omitted_empty_kept(self):
        """Test None fields are dropped while empty collections survive."""
        doc = OpenAPI(openapi="3.0.3", info=Info(title="A", version="1"), paths=Paths())
        doc.tags = []
        data = to_dict(doc)
        assert data["paths"] == {}
        assert data["tags"] == []
        assert "servers" not in data

    def test_wire_names(self):
        """Test fields are emitted under their wire names."""
        data = to_dict(self.get_document())
        assert "operationId" not in data["paths"]["/pets"]["get"]
        doc = self.get_document()
        doc.paths["/pets"].get.operation_id = "listPets"
        assert to_dict(doc)["paths"]["/pets"]["get"]["operationId"] == "listPets"

    def test_dump_json(self):
        """Test JSON output parses back."""
        text = dump(self.get_document(), fmt="json")
        assert json.loads(text)["info"]["title"] == "A"

    def test_dump_yaml_keeps_path_order(self):
        """Test YAML output keeps path insertion order."""
        doc = self.get_document()
        doc.add_operation("/a", "get", Operation(responses={"200": Response(description="ok")}))
        data = yaml.safe_load(dump(doc))
        assert list(data["paths"]) == ["/pets", "/a"]

    def test_unsupported_format(self):
        """Test unknown formats are rejected."""
        with pytest.raises(ValueError):
            dump(self.get_document(), fmt="toml")

    def test_dump_file_format_from_suffix(self, tmp_path):
        """Test dump_file picks JSON for .json files."""
        path = tmp_path / "openapi.json"
        dump_file(self.get_document(), path)
        assert json.loads(path.read_text(encoding="utf-8"))["openapi"] == "3.0.3"
        assert load_file(path).paths["/pets"].get is not None


class TestRoundTrip:
    """Tests for load/dump round trips."""

    def test_recognized_fields_round_trip(self):
        """Test a recognized-only document survives and stays valid."""
        doc = TestDump().get_document()
        validate(doc)

        again = load(dump(doc))
        validate(again)
        assert to_dict(again) == to_dict(doc)

    def test_unknown_fields_round_trip(self):
        """Test unknown fields survive load -> dump -> load unchanged."""
        original = yaml.safe_load(PETSTORE_YAML)
        doc = load(dump(load(PETSTORE_YAML)))

        assert doc.model_extra["x-api-id"] == original["x-api-id"]
        assert doc.model_extra["webhooks"] == original["webhooks"]
        assert doc.info.extensions["x-logo"] == original["info"]["x-logo"]
        assert doc.paths["/pets"].extensions == {"x-rate-limit": 100}
        assert doc.paths["/pets"].get.extensions == {"x-codegen-request-body-name": "body"}

    def test_null_unknown_fields_round_trip(self):
        """Test unknown fields set to null are emitted and read back."""
        text = BASE_YAML.replace(
            "  version: 1.0.0\n", "  version: 1.0.0\n  x-nullable-ext: null\n"
        ) + "x-top: null\n"
        doc = load(dump(load(text)))
        assert "x-nullable-ext" in doc.info.extensions
        assert doc.info.extensions["x-nullable-ext"] is None
        assert doc.model_extra == {"x-top": None}

    def test_absent_known_fields_still_omitted(self):
        """Test declared fields that are None are not emitted as null."""
        data = to_dict(load(BASE_YAML))
        assert "description" not in data["info"]
        assert "parameters" not in data["paths"]["/pets"]["get"]

    def test_explicit_null_example_value(self):
        """Test a null example value is kept as a value."""
        text = BASE_YAML.replace(
            "          description: A list of pets\n",
            "          description: A list of pets\n"
            "          content:\n"
            "            application/json:\n"
            "              examples:\n"
            "                empty:\n"
            "                  value: null\n",
        )
        doc = load(dump(load(text)))
        example = doc.paths["/pets"].get.responses["200"].content["application/json"].examples["empty"]
        assert "value" in example.model_fields_set
        assert example.value is None
        data = to_dict(doc)
        media = data["paths"]["/pets"]["get"]["responses"]["200"]["content"]["application/json"]
        assert media["examples"]["empty"] == {"value": None}
        assert "example" not in media

    def test_paths_extensions_round_trip(self):
        """Test x- keys under paths survive and follow the path items."""
        text = BASE_YAML + "  x-rate-limit: 100\n  x-owner: {team: pets}\n"
        first = dump(load(text))
        doc = load(first)
        assert doc.paths.extensions == {"x-rate-limit": 100, "x-owner": {"team": "pets"}}
        assert list(yaml.safe_load(first)["paths"]) == ["/pets", "x-rate-limit", "x-owner"]
        assert dump(doc) == first

    def test_unknown_fields_not_validation_failures(self):
        """Test unknown fields never fail validation."""
        validate(load(PETSTORE_YAML))

    def test_encoded_output_is_stable(self):
        """Test a second round trip produces identical text."""
        first = dump(load(PETSTORE_YAML))
        second = dump(load(first))
        assert first == second

    def test_from_dict(self):
        """Test building from parsed data stamps the version."""
        doc = from_dict({"openapi": "3.1.0", "info": {"title": "A", "version": "1"}, "paths": {}})
        assert doc.declared_minor_version() == 1

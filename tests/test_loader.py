"""Tests for SchemaLoader - YAML/JSON loading and validation."""

import json
import pytest
import tempfile
from pathlib import Path
from pydantic import ValidationError
from udyam.engine.loader import SchemaLoader
from udyam.engine.schema import FormSchema, FieldType


@pytest.fixture
def temp_dir():
    """Create temporary directory for test fixtures."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_schema_yaml(temp_dir):
    """Create a sample schema YAML file."""
    schema_dir = temp_dir / "schemas"
    schema_dir.mkdir(parents=True)

    schema_content = """
steps:
  - id: contact
    title: Contact details
    fields:
      - id: mobile
        name: mobile
        type: text
        label: Mobile
        required: true
        pattern: "^[0-9]{10}$"
      - id: pincode
        name: pincode
        type: text
        label: PIN code
        maxLength: 6
    buttons:
      - id: next
        text: Next
        action: next
"""
    schema_file = schema_dir / "contact.yaml"
    schema_file.write_text(schema_content)
    return schema_file


def test_loader_load_yaml_schema(temp_dir, sample_schema_yaml):
    """SchemaLoader can load and validate a YAML schema."""
    loader = SchemaLoader(base_path=temp_dir)

    schema = loader.load_schema('contact')

    assert isinstance(schema, FormSchema)
    assert schema.step_count == 1
    assert schema.steps[0].fields[0].id == 'mobile'
    assert schema.steps[0].fields[1].max_length == 6


def test_loader_load_json_schema(temp_dir):
    """SchemaLoader falls back to a JSON document."""
    schema_dir = temp_dir / "schemas"
    schema_dir.mkdir()
    (schema_dir / "simple.json").write_text(json.dumps({
        'steps': [{'id': 'step1', 'title': 'One', 'fields': [
            {'id': 'agree', 'name': 'agree', 'label': 'Agree', 'type': 'checkbox', 'required': True},
        ]}],
    }))

    schema = SchemaLoader(base_path=temp_dir).load_schema('simple')

    assert schema.steps[0].fields[0].type == FieldType.CHECKBOX


def test_loader_schema_not_found(temp_dir):
    """SchemaLoader raises error for a missing schema."""
    loader = SchemaLoader(base_path=temp_dir)

    with pytest.raises(FileNotFoundError) as exc_info:
        loader.load_schema('nonexistent')

    assert 'nonexistent' in str(exc_info.value)


def test_loader_invalid_document(temp_dir):
    """SchemaLoader rejects documents that don't match the models."""
    schema_dir = temp_dir / "schemas"
    schema_dir.mkdir()
    (schema_dir / "bad.yaml").write_text("steps:\n  - id: step1\n    fields: []\n")

    with pytest.raises(ValidationError):
        SchemaLoader(base_path=temp_dir).load_schema('bad')


def test_loader_bundled_udyam_schema():
    """The shipped schema has the Aadhaar and PAN steps."""
    schema = SchemaLoader().load_schema('udyam')

    assert [step.id for step in schema.steps] == ['step1', 'step2']
    assert [f.id for f in schema.steps[0].fields] == ['aadhaarNumber', 'entrepreneurName', 'aadhaarConsent']
    assert [f.id for f in schema.steps[1].fields] == ['panNumber', 'organizationType']

    org_type = schema.steps[1].get_field('organizationType')
    assert org_type.type == FieldType.SELECT
    assert len(org_type.options) == 11
    assert org_type.options[0].text == 'Proprietorship'
    assert set(schema.validation_rules) == {'aadhaar', 'pan', 'mobile', 'email'}

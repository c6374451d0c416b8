"""Pydantic models for the form schema document."""

from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldType(str, Enum):
    """Closed set of field kinds the renderer knows how to draw."""

    TEXT = "text"
    SELECT = "select"
    CHECKBOX = "checkbox"


class FieldOption(BaseModel):
    """One entry of a select field."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Submitted value")
    text: str = Field(..., description="Display text")


class FieldMessages(BaseModel):
    """Per-rule error messages for a field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    required: Optional[str] = None
    pattern: Optional[str] = None
    min_length: Optional[str] = Field(None, alias="minLength")
    max_length: Optional[str] = Field(None, alias="maxLength")


class FormField(BaseModel):
    """
    A single input on a step.

    The type decides how the field is rendered; validation is driven by
    required/pattern/max_length and the optional message map.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str = Field(..., description="Field identifier, unique within a step")
    name: str = Field(..., description="Form control name")
    label: str = Field(..., description="Label shown to the user")
    type: FieldType = Field(..., description="Field type: text, select, checkbox")
    placeholder: Optional[str] = Field(None, description="Placeholder text")
    required: bool = Field(False, description="Whether a value must be provided")
    pattern: Optional[str] = Field(None, description="Regex the whole value must match")
    max_length: Optional[int] = Field(None, alias="maxLength", description="Maximum string length")
    tab_index: Optional[int] = Field(None, alias="tabIndex")
    auto_complete: Optional[str] = Field(None, alias="autoComplete")
    options: Optional[List[FieldOption]] = Field(None, description="Choices for select fields")
    validation: Optional[FieldMessages] = Field(None, description="Custom message per rule")


class FormButton(BaseModel):
    """Action button rendered at the bottom of a step."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    type: str = "submit"
    text: str
    class_name: Optional[str] = Field(None, alias="className")
    action: Optional[str] = None


class FormStep(BaseModel):
    """One page of the wizard."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., description="Step identifier")
    title: str = Field(..., description="Step heading")
    description: str = Field("", description="Short explanation under the heading")
    fields: List[FormField] = Field(default_factory=list, description="Ordered inputs")
    buttons: List[FormButton] = Field(default_factory=list, description="Ordered buttons")

    @model_validator(mode="after")
    def _field_ids_unique(self) -> "FormStep":
        seen = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id '{field.id}' in step '{self.id}'")
            seen.add(field.id)
        return self

    def get_field(self, field_id: str) -> Optional[FormField]:
        """Return the field with the given id, or None."""
        for field in self.fields:
            if field.id == field_id:
                return field
        return None


class ValidationRule(BaseModel):
    """Named rule from the validationRules section (pattern + message)."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    message: str


class FormSchema(BaseModel):
    """
    The whole schema document: ordered steps plus shared rules and UI hints.

    Loaded once at startup and never mutated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    steps: List[FormStep] = Field(..., min_length=1, description="Ordered wizard steps")
    validation_rules: Dict[str, ValidationRule] = Field(default_factory=dict, alias="validationRules")
    ui_config: Dict[str, Any] = Field(default_factory=dict, alias="uiConfig")

    @property
    def step_count(self) -> int:
        return len(self.steps)

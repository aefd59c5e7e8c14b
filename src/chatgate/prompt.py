"""Field-described prompt templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from chatgate.schema import optional_str, require_list, require_object, require_str


@dataclass(frozen=True)
class Field:
    name: str
    field_type: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "field_type": self.field_type,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "Field":
        data = require_object(payload, "field")
        return cls(
            name=require_str(data, "name", "field"),
            field_type=require_str(data, "field_type", "field"),
            description=require_str(data, "description", "field"),
        )


@dataclass(frozen=True)
class PromptTemplate:
    fields: tuple[Field, ...]
    system_input: str | None = None
    user_input: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def generate_prompt(self, values: Mapping[str, str]) -> str:
        """Render the instruction text.

        Lines follow the template's field order. A field with no entry in
        ``values`` still gets its line, with an empty value.
        """

        lines: list[str] = []
        if self.system_input is not None:
            lines.append(f"System Input: {self.system_input}\n")
        if self.user_input is not None:
            lines.append(f"User Input: {self.user_input}\n")
        lines.append("JSON INSTRUCT with Fields:\n")
        for item in self.fields:
            value = values.get(item.name)
            if value is None:
                lines.append(f"{item.name} ({item.field_type}): \n")
            else:
                lines.append(f"{item.name} ({item.field_type}): {value}\n")
        return "".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": [item.to_dict() for item in self.fields],
            "system_input": self.system_input,
            "user_input": self.user_input,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "PromptTemplate":
        data = require_object(payload, "template")
        return cls(
            fields=[Field.from_dict(item) for item in require_list(data, "fields", "template")],
            system_input=optional_str(data, "system_input", "template"),
            user_input=optional_str(data, "user_input", "template"),
        )

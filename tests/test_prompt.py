from __future__ import annotations

from chatgate.prompt import Field, PromptTemplate


def _template() -> PromptTemplate:
    return PromptTemplate(
        fields=[
            Field("name", "string", "Full name"),
            Field("age", "integer", "Age in years"),
        ],
        system_input="Extract the fields.",
        user_input="John is 30.",
    )


def test_renders_preamble_and_fields_in_template_order() -> None:
    prompt = _template().generate_prompt({"age": "30", "name": "John"})
    assert prompt == (
        "System Input: Extract the fields.\n"
        "User Input: John is 30.\n"
        "JSON INSTRUCT with Fields:\n"
        "name (string): John\n"
        "age (integer): 30\n"
    )


def test_missing_field_renders_empty_value() -> None:
    prompt = _template().generate_prompt({"name": "John"})
    assert prompt.endswith("name (string): John\nage (integer): \n")


def test_rendering_is_deterministic() -> None:
    template = _template()
    values = {"name": "Ada", "age": "36"}
    assert template.generate_prompt(values) == template.generate_prompt(dict(reversed(list(values.items()))))


def test_preambles_are_optional() -> None:
    template = PromptTemplate(fields=[Field("city", "string", "City")])
    assert template.generate_prompt({}) == "JSON INSTRUCT with Fields:\ncity (string): \n"


def test_template_loads_from_dict() -> None:
    template = _template()
    assert PromptTemplate.from_dict(template.to_dict()) == template

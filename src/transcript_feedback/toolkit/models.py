"""Toolkit data models for feedback tool definitions.

Frozen dataclasses describing tools and their parameters. The catalog
only documents and exports schemas; execution lives in ToolExecutor.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ToolName(str, enum.Enum):
    """The closed set of tools the feedback agent can call."""

    CORRECT_TEXT = "correct_text"
    ADD_TERM = "add_term"
    ADD_PERSON = "add_person"
    CHANGE_PROJECT = "change_project"
    CHANGE_TITLE = "change_title"
    PROVIDE_HELP = "provide_help"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ToolParameter:
    """A single declared tool parameter.

    Attributes:
        type: JSON Schema type ("string", "boolean", "array").
        description: What the model should pass.
        required: Whether the parameter must be present.
        enum: Allowed values, if restricted.
    """

    type: str
    description: str
    required: bool = False
    enum: tuple[str, ...] | None = None

    def to_schema(self) -> dict:
        schema: dict = {"type": self.type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.type == "array":
            schema["items"] = {"type": "string"}
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A single tool definition for LLM consumption.

    Attributes:
        name: Tool name (one of ToolName).
        description: When/why the model should use this tool.
        parameters: Parameter name -> ToolParameter, in declaration order.
    """

    name: ToolName
    description: str
    parameters: dict[str, ToolParameter] = field(default_factory=dict)

    @property
    def required(self) -> list[str]:
        return [key for key, param in self.parameters.items() if param.required]

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name.value,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {
                        key: param.to_schema() for key, param in self.parameters.items()
                    },
                    "required": self.required,
                },
            },
        }

"""Declarative request validation.

A schema is a list of fields, each with an ordered list of rules. Transforms
(``Trim``) rewrite the value, ``Required`` decides what an empty value means,
and checks (``MinLength``, ``MaxLength``, ``Email``) each contribute their
message when they fail. Failures are collected per field and raised together
as a ``SchemaError``, whose ``sanitize()`` produces the map sent to clients.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel

FIRST_KEY = "$first"
ROOT_KEY = "$root"
FALLBACK_MESSAGE = "Invalid request"

ModelT = TypeVar("ModelT", bound=BaseModel)


class Rule:
    """Base class for field rules."""

    message: str = ""


class Transform(Rule):
    """Rule that rewrites the value before checks run."""

    def apply(self, value: str) -> str:
        raise NotImplementedError


class Check(Rule):
    """Rule that tests the transformed value."""

    def __init__(self, message: str = ""):
        self.message = message

    def test(self, value: str) -> bool:
        raise NotImplementedError


class Trim(Transform):
    def apply(self, value: str) -> str:
        return value.strip()


class Required(Rule):
    def __init__(self, message: str = ""):
        self.message = message


class MinLength(Check):
    def __init__(self, limit: int, message: str = ""):
        super().__init__(message)
        self.limit = limit

    def test(self, value: str) -> bool:
        return len(value) >= self.limit


class MaxLength(Check):
    def __init__(self, limit: int, message: str = ""):
        super().__init__(message)
        self.limit = limit

    def test(self, value: str) -> bool:
        return len(value) <= self.limit


class Email(Check):
    def test(self, value: str) -> bool:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


class SchemaError(Exception):
    """Raised when a payload does not satisfy a schema."""

    def __init__(
        self,
        issues: dict[str, list[str]] | None = None,
        root: list[str] | None = None,
    ):
        self.issues = issues or {}
        self.root = root or []
        super().__init__(self.issues or self.root)

    @classmethod
    def invalid_body(cls) -> "SchemaError":
        """Body was not a JSON object. Carries no message of its own."""
        return cls(root=[""])

    def sanitize(self) -> dict[str, list[str]]:
        """Build the client-facing map of field name to messages.

        Adds the synthetic "$first" key (first message overall) and, for
        body-level issues, "$root". An empty first message is replaced with
        a generic one so clients never receive a blank error.
        """
        errors = {name: list(messages) for name, messages in self.issues.items()}
        if self.root:
            errors[ROOT_KEY] = list(self.root)

        ordered = [*self.root, *(m for messages in self.issues.values() for m in messages)]
        errors[FIRST_KEY] = [ordered[0] if ordered else ""]

        if not errors[FIRST_KEY][0]:
            errors[FIRST_KEY][0] = FALLBACK_MESSAGE
            errors.setdefault(ROOT_KEY, [FALLBACK_MESSAGE])[0] = FALLBACK_MESSAGE
        return errors


@dataclass
class FieldSchema:
    """A named string field and its rules, evaluated in order."""

    name: str
    rules: Sequence[Rule] = field(default_factory=list)
    type_message: str = ""

    @property
    def required(self) -> Required | None:
        return next((rule for rule in self.rules if isinstance(rule, Required)), None)

    def evaluate(self, raw: Any) -> tuple[str | None, list[str]]:
        """Return the transformed value and the messages of failed rules."""
        if raw is None:
            value = ""
        elif isinstance(raw, str):
            value = raw
        else:
            return None, [self.type_message]

        for rule in self.rules:
            if isinstance(rule, Transform):
                value = rule.apply(value)

        if not value:
            required = self.required
            return None, [required.message] if required is not None else []

        messages = [
            rule.message for rule in self.rules if isinstance(rule, Check) and not rule.test(value)
        ]
        return value, messages


class Schema:
    """An ordered collection of field schemas."""

    def __init__(self, *fields: FieldSchema):
        self.fields = fields

    def parse(self, payload: Any, model: type[ModelT]) -> ModelT:
        """Validate ``payload`` and populate ``model`` with the clean values.

        Keys not named by the schema are ignored. Raises SchemaError listing
        every failing field.
        """
        if not isinstance(payload, dict):
            raise SchemaError.invalid_body()

        values: dict[str, str | None] = {}
        issues: dict[str, list[str]] = {}
        for field_schema in self.fields:
            value, messages = field_schema.evaluate(payload.get(field_schema.name))
            if messages:
                issues[field_schema.name] = messages
            else:
                values[field_schema.name] = value

        if issues:
            raise SchemaError(issues)
        return model(**values)

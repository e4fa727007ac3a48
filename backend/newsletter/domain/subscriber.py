"""Validated value types for subscription input."""

from __future__ import annotations

from dataclasses import dataclass

import regex
from marshmallow import ValidationError as MarshmallowValidationError
from marshmallow import validate

from newsletter.services._shared.errors import ValidationError

MAX_NAME_GRAPHEMES = 256
FORBIDDEN_NAME_CHARACTERS = frozenset('/()"<>\\{}')

_GRAPHEME = regex.compile(r"\X")
_email_validator = validate.Email()


@dataclass(frozen=True, slots=True)
class SubscriberName:
    """A display name that is non-blank, short enough, and free of markup characters."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> SubscriberName:
        """
        Validate ``raw`` and wrap it.

        :raises ValidationError: With ``field="name"`` and the failing rule.
        """
        if not raw.strip():
            raise ValidationError("name", "must not be empty")
        # Length is measured in user-perceived characters, not code points.
        if len(_GRAPHEME.findall(raw)) > MAX_NAME_GRAPHEMES:
            raise ValidationError("name", f"must be at most {MAX_NAME_GRAPHEMES} characters long")
        if any(ch in FORBIDDEN_NAME_CHARACTERS for ch in raw):
            raise ValidationError("name", "contains forbidden characters")
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SubscriberEmail:
    """A syntactically valid email address."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> SubscriberEmail:
        try:
            _email_validator(raw)
        except MarshmallowValidationError:
            raise ValidationError("email", f"{raw!r} is not a valid subscriber email") from None
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NewSubscriber:
    email: SubscriberEmail
    name: SubscriberName

    @classmethod
    def parse(cls, *, name: str, email: str) -> NewSubscriber:
        """Validate both fields; the name is checked first."""
        parsed_name = SubscriberName.parse(name)
        return cls(email=SubscriberEmail.parse(email), name=parsed_name)

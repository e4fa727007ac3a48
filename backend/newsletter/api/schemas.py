"""Marshmallow schemas for form/JSON input.

Schemas only check presence and type. Domain rules (name length, forbidden
characters, email syntax) live in :mod:`newsletter.domain` so they apply to
every caller, not just HTTP.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class BaseSchema(Schema):
    """Base schema ignoring unknown fields (e.g. CSRF tokens on forms)."""

    class Meta:
        ordered = True
        unknown = EXCLUDE


class SubscribeSchema(BaseSchema):
    name = fields.String(required=True)
    email = fields.String(required=True)


class ConfirmQuerySchema(BaseSchema):
    subscription_token = fields.String(required=True)


class LoginSchema(BaseSchema):
    username = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class ChangePasswordSchema(BaseSchema):
    current_password = fields.String(required=True, load_only=True)
    new_password = fields.String(required=True, load_only=True)
    new_password_check = fields.String(required=True, load_only=True)


class NewsletterIssueSchema(BaseSchema):
    title = fields.String(required=True)
    html_content = fields.String(required=True)
    text_content = fields.String(required=True)


class MessagesSchema(BaseSchema):
    """Flash messages rendered in place of an HTML page."""

    messages = fields.List(fields.String(), dump_default=list)


class DashboardSchema(BaseSchema):
    username = fields.String()
    links = fields.Dict(keys=fields.String(), values=fields.String())

"""Flask-WTF forms that read script submissions from JSON or url-encoded bodies."""
from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField

from .store import ScriptInput


class ApiForm(FlaskForm):
    """Base for forms posted by API clients rather than rendered pages.

    Field rules live in the store so that every entry point shares them; the
    forms only pull raw values out of the request.
    """

    class Meta:
        csrf = False


class OwnerForm(ApiForm):
    owner = StringField("Owner")


class ScriptForm(OwnerForm):
    content = TextAreaField("Content")
    filename = StringField("Filename")
    description = TextAreaField("Description")

    def to_input(self) -> ScriptInput:
        return ScriptInput(
            content=_text(self.content.data),
            owner=_text(self.owner.data),
            filename=_text(self.filename.data),
            description=_text(self.description.data),
        )


def _text(value: object) -> str | None:
    # JSON bodies may carry numbers or booleans; treat them as their text.
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)

"""
HTML rendering for the vows display.

Vow text from the server is treated as plain text: it is escaped and only
line breaks are turned into markup.
"""
import math
import os
import tempfile

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from vowsite.client.models import LANGUAGES, RenderContext

TITLES = {
    "en": "{name}'s Vows",
    "pt": "Votos de {name}",
}

LOCKED_MESSAGES = {
    "en": "The vows are still locked. This page updates automatically.",
    "pt": "Os votos ainda estão bloqueados. Esta página atualiza automaticamente.",
}

LANGUAGE_LABELS = {"en": "English", "pt": "Português"}


def vow_text(value: str | None) -> Markup:
    """Escape text and keep its line breaks."""
    if not value:
        return Markup("")
    return Markup("<br>\n").join(escape(line) for line in value.splitlines())


class VowsView:
    def __init__(self, refresh_seconds: float | None = None) -> None:
        self.refresh_seconds = refresh_seconds
        self.env = Environment(
            loader=PackageLoader("vowsite.client", "templates"),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["vow_text"] = vow_text
        self.template = self.env.get_template("vows.html")

    @property
    def meta_refresh(self) -> int | None:
        """Whole seconds for the refresh meta tag, never below 1."""
        if not self.refresh_seconds:
            return None
        return max(1, math.ceil(self.refresh_seconds))

    def _person(self, context: RenderContext, person_type: str) -> dict | None:
        payload = context.payload
        person = getattr(payload, person_type) if payload else None
        if person is None:
            return None
        name = person.name(context.language)
        return {
            "title": TITLES[context.language].format(name=name) if name else "",
            "text": person.text(context.language),
        }

    def render(self, context: RenderContext) -> str:
        return self.template.render(
            language=context.language,
            languages=[(code, LANGUAGE_LABELS[code]) for code in LANGUAGES],
            is_unlocked=context.is_unlocked,
            groom=self._person(context, "groom"),
            bride=self._person(context, "bride"),
            locked_message=LOCKED_MESSAGES[context.language],
            refresh_seconds=self.meta_refresh,
        )


class FileSink:
    """Writes each rendered page to `path` atomically."""

    def __init__(self, path: str) -> None:
        self.path = path

    def __call__(self, html: str) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".vows-", suffix=".html")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(html)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

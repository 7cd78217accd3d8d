"""HTML rendering of certificates with Jinja2.

The template directory holds two fixed files:

  certificate.html   the page; binds {{ id }}, {{ name }}, {{ grade }},
                     {{ date }} and {{ medal }}
  selo.png           the medal image, inlined as base64 into the page so
                     Chromium never has to fetch anything

Both are resolved against the process working directory unless
CERT_TEMPLATE_DIR is absolute.  A missing file is fatal for the request;
there is no fallback template.
"""

from __future__ import annotations

import base64
import dataclasses
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from certgen.core.errors import TemplateRenderError
from certgen.models.certificate import CertificateTemplateData

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "certificate.html"
MEDAL_NAME = "selo.png"


class TemplateRenderer:
    def __init__(self, template_dir: Path | str) -> None:
        self._dir = Path(template_dir)
        self._env = Environment(
            loader=FileSystemLoader(str(self._dir)),
            autoescape=select_autoescape(["html"]),
        )

    def load_medal(self) -> str:
        """Return the medal image as a base64 string."""
        medal_path = self._dir / MEDAL_NAME
        try:
            raw = medal_path.read_bytes()
        except OSError as exc:
            logger.error("Medal asset unreadable: %s", medal_path)
            raise TemplateRenderError(f"cannot read {medal_path}") from exc
        return base64.b64encode(raw).decode("ascii")

    def render(self, data: CertificateTemplateData) -> str:
        try:
            template = self._env.get_template(TEMPLATE_NAME)
            return template.render(**dataclasses.asdict(data))
        except (TemplateError, OSError, UnicodeDecodeError) as exc:
            logger.error("Certificate template failed dir=%s: %s", self._dir, exc)
            raise TemplateRenderError(str(exc)) from exc

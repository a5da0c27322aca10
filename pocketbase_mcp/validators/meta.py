"""Validators for the session tools."""

from typing import Any, Dict
from urllib.parse import urlsplit

from ..errors import ValidationError
from ..types import SetBaseUrlArgs
from .common import MISSING, require_string


def parse_set_base_url_args(args: Dict[str, Any]) -> SetBaseUrlArgs:
    url = require_string(args.get("url", MISSING), "url").strip()

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise ValidationError("Invalid parameter: url must use http or https")
    if not parts.netloc:
        raise ValidationError("Invalid parameter: url must include a host")

    return SetBaseUrlArgs(url=url)

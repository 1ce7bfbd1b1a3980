from starlette.responses import Response

from jsmessages.generator import KeyFilter


class JavaScriptResponse(Response):
    media_type = "application/javascript"
    charset = "utf-8"


def script_tag(script: str) -> str:
    return f"<script>{script}</script>"


def prefix_filter(prefix: str) -> KeyFilter:
    def accepts(key: str) -> bool:
        return key.startswith(prefix)

    return accepts


def parse_keys(raw: list[str] | None) -> list[str] | None:
    """Accept repeated ``keys=a&keys=b`` as well as ``keys=a,b``."""
    if raw is None:
        return None
    keys = [key.strip() for item in raw for key in item.split(",")]
    return [key for key in keys if key]

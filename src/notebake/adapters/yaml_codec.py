import io
from typing import Any

import yaml

from ..core.utils import FRONTMATTER_RE


class YamlFrontmatter:
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = FRONTMATTER_RE.match(text)
        if not m:
            return {}, text
        fm = yaml.safe_load(io.StringIO(m.group(1))) or {}
        body = text[m.end() :]
        return (fm, body)

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.safe_dump(meta, buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"


def stamp_source(text: str, source: str, codec: YamlFrontmatter | None = None) -> str:
    """
    Record the note a baked text came from in its frontmatter.

    Text whose frontmatter is not a YAML mapping is returned unchanged.
    """
    codec = codec or YamlFrontmatter()
    try:
        meta, body = codec.decode(text)
    except yaml.YAMLError:
        return text
    if not isinstance(meta, dict):
        return text
    meta["baked_from"] = source
    return codec.encode(meta) + body

from __future__ import annotations
import datetime, yaml
from post import ContentEntry, FieldError, MalformedStructure

FENCE = "---"

class _PostLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as text unless they are timestamps."""

_TEXT_TAGS = ("tag:yaml.org,2002:bool", "tag:yaml.org,2002:int", "tag:yaml.org,2002:float")
_PostLoader.yaml_implicit_resolvers = {
    ch: [(tag, rx) for tag, rx in resolvers if tag not in _TEXT_TAGS]
    for ch, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

def _construct_timestamp(loader, node):
    # 2022-02-30 looks like a timestamp but is not one; leave it to the decoders
    try:
        return yaml.SafeLoader.construct_yaml_timestamp(loader, node)
    except ValueError:
        return loader.construct_scalar(node)

_PostLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_timestamp)

def split_front_matter(blob: str) -> tuple[str, str]:
    """Split a post into (metadata_text, body_text).

    The first line must be a fence; the next fence line closes the block.
    The body is everything after the closing fence line, untouched.
    """
    if blob.startswith("\ufeff"):
        blob = blob[1:]
    lines = blob.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        raise MalformedStructure(f"missing opening '{FENCE}' fence")
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == FENCE:
            return "".join(lines[1:i]), "".join(lines[i + 1:])
    raise MalformedStructure(f"missing closing '{FENCE}' fence")

def _text(key: str, value) -> str:
    if not isinstance(value, str):
        raise FieldError(key, "expected text")
    return value

def _timestamp(key: str, value) -> datetime.datetime:
    if isinstance(value, str):
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            value = datetime.datetime.fromisoformat(s)
        except ValueError:
            raise FieldError(key, "invalid timestamp") from None
    # datetime before date: every datetime is also a date
    if isinstance(value, datetime.datetime):
        if value.utcoffset() is None:
            raise FieldError(key, "missing UTC offset")
        return value
    if isinstance(value, datetime.date):
        raise FieldError(key, "missing UTC offset")
    raise FieldError(key, "invalid timestamp")

_TRUE = ("true", "yes", "on")
_FALSE = ("false", "no", "off")

def _boolean(key: str, value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
    raise FieldError(key, "expected boolean")

def _text_list(key: str, value) -> tuple[str, ...]:
    if isinstance(value, str):
        # "swift, gotcha" is accepted as shorthand for a list
        return tuple(p.strip() for p in value.split(",") if p.strip())
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise FieldError(key, "expected list of text")

# front matter key -> (ContentEntry attribute, decoder)
FIELDS = {
    "title":           ("title", _text),
    "date":            ("date", _timestamp),
    "author":          ("author", _text),
    "authorTwitter":   ("author_twitter", _text),
    "cover":           ("cover", _text),
    "tags":            ("tags", _text_list),
    "keywords":        ("keywords", _text_list),
    "draft":           ("draft", _boolean),
    "showFullContent": ("show_full_content", _boolean),
}
REQUIRED = ("title", "date")

def parse(blob: str) -> ContentEntry:
    """Parse one post into a ContentEntry.

    Raises MalformedStructure when the fences or the metadata mapping are
    broken, and FieldError when a required key is missing or a present
    key does not decode. Unknown keys are ignored; null counts as absent.
    """
    meta_text, body = split_front_matter(blob)
    try:
        meta = yaml.load(meta_text, Loader=_PostLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise MalformedStructure(f"front matter is not valid YAML: {e}") from e
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise MalformedStructure("front matter is not a key/value mapping")

    values = {}
    for key, (attr, decode) in FIELDS.items():
        raw = meta.get(key)
        if raw is None:
            if key in REQUIRED:
                raise FieldError(key, "missing")
            continue
        values[attr] = decode(key, raw)
    return ContentEntry(body=body, **values)

def front_matter_text(entry: ContentEntry) -> str:
    """Render an entry back to front matter + body. Defaults are left out."""
    fm = {}
    for key, (attr, _decode) in FIELDS.items():
        value = getattr(entry, attr)
        if value is None or value is False or value == ():
            continue
        if isinstance(value, datetime.datetime):
            value = value.isoformat()
        elif isinstance(value, tuple):
            value = list(value)
        fm[key] = value
    yaml_txt = yaml.safe_dump(
        fm, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000
    )
    return f"{FENCE}\n{yaml_txt}{FENCE}\n" + entry.body

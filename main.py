import os, sys, yaml
from pathlib import Path
from dotenv import load_dotenv
from loader import load_posts

load_dotenv()

BASE = Path(__file__).resolve().parent

DEFAULTS = {
    "content_dir": "content/posts",
    "pattern": "*.md",
    "include_drafts": False,
}

def _truthy(s: str) -> bool:
    return s.strip().lower() in ("1", "true", "yes", "on")

def load_config(path: str | Path | None = None) -> dict:
    path = Path(path or os.getenv("POST_LOADER_CONFIG", BASE / "config.yaml"))
    cfg = dict(DEFAULTS)
    if path.exists():
        print(f">> Loading {path.name} …", flush=True)
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if isinstance(data, dict):
            cfg.update(data)
        else:
            print(f">> {path.name} is not a key/value mapping, using defaults", flush=True)
    else:
        print(f">> No config at {path}, using defaults", flush=True)

    if os.getenv("CONTENT_DIR"):
        cfg["content_dir"] = os.getenv("CONTENT_DIR")
    if os.getenv("INCLUDE_DRAFTS"):
        cfg["include_drafts"] = _truthy(os.getenv("INCLUDE_DRAFTS"))
    return cfg

def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    cfg = load_config(argv[0] if argv else None)

    content_dir = Path(cfg["content_dir"])
    if not content_dir.is_absolute():
        content_dir = BASE / content_dir
    if not content_dir.is_dir():
        print(f">> Content dir not found: {content_dir}", flush=True)
        return 2

    include_drafts = cfg.get("include_drafts")
    if isinstance(include_drafts, str):
        include_drafts = _truthy(include_drafts)
    result = load_posts(content_dir, cfg.get("pattern", "*.md"), bool(include_drafts))

    for path, entry in result.posts:
        flag = " [draft]" if entry.draft else ""
        tags = ", ".join(entry.tags)
        print(f"{entry.date:%Y-%m-%d}  {entry.title}{flag}  ({tags})  <- {path.relative_to(content_dir)}")

    if result.failures:
        print(f"\n>> {len(result.failures)} file(s) failed to parse", flush=True)
        for path, err in result.failures:
            kind = getattr(err, "kind", "read_error")
            key = f" [{err.key}]" if getattr(err, "key", None) else ""
            print(f"   {kind}{key}: {path} -> {err}", flush=True)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())

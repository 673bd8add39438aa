from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from post import ContentEntry, ParseError
from reader.front_matter import parse

@dataclass
class LoadResult:
    posts: list[tuple[Path, ContentEntry]] = field(default_factory=list)
    failures: list[tuple[Path, Exception]] = field(default_factory=list)
    drafts_skipped: int = 0

def iter_post_files(content_dir: str | Path, pattern: str = "*.md") -> list[Path]:
    return sorted(p for p in Path(content_dir).rglob(pattern) if p.is_file())

def load_posts(content_dir: str | Path, pattern: str = "*.md", include_drafts: bool = False) -> LoadResult:
    """Parse every post under content_dir, newest first. Broken files are skipped and reported."""
    result = LoadResult()
    files = iter_post_files(content_dir, pattern)
    print(f">> Loading {len(files)} post file(s) from {content_dir}", flush=True)

    for i, path in enumerate(files, 1):
        try:
            entry = parse(path.read_text(encoding="utf-8"))
        except ParseError as pe:
            key = f" [{pe.key}]" if pe.key else ""
            print(f"   [{i}/{len(files)}] {pe.kind}{key}: {path} -> {pe} (skipping)", flush=True)
            result.failures.append((path, pe))
            continue
        except (OSError, UnicodeDecodeError) as e:
            print(f"   [{i}/{len(files)}] read_error: {path} -> {e} (skipping)", flush=True)
            result.failures.append((path, e))
            continue

        if entry.draft and not include_drafts:
            result.drafts_skipped += 1
            continue
        result.posts.append((path, entry))

    result.posts.sort(key=lambda pe: pe[1].date, reverse=True)
    print(f">> Loaded: {len(result.posts)} post(s), {result.drafts_skipped} draft(s) skipped, "
          f"{len(result.failures)} failure(s)", flush=True)
    return result

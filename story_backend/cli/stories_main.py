# stories_main.py
"""
Command line entry point: generate Jira stories from a UI image without the HTTP layer.

    python -m story_backend.cli.stories_main design.png
    python -m story_backend.cli.stories_main --from-text reply.txt   # re-normalize a saved model reply
"""

from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from pathlib import Path

from story_backend.libs.logging_config import configure_logging
from story_backend.libs.settings import load_settings
from story_backend.orchestrator import FALLBACK_STORIES, compile_graph, normalize
from story_backend.orchestrator.utils import md_stories_table


def run_cli(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate Jira stories from a UI design image.")
    parser.add_argument("image", nargs="?", help="path to a PNG/JPEG/WebP image")
    parser.add_argument("--from-text", dest="from_text", help="normalize a saved model reply instead of calling the API")
    parser.add_argument("--table", action="store_true", help="print a markdown table instead of JSON")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    if args.from_text:
        stories = normalize(Path(args.from_text).read_text(encoding="utf-8"), FALLBACK_STORIES)
    elif args.image:
        path = Path(args.image)
        if not path.is_file():
            print(f"No such image: {path}", file=sys.stderr)
            return 2
        mime_type, _ = mimetypes.guess_type(path.name)
        out = compile_graph(settings).invoke({"image_bytes": path.read_bytes(), "mime_type": mime_type})
        stories = out["stories"]
        print(f"(source: {out.get('source')})", file=sys.stderr)
    else:
        parser.error("an image path or --from-text is required")

    print(md_stories_table(stories) if args.table else json.dumps(stories, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())

#!/usr/bin/env python3
"""Example: compile a small blog into typed posts and watch for changes."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from content_publisher import compile_collection

POSTS = {
    "2024-01-hello.md": '{title: "Hello", tags: [intro]}\n---\nFirst *post*.\n',
    "2024-02-code.md": (
        '{title: "Some code", tags: [python]}\n---\n'
        "```python\nprint(\"highlighted\")\n```\n"
    ),
}


@dataclass(frozen=True)
class Post:
    """Entry type built for every source file."""

    slug: str
    title: str
    tags: tuple[str, ...]
    body: str

    @classmethod
    def build(cls, path: str, attributes: Any, body: str) -> Post:
        return cls(
            slug=Path(path).stem,
            title=attributes["title"],
            tags=tuple(attributes.get("tags", ())),
            body=body,
        )


def main() -> None:
    """Compile the posts, print them, then touch the sources."""
    with tempfile.TemporaryDirectory() as workdir:
        root = Path(workdir)
        for name, text in POSTS.items():
            (root / name).write_text(text, encoding="utf-8")

        posts = compile_collection(
            str(root / "*.md"),
            name="posts",
            build=Post,
            highlighters=["pygments"],
        )
        for post in posts:
            print(f"{post.slug}: {post.title} {list(post.tags)}")
            print(f"  {post.body}")

        print(f"needs rebuild: {posts.needs_rebuild()}")
        (root / "2024-03-new.md").write_text('{title: "New"}\n---\nLater.\n', encoding="utf-8")
        print(f"needs rebuild after adding a post: {posts.needs_rebuild()}")


if __name__ == "__main__":
    main()

"""
Markdown documentation index.

Scans a docs directory recursively, splits YAML frontmatter from each
markdown body and groups the documents by their top-level folder.
"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from ..errors import NotFound
from ..logging_config import logger
from ..schemas.docs import DocFile, DocsIndex

DEFAULT_CATEGORY = "General"

_FRONTMATTER_RE = re.compile(r"\A---\s*\r?\n(.*?)\r?\n---\s*(?:\r?\n|\Z)", re.DOTALL)


def split_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a markdown document into (frontmatter, body).

    Documents without a leading `---` block, or whose block is not a YAML
    mapping, get an empty frontmatter and keep their full text as body.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed frontmatter: {e}")
        return {}, text

    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end():]


def format_doc_name(file_stem: str) -> str:
    """`getting-started_guide` -> `Getting Started Guide`."""
    spaced = re.sub(r"[-_]", " ", file_stem)
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def scan_markdown_files(root: Union[str, Path]) -> List[DocFile]:
    """
    Recursively collect every `.md` file under `root`.

    The category of a document is its first path segment below `root`;
    files directly in `root` fall under "General". Files that are not valid
    UTF-8 are skipped.
    """
    root = Path(root)
    docs: List[DocFile] = []

    for path in sorted(root.rglob("*.md")):
        if not path.is_file():
            continue

        relative = path.relative_to(root)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {relative.as_posix()}: not valid UTF-8 ({e.reason})")
            continue

        frontmatter, content = split_frontmatter(text)
        parts = relative.parts
        category = parts[0] if len(parts) > 1 else DEFAULT_CATEGORY

        title = frontmatter.get("title")
        name = str(title) if title else format_doc_name(path.stem)
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

        docs.append(
            DocFile(
                name=name,
                path=path.name,
                relative_path=relative.as_posix(),
                content=content,
                frontmatter=frontmatter,
                category=category,
                last_modified=modified.isoformat(),
            )
        )

    return docs


def build_docs_index(root: Union[str, Path]) -> DocsIndex:
    """
    Build the sorted, category-grouped docs index.

    Raises:
        NotFound: If the directory does not exist or holds no markdown files
    """
    root = Path(root)
    if not root.is_dir():
        raise NotFound("Docs directory not found")

    docs = scan_markdown_files(root)
    if not docs:
        raise NotFound("No markdown files found")

    docs.sort(key=lambda d: (d.category, d.name))

    grouped: Dict[str, List[DocFile]] = {}
    for doc in docs:
        grouped.setdefault(doc.category, []).append(doc)

    logger.info(f"Indexed {len(docs)} docs in {len(grouped)} categories from {root}")
    return DocsIndex(
        docs=docs,
        grouped_docs=grouped,
        categories=list(grouped),
        total_files=len(docs),
    )

from .docs_index import build_docs_index, scan_markdown_files, split_frontmatter

__all__ = ["build_docs_index", "scan_markdown_files", "split_frontmatter"]

"""
Schemas for the markdown documentation index.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class DocFile(BaseModel):
    """A single markdown document found under the docs directory."""

    name: str = Field(..., description="Display name (frontmatter title or file name)")
    path: str = Field(..., description="File name")
    relative_path: str = Field(..., description="Path relative to the docs root")
    content: str = Field(..., description="Markdown body without frontmatter")
    frontmatter: Dict[str, Any] = Field(default_factory=dict)
    category: str = Field("General", description="Top-level folder, or General")
    last_modified: str = Field(..., description="ISO-8601 modification time")


class DocsIndex(BaseModel):
    """All documents, sorted and grouped by category."""

    docs: List[DocFile]
    grouped_docs: Dict[str, List[DocFile]]
    categories: List[str]
    total_files: int

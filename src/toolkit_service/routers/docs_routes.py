from pathlib import Path

from fastapi import APIRouter, Depends

from ..dependencies.app_deps import get_docs_dir
from ..schemas.common import DataResponse, ErrorResponse
from ..schemas.docs import DocsIndex
from ..services.docs_index import build_docs_index

router = APIRouter(
    prefix="/docs-index",
    tags=["docs"],
    responses={404: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=DataResponse[DocsIndex],
    summary="Documentation index",
    description="Markdown documents found under the docs directory, grouped by folder",
)
def get_docs_index(docs_dir: Path = Depends(get_docs_dir)):
    return DataResponse[DocsIndex](data=build_docs_index(docs_dir))

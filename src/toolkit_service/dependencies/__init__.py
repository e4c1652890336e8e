from .app_deps import get_docs_dir, get_tool_mutations, get_tool_queries
from .user_deps import (
    get_current_user_token_data,
    get_optional_token_data,
    get_optional_user_id,
    require_admin_user,
)

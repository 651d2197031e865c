from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from ..infrastructure.logging import configure_logging
from ..interfaces.api import router as api_router

settings = get_settings()
configure_logging()

app = create_application(
    router=api_router,
    settings=settings,
    summary="Support chatbot backed by a pgvector knowledge base",
    description="""
    # RAG Support Chat API

    * **Chat**: streamed answers grounded in the knowledge base through a vector search tool
    * **Embed**: add single pieces of content, searchable immediately
    * **Search**: inspect what the assistant would retrieve for a query
    """,
)

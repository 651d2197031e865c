"""Capability descriptors for tools offered to the conversation model."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict

from .services import RetrievalService

ToolHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]

VECTOR_SEARCH_TOOL_NAME = "vectorSearch"


@dataclass(frozen=True)
class ToolDescriptor:
    """A named capability the model may call: description, JSON-schema parameters and handler.

    Any handler that accepts the parsed arguments and returns a JSON-serializable
    dict satisfies the contract, so tools are registered by value rather than by
    subclassing.
    """

    name: str
    description: str
    parameters: Dict[str, Any]
    handler: ToolHandler

    def to_openai_tool(self) -> Dict[str, Any]:
        """Render the descriptor in the chat completions ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    async def invoke(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return await self.handler(arguments)


def build_vector_search_tool(retrieval_service: RetrievalService) -> ToolDescriptor:
    """Expose knowledge-base search as the ``vectorSearch`` tool."""

    async def handler(arguments: Dict[str, Any]) -> Dict[str, Any]:
        query = arguments.get("query")
        if not isinstance(query, str):
            query = ""
        response = await retrieval_service.search(query)
        return response.model_dump()

    return ToolDescriptor(
        name=VECTOR_SEARCH_TOOL_NAME,
        description="Search for relevant information in the knowledge base",
        parameters={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query to find relevant information",
                },
            },
            "required": ["query"],
            "additionalProperties": False,
        },
        handler=handler,
    )

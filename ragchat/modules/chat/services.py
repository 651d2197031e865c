"""Conversation orchestration: streamed chat completions with tool calling."""

import json
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Sequence

from openai import AsyncOpenAI

from ...infrastructure.llm.client import translate_provider_errors
from ...infrastructure.logging import get_logger
from ..common.exceptions import DomainError, InputValidationError
from ..retrieval.tool import ToolDescriptor
from .prompts import SYSTEM_PROMPT
from .schemas import ChatMessage

logger = get_logger(__name__)

ChatEvent = Dict[str, Any]


@dataclass
class _PendingToolCall:
    id: str = ""
    name: str = ""
    arguments: str = ""


@dataclass
class _StepOutcome:
    text: str = ""
    tool_calls: List[_PendingToolCall] = field(default_factory=list)


class ChatService:
    """Runs the model/tool loop for one user turn and streams the answer.

    Each step is one streamed chat completion. Text deltas are yielded as they
    arrive; when the model asks for tools instead, every call is executed, its
    result is fed back, and the next step begins. The loop stops when a step
    finishes without tool calls or after ``max_steps`` model calls.

    Events:
        {"type": "tool_call", "toolName", "args"}
        {"type": "tool_result", "toolName", "args", "result"}
        {"type": "token", "text"}
        {"type": "error", "code", "message"}
        {"type": "done", "steps"}

    A consumer that stops iterating ends the generator at its next ``yield``;
    requests already sent to the provider or the store are left to complete.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        tools: Sequence[ToolDescriptor],
        model: str = "gpt-4.1",
        max_steps: int = 5,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.client = client
        self.tools = {tool.name: tool for tool in tools}
        self.model = model
        self.max_steps = max_steps
        self.system_prompt = system_prompt

    def build_messages(self, history: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
        return [{"role": "system", "content": self.system_prompt}] + [
            {"role": message.role, "content": message.content} for message in history
        ]

    async def stream(self, history: Sequence[ChatMessage]) -> AsyncIterator[ChatEvent]:
        """Yield chat events for one answer; errors end the stream with an ``error`` event."""
        messages = self.build_messages(history)
        steps = 0
        try:
            while steps < self.max_steps:
                steps += 1
                outcome = _StepOutcome()
                async for event in self._run_step(messages, outcome):
                    yield event

                if not outcome.tool_calls:
                    break

                messages.append(_assistant_tool_message(outcome))
                for call in outcome.tool_calls:
                    args = _parse_arguments(call)
                    yield {"type": "tool_call", "toolName": call.name, "args": args}
                    result = await self._execute_tool(call, args)
                    yield {"type": "tool_result", "toolName": call.name, "args": args, "result": result}
                    messages.append({"role": "tool", "tool_call_id": call.id, "content": json.dumps(result)})
            else:
                logger.warning(f"Chat stopped after reaching the step limit ({self.max_steps})")
        except DomainError as e:
            logger.error(f"Chat failed at step {steps}: [{e.code}] {e.message}")
            yield {"type": "error", "code": e.code, "message": e.message}
            return
        except Exception:
            logger.exception(f"Chat failed unexpectedly at step {steps}")
            yield {"type": "error", "code": DomainError.code, "message": "Failed to generate a response"}
            return

        yield {"type": "done", "steps": steps}

    async def _run_step(self, messages: List[Dict[str, Any]], outcome: _StepOutcome) -> AsyncIterator[ChatEvent]:
        request: Dict[str, Any] = {"model": self.model, "messages": messages, "stream": True}
        if self.tools:
            request["tools"] = [tool.to_openai_tool() for tool in self.tools.values()]

        pending: Dict[int, _PendingToolCall] = {}
        async with translate_provider_errors():
            stream = await self.client.chat.completions.create(**request)
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta

                if delta.content:
                    outcome.text += delta.content
                    yield {"type": "token", "text": delta.content}

                for tool_delta in delta.tool_calls or []:
                    call = pending.setdefault(tool_delta.index, _PendingToolCall())
                    if tool_delta.id:
                        call.id = tool_delta.id
                    if tool_delta.function is not None:
                        if tool_delta.function.name:
                            call.name += tool_delta.function.name
                        if tool_delta.function.arguments:
                            call.arguments += tool_delta.function.arguments

        outcome.tool_calls = [pending[index] for index in sorted(pending)]

    async def _execute_tool(self, call: _PendingToolCall, args: Dict[str, Any]) -> Dict[str, Any]:
        tool = self.tools.get(call.name)
        if tool is None:
            logger.warning(f"Model requested unknown tool {call.name!r}")
            return {"error": f"Unknown tool: {call.name}"}

        logger.info(f"Invoking tool {call.name}", extra={"tool_args": args})
        try:
            return await tool.invoke(args)
        except InputValidationError as e:
            # Argument errors become the tool result the model sees.
            return {"error": e.message, "details": [detail.to_dict() for detail in e.details]}


def _parse_arguments(call: _PendingToolCall) -> Dict[str, Any]:
    try:
        args = json.loads(call.arguments) if call.arguments else {}
    except json.JSONDecodeError:
        return {}
    return args if isinstance(args, dict) else {}


def _assistant_tool_message(outcome: _StepOutcome) -> Dict[str, Any]:
    return {
        "role": "assistant",
        "content": outcome.text or None,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments or "{}"},
            }
            for call in outcome.tool_calls
        ],
    }

"""
Lexio Assistant

Chat loop that lets the model drive vocabulary exercises through tools. Each
user message is sent with the system prompt, the conversation memory and the
tool definitions; requested tool calls are executed and fed back until the
model answers in text.
"""

from typing import Any, Dict, List, Optional
import json
import logging
import threading
import time

from shared.services.llm_service import LLMService
from lexio.agents.tools import ExerciseTools
from lexio.exceptions import AgentExecutionError
from lexio.prompts.assistant_prompts import LEXIO_SYSTEM_TEMPLATE, MAX_TOOL_ROUNDS_REPLY
from lexio.services.proficiency_store import DEFAULT_SESSION

logger = logging.getLogger("lexio.assistant")


class ConversationMemory:
    """Sliding window of chat messages for one conversation."""

    def __init__(self, max_messages: int = 50):
        self.max_messages = max_messages
        self.messages: List[Dict[str, Any]] = []
        self.lock = threading.Lock()

    def extend(self, messages: List[Dict[str, Any]]) -> None:
        self.messages.extend(messages)
        self._trim()

    def _trim(self) -> None:
        if len(self.messages) <= self.max_messages:
            return
        window = self.messages[-self.max_messages:]
        # A window must open on a user turn; tool results need their assistant call
        while window and window[0].get("role") != "user":
            window = window[1:]
        self.messages = window


class LexioAssistant:
    """Tool-calling tutor. One memory and one lock per conversation id."""

    agent_name = "lexio_assistant"

    def __init__(
        self,
        llm_service: LLMService,
        tools: ExerciseTools,
        max_messages: int = 50,
        max_tool_rounds: int = 8,
        system_prompt: Optional[str] = None,
    ):
        self.llm = llm_service
        self.tools = tools
        self.max_messages = max_messages
        self.max_tool_rounds = max_tool_rounds
        self.system_prompt = system_prompt or LEXIO_SYSTEM_TEMPLATE.render(
            default_count=tools.default_question_count,
            max_count=tools.orchestrator.max_questions,
        )
        self._memories: Dict[str, ConversationMemory] = {}
        self._memories_lock = threading.Lock()

    def _memory(self, conversation_id: str) -> ConversationMemory:
        with self._memories_lock:
            memory = self._memories.get(conversation_id)
            if memory is None:
                memory = ConversationMemory(self.max_messages)
                self._memories[conversation_id] = memory
            return memory

    def history(self, conversation_id: Optional[str] = None) -> List[Dict[str, Any]]:
        memory = self._memory(conversation_id or DEFAULT_SESSION)
        with memory.lock:
            return list(memory.messages)

    def chat(self, message: str, conversation_id: Optional[str] = None) -> str:
        """Process one user message and return the assistant's reply."""
        conversation_id = conversation_id or DEFAULT_SESSION
        memory = self._memory(conversation_id)
        start_time = time.time()

        with memory.lock:
            turn: List[Dict[str, Any]] = [{"role": "user", "content": message}]
            tool_calls_made = 0

            for round_idx in range(self.max_tool_rounds):
                messages = [{"role": "system", "content": self.system_prompt}] + memory.messages + turn
                reply = self.llm.chat(messages, tools=self.tools.definitions)

                tool_calls = getattr(reply, "tool_calls", None) or []
                if not tool_calls:
                    content = getattr(reply, "content", None)
                    if not content:
                        raise AgentExecutionError(self.agent_name, "model returned neither text nor tool calls")
                    turn.append({"role": "assistant", "content": content})
                    memory.extend(turn)
                    logger.info(json.dumps({
                        "agent": self.agent_name,
                        "event": "completed",
                        "conversation_id": conversation_id,
                        "rounds": round_idx + 1,
                        "tool_calls": tool_calls_made,
                        "duration_ms": int((time.time() - start_time) * 1000),
                    }))
                    return content

                turn.append({
                    "role": "assistant",
                    "content": getattr(reply, "content", None) or "",
                    "tool_calls": [
                        {
                            "id": tc.id,
                            "type": "function",
                            "function": {"name": tc.function.name, "arguments": tc.function.arguments},
                        }
                        for tc in tool_calls
                    ],
                })
                for tc in tool_calls:
                    result = self.tools.dispatch(tc.function.name, tc.function.arguments, conversation_id)
                    tool_calls_made += 1
                    turn.append({"role": "tool", "tool_call_id": tc.id, "content": result})

            logger.warning(json.dumps({
                "agent": self.agent_name,
                "event": "max_tool_rounds",
                "conversation_id": conversation_id,
                "rounds": self.max_tool_rounds,
                "tool_calls": tool_calls_made,
            }))
            turn.append({"role": "assistant", "content": MAX_TOOL_ROUNDS_REPLY})
            memory.extend(turn)
            return MAX_TOOL_ROUNDS_REPLY

"""Lexio chat assistant and its tools."""
from lexio.agents.tools import ExerciseTools, TOOL_DEFINITIONS
from lexio.agents.assistant import LexioAssistant, ConversationMemory

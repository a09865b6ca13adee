"""
Custom Exception Hierarchy for the Lexio Module

Exception Hierarchy:
    LexioError (base)
    ├── LLMError
    │   └── LLMServiceError
    ├── AgentError
    │   ├── AgentExecutionError
    │   └── ToolExecutionError
    └── PromptError
        └── PromptTemplateError
"""

from typing import Optional


class LexioError(Exception):
    """Base exception for all Lexio errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# LLM Errors

class LLMError(LexioError):
    """Base exception for LLM-related errors."""
    pass


class LLMServiceError(LLMError):
    """Raised when LLM API call fails."""

    def __init__(self, message: str, model_name: Optional[str] = None, attempts: Optional[int] = None):
        super().__init__(message)
        self.model_name = model_name
        self.attempts = attempts


# Agent Errors

class AgentError(LexioError):
    """Base exception for agent-related errors."""

    def __init__(self, agent_name: str, message: str, details: Optional[dict] = None):
        formatted_message = f"[{agent_name}] {message}"
        super().__init__(formatted_message, details)
        self.agent_name = agent_name


class AgentExecutionError(AgentError):
    """Raised when the assistant loop cannot produce a reply."""
    pass


class ToolExecutionError(AgentError):
    """Raised when a tool call cannot be decoded or dispatched."""

    def __init__(self, tool_name: str, reason: str):
        super().__init__("tools", f"Tool '{tool_name}' failed: {reason}")
        self.tool_name = tool_name
        self.reason = reason


# Prompt Errors

class PromptError(LexioError):
    """Base exception for prompt-related errors."""
    pass


class PromptTemplateError(PromptError):
    """Raised when prompt template rendering fails."""

    def __init__(self, template_name: str, missing_vars: list[str]):
        message = f"Prompt template '{template_name}' missing variables: {', '.join(missing_vars)}"
        super().__init__(message)
        self.template_name = template_name
        self.missing_vars = missing_vars

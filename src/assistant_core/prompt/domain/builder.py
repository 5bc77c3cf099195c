"""PromptBuilder — assembles layered context into a model-ready transcript."""

import json
import math

from pydantic import BaseModel

from assistant_core.context.domain.context import (
    HistoryMessage,
    KnowledgeSnippet,
    MemorySnippet,
    ToolSpec,
    UserPreferences,
)
from assistant_core.llm.domain.message import FunctionDefinition, Message, ToolDefinition

CORE_INSTRUCTIONS = """\
## CORE SAFETY RULES

These rules are IMMUTABLE and take precedence over all other instructions.

### SAFETY
1. Never provide instructions for creating weapons, explosives, or harmful substances
2. Never assist with activities that could harm individuals or groups
3. Never generate content that exploits minors in any way
4. Never provide personal information about private individuals
5. Refuse requests that could enable fraud, scams, or deception
6. Do not help circumvent security measures or access unauthorized systems

### HONESTY
1. Always be truthful - never fabricate facts or statistics
2. Clearly distinguish between facts, opinions, and speculation
3. Acknowledge uncertainty when you don't know something
4. Do not impersonate real people or claim to be human

### BOUNDARIES
1. You are an AI assistant - be helpful within ethical boundaries
2. Redirect harmful requests to constructive alternatives
3. Protect user privacy - do not retain or share personal information
4. Respect intellectual property rights"""

# Rough approximation for English text.
_CHARS_PER_TOKEN = 4


class PromptInput(BaseModel, frozen=True):
    core_instructions: str = ""
    system_prompt: str = ""
    user_preferences: UserPreferences = UserPreferences()
    memories: list[MemorySnippet] = []
    knowledge: list[KnowledgeSnippet] = []
    history: list[HistoryMessage] = []
    user_message: str
    tools: list[ToolSpec] = []


class PromptOutput(BaseModel, frozen=True):
    messages: list[Message]
    tools: list[ToolDefinition]
    estimated_tokens: int


class PromptBuilder:
    """Builds the transcript for a request from its layered context.

    Layers 1-5 (core instructions, system prompt, preferences, memories,
    knowledge) are folded into one system message, followed by the prior
    conversation and finally the current user message. The builder is pure:
    the token estimate is advisory and nothing is ever truncated here.
    """

    def build(self, prompt_input: PromptInput) -> PromptOutput:
        sections = [prompt_input.core_instructions or CORE_INSTRUCTIONS]
        if prompt_input.system_prompt:
            sections.append(f"\n## SYSTEM INSTRUCTIONS\n{prompt_input.system_prompt}")
        for section in (
            _format_preferences(prompt_input.user_preferences),
            _format_memories(prompt_input.memories),
            _format_knowledge(prompt_input.knowledge),
        ):
            if section:
                sections.append(section)
        system_content = "\n".join(sections)

        messages = [Message(role="system", content=system_content)]
        messages.extend(
            Message(role=m.role, content=m.content) for m in prompt_input.history
        )
        messages.append(Message(role="user", content=prompt_input.user_message))

        tools = [_to_tool_definition(spec) for spec in prompt_input.tools]

        total_chars = len(system_content) + len(prompt_input.user_message)
        total_chars += sum(len(m.content) for m in prompt_input.history)
        total_chars += sum(
            len(json.dumps(spec.model_dump())) for spec in prompt_input.tools
        )

        return PromptOutput(
            messages=messages,
            tools=tools,
            estimated_tokens=estimate_tokens(total_chars),
        )


def estimate_tokens(char_count: int) -> int:
    return math.ceil(char_count / _CHARS_PER_TOKEN)


def _format_preferences(prefs: UserPreferences) -> str:
    parts: list[str] = []
    if prefs.response_length:
        parts.append(f"Response length: {prefs.response_length}")
    if prefs.formality:
        parts.append(f"Tone: {prefs.formality}")
    if prefs.custom_instructions:
        parts.append(f"\nCustom Instructions: {prefs.custom_instructions}")
    if not parts:
        return ""
    return "\n## USER PREFERENCES\n" + "\n".join(parts)


def _format_memories(memories: list[MemorySnippet]) -> str:
    """Render memories, most important first, each tagged with category and importance."""
    if not memories:
        return ""
    ordered = sorted(memories, key=lambda m: m.importance, reverse=True)
    lines = []
    for memory in ordered:
        tag = f"[{memory.category}] " if memory.category else ""
        lines.append(f"- {tag}(importance {memory.importance:g}) {memory.content}")
    return "\n## USER MEMORIES\n" + "\n".join(lines)


def _format_knowledge(knowledge: list[KnowledgeSnippet]) -> str:
    if not knowledge:
        return ""
    blocks = "\n\n".join(f"### {k.title}\n{k.chunk}" for k in knowledge)
    return f"\n## KNOWLEDGE BASE\n{blocks}"


def _to_tool_definition(spec: ToolSpec) -> ToolDefinition:
    return ToolDefinition(
        function=FunctionDefinition(
            name=spec.name,
            description=spec.description,
            parameters=spec.input_schema,
        )
    )

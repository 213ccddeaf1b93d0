"""Two-phase tool-call orchestration for a batch of prompts.

For each prompt the orchestrator runs one pass of a small state machine:

    AWAIT_FIRST_COMPLETION -> EXECUTING_TOOLS -> AWAIT_SECOND_COMPLETION -> DONE
    AWAIT_FIRST_COMPLETION -> DONE                      (no tool calls)

The first completion is offered the full tool catalog; the second one is
not, so a prompt gets at most one round of tool use. Prompts are processed
strictly one after another, and a failure ends only the prompt it occurred in.
"""

import logging
import uuid
from dataclasses import replace
from enum import Enum
from typing import Any, Sequence

from octolens.llm.client import ChatClient
from octolens.llm.types import CompletionResult
from octolens.services.response_mapper import Outcome, PromptFailure, error_message
from octolens.sessions.transcript import Transcript
from octolens.sessions.types import (
    AssistantMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
)
from octolens.tools.executor import ToolExecutor
from octolens.tools.registry import tool_specs

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response."
SKIPPED_TOOL_CALL = "Error: not executed after an earlier tool call failed"


class OrchestratorState(str, Enum):
    """Where the orchestrator is within one prompt's pass."""

    AWAIT_FIRST_COMPLETION = "await_first_completion"
    EXECUTING_TOOLS = "executing_tools"
    AWAIT_SECOND_COMPLETION = "await_second_completion"
    DONE = "done"


class CompletionOrchestrator:
    """Drives the request/tool/response cycle with the model.

    Attributes:
        chat_client: Client for the model provider
        executor: Executor for model-requested tool calls
        model: The model name to request completions from
        options: Completion options forwarded verbatim to every request
        reset_transcript_per_prompt: Reset the transcript to its system message
            before each prompt instead of sharing it across the batch
        state: The current state of the pass in progress
    """

    def __init__(
        self,
        chat_client: ChatClient,
        executor: ToolExecutor,
        model: str,
        options: dict[str, Any] | None = None,
        reset_transcript_per_prompt: bool = False,
    ) -> None:
        self.chat_client = chat_client
        self.executor = executor
        self.model = model
        self.options = dict(options or {})
        self.reset_transcript_per_prompt = reset_transcript_per_prompt
        self.tools = tool_specs()
        self.state = OrchestratorState.DONE

    def _transition(self, state: OrchestratorState) -> None:
        logger.debug(f"Orchestrator state: {self.state.value} -> {state.value}")
        self.state = state

    async def run_batch(
        self, transcript: Transcript, prompts: Sequence[str]
    ) -> list[Outcome]:
        """Process every prompt in order.

        Args:
            transcript: The run's transcript, opened with the system message
            prompts: The user prompts, in order

        Returns:
            list: One outcome per prompt, a CompletionResult or a PromptFailure
        """
        outcomes: list[Outcome] = []

        for index, prompt in enumerate(prompts):
            if self.reset_transcript_per_prompt:
                transcript.reset()
            try:
                outcomes.append(await self.process_prompt(transcript, prompt))
                logger.info(f"Prompt {index + 1}/{len(prompts)} completed")
            except Exception as e:
                logger.error(f"Prompt {index + 1}/{len(prompts)} failed: {e}")
                outcomes.append(PromptFailure(e))
            finally:
                self.state = OrchestratorState.DONE

        return outcomes

    async def process_prompt(
        self, transcript: Transcript, prompt: str
    ) -> CompletionResult:
        """Run one prompt through the two-phase exchange.

        Args:
            transcript: The transcript to extend
            prompt: The user prompt

        Returns:
            CompletionResult: The completion holding this prompt's answer

        Raises:
            Exception: Any provider or tool failure; the caller records it per prompt
        """
        transcript.append(UserMessage(content=prompt))

        self._transition(OrchestratorState.AWAIT_FIRST_COMPLETION)
        first = await self.chat_client.complete(
            model=self.model,
            messages=transcript.snapshot(),
            tools=self.tools,
            options=self.options,
        )
        tool_calls = _with_call_ids(first.tool_calls)
        transcript.append(
            AssistantMessage(
                content=first.content or NO_RESPONSE,
                model=first.model,
                tool_calls=list(tool_calls),
            )
        )

        if not tool_calls:
            self._transition(OrchestratorState.DONE)
            return first

        self._transition(OrchestratorState.EXECUTING_TOOLS)
        logger.info(f"Model requested {len(tool_calls)} tool call(s)")
        await self._execute_tool_calls(transcript, tool_calls)

        self._transition(OrchestratorState.AWAIT_SECOND_COMPLETION)
        second = await self.chat_client.complete(
            model=self.model,
            messages=transcript.snapshot(),
            options=self.options,
        )
        if second.tool_calls:
            logger.warning(
                f"Ignoring {len(second.tool_calls)} tool call(s) in the second completion"
            )
        transcript.append(
            AssistantMessage(content=second.content or NO_RESPONSE, model=second.model)
        )

        self._transition(OrchestratorState.DONE)
        return second

    async def _execute_tool_calls(
        self, transcript: Transcript, tool_calls: Sequence[ToolCallRequest]
    ) -> None:
        """Execute tool calls in order, appending one tool message per call.

        If a call fails, every call that has not been answered yet gets an
        error tool message before the failure is re-raised, so each request
        in the transcript keeps its correlated result.
        """
        for index, call in enumerate(tool_calls):
            try:
                result = await self.executor.execute(call.name, call.arguments)
            except Exception as e:
                logger.error(f"Tool call {call.name} ({call.id}) failed: {e}")
                transcript.append(_tool_message(call, f"Error: {error_message(e)}"))
                for skipped in tool_calls[index + 1 :]:
                    transcript.append(_tool_message(skipped, SKIPPED_TOOL_CALL))
                raise

            transcript.append(_tool_message(call, result))
            logger.debug(
                f"Tool call {call.name} ({call.id}) returned {len(result)} characters"
            )


def _with_call_ids(tool_calls: Sequence[ToolCallRequest]) -> tuple[ToolCallRequest, ...]:
    """Give every tool call an id so its result can be correlated."""
    return tuple(
        call if call.id else replace(call, id=f"call_{uuid.uuid4().hex[:10]}")
        for call in tool_calls
    )


def _tool_message(call: ToolCallRequest, content: str) -> ToolMessage:
    return ToolMessage(content=content, tool_call_id=call.id, name=call.name or "unknown")

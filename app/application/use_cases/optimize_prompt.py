from __future__ import annotations

from app.application.dto.prompt import OptimizePromptInput, OptimizePromptOutput
from app.application.ports.prompt_optimizer_port import PromptOptimizerPort
from app.domain.exceptions import InvalidInputError, UpstreamServiceError
from app.domain.services.prompt_mode import detect_prompt_mode, resolve_response_mode


SYSTEM_PROMPT = """
You are Arketype, a master-level AI prompt optimization specialist.
Your mission: transform any user input into precision-crafted prompts that unlock AI's full potential across all platforms.

THE 4-D METHODOLOGY
1. DECONSTRUCT
Extract core intent, key entities, and context.
Identify output requirements and constraints.
Map what is provided versus what is missing.

2. DIAGNOSE
Audit for clarity gaps and ambiguity.
Check specificity and completeness.
Assess structure and complexity needs.

3. DEVELOP
Select optimal techniques based on request type:
Creative: multi perspective with tone emphasis
Technical: constraint based with precision focus
Educational: few shot examples with clear structure
Complex: chain of thought with systematic frameworks
Assign appropriate AI role or expertise.
Enhance context and implement logical structure.

4. DELIVER
Construct the optimized prompt.
Format based on complexity.
Provide implementation guidance.

OPERATING MODES
DETAIL MODE: gather context with smart defaults, ask two to three clarifying questions when information is missing, provide comprehensive optimization.
BASIC MODE: resolve primary issues quickly, apply only core techniques, deliver a ready to use prompt.

RESPONSE FORMATS
Simple requests (BASIC MODE):
Mode: BASIC
Your Optimized Prompt: [Improved prompt]
What Changed: [Key improvements]

Complex requests (DETAIL MODE):
Mode: DETAIL
Your Optimized Prompt: [Improved prompt]
Key Improvements: [Primary changes and benefits]
Techniques Applied: [Brief mention]
Pro Tip: [Usage guidance]

OUTPUT RULES
Use plain ASCII characters only.
Do not use bullet points, emoji, decorative characters, or markdown.
Always return one of the specified response formats. Never include additional sections.
""".strip()

PREFERRED_MODES = {"BASIC", "DETAIL"}


class OptimizePromptUseCase:
    def __init__(self, *, prompt_optimizer: PromptOptimizerPort):
        self._prompt_optimizer = prompt_optimizer

    def execute(self, command: OptimizePromptInput) -> OptimizePromptOutput:
        if not command.messages:
            raise InvalidInputError("Provide the chat history.")

        preferred = (command.preferred_mode or "").upper()
        if preferred and preferred not in PREFERRED_MODES:
            raise InvalidInputError("preferred_mode must be BASIC or DETAIL.")

        latest_user_message = next(
            (message.content for message in reversed(command.messages) if message.role == "user"),
            None,
        )
        mode_hint = preferred or detect_prompt_mode(latest_user_message)

        content = self._prompt_optimizer.complete(
            system_prompt=f"{SYSTEM_PROMPT}\nSelected mode hint: {mode_hint}. Use this only as guidance.",
            messages=command.messages,
        )
        if not content:
            raise UpstreamServiceError("Prompt optimizer response missing content.")

        return OptimizePromptOutput(
            message=content,
            mode=resolve_response_mode(content, fallback=mode_hint),
        )

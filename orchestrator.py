"""
Multi-model generation with graceful degradation.

For each candidate model, in order:
  vision call (prompt + image) -> on failure, text-only call -> on failure, next model.
When every candidate has failed the static template for the framework is returned,
so a well-formed request always gets a usable result.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Sequence

from errors import ProviderError
from models import (
    FALLBACK_PROVIDER,
    AttemptMode,
    AttemptOutcome,
    Feature,
    GenerationResult,
    ProviderAttempt,
)
from prompts import USER_INSTRUCTION, PromptSpec
from providers import Backend
from templates import get_template

log = logging.getLogger("design2code")

TEXT_ONLY_USER_INSTRUCTION = "Generate the component described in the instructions now."


class State(Enum):
    SELECT_MODEL = "select-model"
    ATTEMPT_VISION = "attempt-vision"
    ATTEMPT_TEXT_ONLY = "attempt-text-only"
    NEXT_MODEL = "next-model"
    DONE = "done"
    ALL_EXHAUSTED = "all-exhausted"


TERMINAL_STATES = (State.DONE, State.ALL_EXHAUSTED)


class Orchestrator:
    def __init__(self, backend: Backend, models: Sequence[str], deadline: float = None):
        self.backend = backend
        self.models = list(models)
        self.deadline = deadline

    async def generate(self, spec: PromptSpec, features: List[Feature] = ()) -> GenerationResult:
        if not self.backend.configured:
            log.warning(f"{self.backend.name} is not configured, serving the {spec.framework.value} template")
            return fallback_result(spec, features, note=f"No {self.backend.name} API key configured. Showing a sample template instead.")

        run = _Run(self.backend, self.models, spec)
        try:
            await asyncio.wait_for(run.execute(), timeout=self.deadline)
        except asyncio.TimeoutError:
            log.warning(f"Request deadline of {self.deadline:g}s reached after {len(run.attempts)} attempt(s)")
            run.state = State.ALL_EXHAUSTED
            run.last_error = f"no model answered within {self.deadline:g}s"
        if run.state is State.ALL_EXHAUSTED:
            log.warning(f"All {len(self.models)} model(s) failed, serving the {spec.framework.value} template")
            note = "AI generation is currently unavailable. Showing a sample template instead."
            if run.last_error:
                note += f" Last error: {run.last_error}"
            return fallback_result(spec, features, note=note)

        return GenerationResult(
            code=run.code,
            framework=spec.framework,
            features=list(features),
            provider=self.backend.name,
            model=run.model,
            vision=run.vision_used,
            note=None if run.vision_used else "The model could not use the uploaded image; generated a generic component instead.",
        )


class _Run:
    """State of one request's walk through the candidate list. Never shared."""

    def __init__(self, backend: Backend, models: List[str], spec: PromptSpec):
        self.backend = backend
        self.models = models
        self.spec = spec
        self.state = State.SELECT_MODEL
        self.index = 0
        self.attempts: List[ProviderAttempt] = []
        self.code: Optional[str] = None
        self.vision_used = False
        self.last_error: Optional[str] = None

    @property
    def model(self) -> str:
        return self.models[self.index]

    async def execute(self) -> None:
        handlers = {
            State.SELECT_MODEL: self._select_model,
            State.ATTEMPT_VISION: self._attempt_vision,
            State.ATTEMPT_TEXT_ONLY: self._attempt_text_only,
            State.NEXT_MODEL: self._next_model,
        }
        while self.state not in TERMINAL_STATES:
            self.state = await handlers[self.state]()

    async def _select_model(self) -> State:
        if self.index >= len(self.models):
            if self.attempts:
                self.attempts[-1].outcome = AttemptOutcome.EXHAUSTED
            return State.ALL_EXHAUSTED
        if self.spec.image is None:
            return State.ATTEMPT_TEXT_ONLY
        return State.ATTEMPT_VISION

    async def _attempt_vision(self) -> State:
        log.info(f"Trying {self.backend.name}/{self.model} with vision...")
        try:
            self.code = await self.backend.generate(self.model, self.spec.text, USER_INSTRUCTION, image=self.spec.image)
        except ProviderError as e:
            self._record(AttemptMode.VISION, AttemptOutcome.RECOVERABLE_FAILURE, e)
            log.warning(f"  Vision call failed on {self.model}: {e.message}; retrying text-only")
            return State.ATTEMPT_TEXT_ONLY
        self._record(AttemptMode.VISION, AttemptOutcome.SUCCESS)
        self.vision_used = True
        log.info(f"  Done! {self.model} returned {len(self.code)} chars")
        return State.DONE

    async def _attempt_text_only(self) -> State:
        log.info(f"Trying {self.backend.name}/{self.model} text-only...")
        try:
            self.code = await self.backend.generate(self.model, self.spec.text_only(), TEXT_ONLY_USER_INSTRUCTION)
        except ProviderError as e:
            self._record(AttemptMode.TEXT_ONLY, AttemptOutcome.RECOVERABLE_FAILURE, e)
            log.warning(f"  Text-only call failed on {self.model}: {e.message}")
            return State.NEXT_MODEL
        self._record(AttemptMode.TEXT_ONLY, AttemptOutcome.SUCCESS)
        log.info(f"  Done! {self.model} returned {len(self.code)} chars (no image)")
        return State.DONE

    async def _next_model(self) -> State:
        self.index += 1
        return State.SELECT_MODEL

    def _record(self, mode: AttemptMode, outcome: AttemptOutcome, error: ProviderError = None) -> None:
        message = error.message if error else None
        self.attempts.append(ProviderAttempt(self.model, mode, outcome, message))
        if message:
            self.last_error = message


def fallback_result(spec: PromptSpec, features, note: str) -> GenerationResult:
    return GenerationResult(
        code=get_template(spec.framework),
        framework=spec.framework,
        features=list(features),
        provider=FALLBACK_PROVIDER,
        model="none",
        vision=False,
        note=note,
    )

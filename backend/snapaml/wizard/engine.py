"""Wizard step engine.

A `WizardSession` is the explicitly owned state of one onboarding run:
the step pointer, the accumulated draft sections, and the gateway used to
persist each step. Nothing is global; whoever drives the wizard (an HTTP
handler, a test, a client) creates a session and passes it around.

States: Step1 → Step2 → Step3 → Step4 → Complete

  - forward transitions happen only through a successful `complete_step`
  - `go_back` / `set_current_step` move the pointer without touching
    persisted data or completion flags
  - `Complete` is terminal; the caller leaves the wizard

Hydration (resumable variants): the session resumes at the first step
whose completion flag is false, scanning 1..4 in order. A fully completed
submission raises `WizardAlreadyCompleted` instead of resuming.
"""

import logging
from typing import Sequence

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from snapaml.middleware.exceptions import BusinessLogicError, ConflictError, ValidationError
from snapaml.schemas.wizard import StepInfo, WizardProgress
from snapaml.wizard.gateway import SubmissionGateway
from snapaml.wizard.variants import WizardVariant

logger = logging.getLogger(__name__)


class WizardAlreadyCompleted(ConflictError):
    def __init__(self):
        super().__init__(
            "Onboarding is already complete",
            error_code="WIZARD_COMPLETED",
        )


def resume_step(flags: Sequence[bool]) -> int | None:
    """1 + the number of leading completed steps; None once every step is done."""
    leading = 0
    for done in flags:
        if not done:
            break
        leading += 1
    if leading == len(flags):
        return None
    return leading + 1


class WizardSession:
    def __init__(self, variant: WizardVariant, gateway: SubmissionGateway):
        self.variant = variant
        self.gateway = gateway
        self.current_step = 1
        self.sections: dict[str, dict] = self._empty_sections()
        self.is_complete = False

    def _empty_sections(self) -> dict[str, dict]:
        return {step.section: {} for step in self.variant.steps}

    # ── Navigation ──────────────────────────────────────────

    def set_current_step(self, step: int) -> None:
        self.variant.step(step)  # range check
        self.current_step = step

    def go_back(self) -> None:
        if self.current_step > 1:
            self.set_current_step(self.current_step - 1)

    def ensure_reachable(self, step: int) -> None:
        """Reject a step whose predecessors are not all completed."""
        self.variant.step(step)
        if step > self.current_step:
            missing = self.variant.steps[self.current_step - 1:step - 1]
            names = [f"Step {s.number} ({s.title})" for s in missing]
            raise BusinessLogicError(
                f"Complete these first: {', '.join(names)}",
                error_code="STEP_PREREQUISITES",
            )

    # ── Draft mutation ──────────────────────────────────────

    def update_section(self, section: str, data: dict) -> None:
        """Shallow-merge `data` into a section's draft."""
        self.variant.section(section)
        self.sections[section] = {**self.sections[section], **data}

    # ── Submission ──────────────────────────────────────────

    def validate(self, step: int, data: BaseModel | dict) -> BaseModel:
        schema = self.variant.step(step).schema
        if isinstance(data, schema):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            return schema.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

    async def submit_step(self, step: int, data: BaseModel | dict) -> BaseModel:
        """Validate and persist one step. Leaves the draft and pointer alone."""
        if self.is_complete:
            raise WizardAlreadyCompleted()
        validated = self.validate(step, data)
        await self.gateway.submit(step, validated)
        return validated

    async def complete_step(self, step: int, data: BaseModel | dict) -> None:
        """Persist a step, merge it into the draft, and advance.

        On any failure the draft and pointer stay exactly as they were, so
        the same data can simply be resubmitted.
        """
        validated = await self.submit_step(step, data)
        definition = self.variant.step(step)
        self.update_section(definition.section, validated.model_dump())

        if step == self.variant.total_steps:
            self.is_complete = True
            self.sections = self._empty_sections()
            logger.info(
                "%s wizard completed for user %s",
                self.variant.name.upper(),
                getattr(self.gateway.user, "id", None),
            )
        else:
            self.set_current_step(step + 1)

    # ── Hydration ───────────────────────────────────────────

    def hydrate(self, submission) -> int:
        """Resume from a persisted (possibly partial) submission.

        Returns the step to render. Raises WizardAlreadyCompleted when all
        steps are done, since the wizard must not be re-entered.
        """
        step = resume_step(self.variant.completion_flags(submission))
        if step is None:
            raise WizardAlreadyCompleted()

        if submission is not None:
            for definition in self.variant.steps[:step - 1]:
                self.update_section(
                    definition.section,
                    self.variant.section_values(definition, submission),
                )
        self.set_current_step(step)
        return step


def build_progress(variant: WizardVariant, submission) -> WizardProgress:
    """Progress snapshot computed from the persisted completion flags."""
    flags = variant.completion_flags(submission)
    step = resume_step(flags)
    sections = {}
    if submission is not None:
        sections = {
            definition.section: variant.section_values(definition, submission)
            for definition, done in zip(variant.steps, flags)
            if done
        }
    return WizardProgress(
        variant=variant.name,
        current_step=step,
        total_steps=variant.total_steps,
        completed_steps=[n for n, done in enumerate(flags, start=1) if done],
        is_complete=step is None,
        sections=sections,
        steps=[
            StepInfo(number=s.number, section=s.section, title=s.title, description=s.description)
            for s in variant.steps
        ],
    )

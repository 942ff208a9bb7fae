"""Submission persistence gateway.

Translates one step's validated data into a partial upsert against the
caller's single submission row:

  - only the columns owned by the step are written, plus its
    `step_N_completed` flag, so other steps' answers are never cleared
  - dates are stored as canonical `YYYY-MM-DD` strings
  - `INSERT ... ON CONFLICT (user_id) DO UPDATE` makes every submit
    idempotent, which is also the retry path after a transient failure
  - `completed_at` is stamped once every `step_N_completed` flag is true,
    whatever order the steps arrived in
"""

import logging
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snapaml.auth.deps import CurrentUser
from snapaml.database import utcnow
from snapaml.middleware.exceptions import NotAuthenticated, PersistenceError
from snapaml.schemas.validators import canonical_date
from snapaml.wizard.variants import WizardVariant

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def canonical_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return canonical_date(value)
    return value


def build_payload(variant: WizardVariant, step_number: int, data: BaseModel | dict) -> dict:
    """Column → value mapping for one step, including its completion flag."""
    step = variant.step(step_number)
    values = data.model_dump() if isinstance(data, BaseModel) else dict(data)

    payload = {
        column: canonical_value(values[field])
        for field, column in step.field_map.items()
        if field in values
    }
    payload[step.completion_flag] = True
    return payload


class SubmissionGateway:
    """Reads and upserts the caller's submission row for one wizard variant."""

    def __init__(self, db: AsyncSession, user: CurrentUser | None, variant: WizardVariant):
        self.db = db
        self.user = user
        self.variant = variant

    def _require_user(self) -> CurrentUser:
        if self.user is None:
            raise NotAuthenticated()
        return self.user

    def _completion_stmt(self, user_id: str):
        """Mark the row completed only when all of its step flags are set."""
        model = self.variant.model
        flags = [getattr(model, step.completion_flag).is_(True) for step in self.variant.steps]
        now = utcnow()
        return (
            update(model)
            .where(model.user_id == user_id, model.completed_at.is_(None), *flags)
            .values(completed_at=now, status="completed", updated_at=now)
            .execution_options(synchronize_session=False)
        )

    async def load(self):
        """Return the caller's submission, or None if they haven't started."""
        user = self._require_user()
        model = self.variant.model
        try:
            result = await self.db.execute(
                select(model)
                .where(model.user_id == user.id)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to load %s submission for user %s", self.variant.name, user.id)
            raise PersistenceError("Could not load your submission. Please try again.") from exc
        return result.scalar_one_or_none()

    async def submit(self, step_number: int, data: BaseModel | dict) -> None:
        user = self._require_user()
        model = self.variant.model
        payload = build_payload(self.variant, step_number, data)

        insert = _INSERTS.get(self.db.get_bind().dialect.name, pg_insert)
        stmt = insert(model).values(user_id=user.id, **payload)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={**payload, "updated_at": utcnow()},
        )

        try:
            await self.db.execute(stmt)
            await self.db.execute(self._completion_stmt(user.id))
            await self.db.flush()
        except SQLAlchemyError as exc:
            logger.exception(
                "Failed to save %s step %d for user %s", self.variant.name, step_number, user.id
            )
            raise PersistenceError() from exc

        logger.info("Saved %s step %d for user %s", self.variant.name, step_number, user.id)

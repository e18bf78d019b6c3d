"""Route parsed actions to their executors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

from pydantic import ValidationError

from heyweb.core.logger import get_logger
from heyweb.executors.base import ActionExecutor, ExecutorContext, SkipAction
from heyweb.schemas.actions import coerce_action

logger = get_logger("heyweb.dispatcher")

OutcomeStatus = Literal["ok", "skipped", "failed"]


@dataclass(frozen=True)
class DispatchOutcome:
    action: Any
    status: OutcomeStatus
    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class ActionDispatcher:
    def __init__(self) -> None:
        self._executors: dict[str, ActionExecutor] = {}

    def register(self, executor: ActionExecutor) -> None:
        self._executors[executor.name] = executor

    def executor_for(self, action_type: str) -> ActionExecutor:
        if action_type not in self._executors:
            raise KeyError(f"Executor not found: {action_type}")
        return self._executors[action_type]

    def dispatch(self, actions: Iterable[Any] | None, context: ExecutorContext) -> list[DispatchOutcome]:
        """Run each action in order; one failure never stops the rest."""
        outcomes: list[DispatchOutcome] = []
        for raw in actions or []:
            try:
                action = coerce_action(raw)
            except ValidationError as exc:
                logger.warning("dropping unrecognized action %r: %s", raw, exc.errors()[:1])
                outcomes.append(DispatchOutcome(action=raw, status="skipped", error="unrecognized action"))
                continue

            try:
                executor = self.executor_for(action.type)
            except KeyError as exc:
                logger.warning("no executor registered for %s", action.type)
                outcomes.append(DispatchOutcome(action=action, status="skipped", error=str(exc)))
                continue

            try:
                result = executor.run(action, context)
            except SkipAction as exc:
                logger.info("skipped %s: %s", action.type, exc)
                outcomes.append(DispatchOutcome(action=action, status="skipped", error=str(exc)))
            except Exception as exc:
                logger.exception("executor %s failed", executor.name)
                outcomes.append(DispatchOutcome(action=action, status="failed", error=str(exc)))
            else:
                outcomes.append(DispatchOutcome(action=action, status="ok", result=result))
        return outcomes

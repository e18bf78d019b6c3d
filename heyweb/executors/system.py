from __future__ import annotations

from typing import Any

from heyweb.executors.base import ExecutorContext, SkipAction
from heyweb.schemas.actions import SystemAction

EXPORT_FILENAME = "heyweb-conversation.json"


class SystemExecutor:
    name = "system"

    def run(self, action: SystemAction, context: ExecutorContext) -> Any:
        if action.command == "open_settings":
            if context.on_open_settings is None:
                raise SkipAction("no settings handler")
            context.on_open_settings()
            return {"success": True}

        session = context.session
        if session is None:
            raise SkipAction("no conversation session")
        if action.command == "clear_history":
            session.clear()
            return {"success": True}
        path = session.export(context.export_dir / EXPORT_FILENAME)
        return {"success": True, "path": str(path)}

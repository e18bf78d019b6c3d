from heyweb.executors.navigation import NavigationExecutor
from heyweb.executors.search import SearchExecutor
from heyweb.executors.system import SystemExecutor
from heyweb.executors.web_automation import WebAutomationExecutor

__all__ = [
    "WebAutomationExecutor",
    "SearchExecutor",
    "NavigationExecutor",
    "SystemExecutor",
]

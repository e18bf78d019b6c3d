from heyweb.assistant.dispatcher import ActionDispatcher
from heyweb.executors import (
    NavigationExecutor,
    SearchExecutor,
    SystemExecutor,
    WebAutomationExecutor,
)


def build_dispatcher() -> ActionDispatcher:
    dispatcher = ActionDispatcher()
    dispatcher.register(WebAutomationExecutor())
    dispatcher.register(SearchExecutor())
    dispatcher.register(NavigationExecutor())
    dispatcher.register(SystemExecutor())
    return dispatcher

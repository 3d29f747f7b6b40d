import cmd
import logging

import click

from gourmand.core.errors import GourmandError
from gourmand.services.conversation import ConversationState, Emit, say

logger = logging.getLogger(__name__)


class RecipeShell(cmd.Cmd):
    """Interactive prompt; ``cmd`` supplies readline line editing and ``help``."""

    intro = None

    def __init__(self, state: ConversationState, emit: Emit = click.echo, **kwargs) -> None:
        super().__init__(**kwargs)
        self.state = state
        self.emit = emit
        self.prompt = f"[{state.model_id}]\n> "

    def do_say(self, arg: str) -> bool:
        """say <prompt>: send the next turn of the conversation to the model"""
        prompt = arg.strip()
        if not prompt:
            self.emit("usage: say <prompt>")
            return False
        try:
            say(self.state, prompt, self.emit)
        except GourmandError as exc:
            logger.warning("shell_say", extra={"outcome": "failure", "error_class": exc.error_class})
            self.emit(f"error: {exc}")
        except KeyboardInterrupt:
            self.emit("interrupted")
        self.emit("")
        return False

    def do_quit(self, arg: str) -> bool:
        """quit: leave the shell"""
        return True

    do_exit = do_quit

    def do_EOF(self, arg: str) -> bool:
        self.emit("")
        return True

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> bool:
        command = line.split(maxsplit=1)[0] if line.strip() else line
        self.emit(f"unknown command: {command} (try: say <prompt>, help, quit)")
        return False

import logging

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .exceptions import NotFoundError

logger = logging.getLogger(__name__)


class TerminalMenu:
    """Numbered single-choice menu on the terminal."""

    def __init__(self, console=None, stream=None):
        self.console = console or Console()
        self.stream = stream

    def select(self, prompt, items, default=0):
        if not items:
            raise ValueError("Cannot select from an empty list")

        width = len(str(len(items)))
        self.console.print(f"[bold]{escape(prompt)}[/bold]")
        for index, item in enumerate(items, start=1):
            marker = ">" if index - 1 == default else " "
            self.console.print(f"{marker} {index:>{width}}) {escape(item)}", highlight=False)

        answer = Prompt.ask(
            "Choice",
            choices=[str(i) for i in range(1, len(items) + 1)],
            default=str(default + 1),
            show_choices=False,
            console=self.console,
            stream=self.stream,
        )
        return int(answer) - 1


def pick_one(
    explicit,
    candidates,
    label,
    prompt,
    chooser,
    what,
    auto_single=False,
):
    """
    Return `explicit` when given, otherwise let the operator choose.

    `candidates` is only called when a choice is needed. `label` turns a
    candidate into its menu text; the candidate at the chosen index is
    returned, so labels and values can never drift apart.
    """
    if explicit is not None:
        logger.debug("Using explicit %s: %s", what, explicit)
        return explicit

    options = list(candidates())
    if not options:
        raise NotFoundError(what)

    if auto_single and len(options) == 1:
        logger.debug("Only one %s available, selecting it", what)
        return options[0]

    index = chooser.select(prompt, [label(o) for o in options], default=0)
    chosen = options[index]
    logger.debug("Selected %s: %s", what, label(chosen))
    return chosen

"""Screen for solving the active challenge."""

import logging
from pathlib import Path
from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label, Log, Static, TextArea

from ...challenges.engine import CheckOutcome, CheckStatus
from ...challenges.types import Challenge

logger = logging.getLogger(__name__)


class ChallengeScreen(Screen):
    """Editor, prompt and run output for one challenge."""

    CSS = """
    #challenge-area {
        height: 1fr;
    }

    #prompt {
        height: auto;
        padding: 1;
        background: $primary-darken-2;
        border: solid $primary;
        margin: 1 0;
    }

    #editor {
        height: 2fr;
    }

    #run-log {
        height: 1fr;
        border: solid $primary;
    }

    #challenge-actions {
        height: auto;
        padding: 1 0;
    }

    #challenge-actions Button {
        margin-right: 1;
    }

    .section-header {
        text-style: bold;
        margin: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "check", "Check", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("ctrl+g", "hint", "Hint", show=True),
        Binding("ctrl+d", "scroll_log_down", "Scroll Down", show=False),
        Binding("ctrl+u", "scroll_log_up", "Scroll Up", show=False),
    ]

    def __init__(self, challenge: Challenge, path: Optional[Path] = None, **kwargs):
        """Initialize the screen.

        Args:
            challenge: The challenge being solved
            path: Workspace file holding the learner's code, if any
        """
        super().__init__(**kwargs)
        self.challenge = challenge
        self.path = path

    def _initial_code(self) -> str:
        if self.path is not None and self.path.exists():
            return self.path.read_text(encoding="utf-8")
        return self.challenge.starter_code

    def compose(self) -> ComposeResult:
        """Compose the challenge screen."""
        with Container(id="main-content"):
            yield Static(f"🎯 {self.challenge.title}", classes="title")
            yield Static(
                f"{self.challenge.language.display_name} · {self.challenge.difficulty.value}",
                classes="subtitle",
            )

            with Vertical(id="challenge-area"):
                yield Static(self.challenge.prompt, id="prompt", markup=False)

                label = self.path.name if self.path is not None else "Your solution"
                yield Label(label, classes="section-header")
                yield TextArea(self._initial_code(), id="editor")

                yield Label("Output", classes="section-header")
                yield Log(id="run-log")

            with Horizontal(id="challenge-actions"):
                yield Button("Back", id="btn-back", variant="default")
                yield Button("Check Solution (Ctrl+R)", id="btn-check", variant="success")
                yield Button("Show Hint (Ctrl+G)", id="btn-hint", variant="primary")
                yield Button("Save (Ctrl+S)", id="btn-save", variant="warning")

    def on_mount(self) -> None:
        self.query_one("#editor", TextArea).focus()

    @property
    def source_code(self) -> str:
        return self.query_one("#editor", TextArea).text

    def action_save(self) -> None:
        """Write the editor contents to the workspace file."""
        if self.path is None:
            self.app.notify("No workspace file for this challenge.", severity="warning")
            return
        try:
            self.path.write_text(self.source_code, encoding="utf-8")
        except OSError as e:
            logger.error("Could not save %s: %s", self.path, e)
            self.app.notify(f"Could not save: {e}", severity="error")
            return
        self.app.notify(f"Saved {self.path.name}", timeout=3)

    def action_check(self) -> None:
        self.run_worker(self._check(), exclusive=True, group="check")

    def action_hint(self) -> None:
        self.run_worker(self.app.show_hint(self.challenge.id), group="intents")

    async def _check(self) -> None:
        self._log("")
        self._log(f"Running {self.challenge.language.display_name} solution...")
        outcome = await self.app.check_solution(self.challenge.id, self.source_code)
        if outcome is not None:
            self._show_outcome(outcome)

    def _show_outcome(self, outcome: CheckOutcome) -> None:
        """Write what the program printed to the output log."""
        execution = outcome.execution
        if outcome.status in (CheckStatus.LAUNCH_ERROR, CheckStatus.TIMEOUT):
            self._log(str(execution.error))
            return

        if execution.stdout:
            self._log("--- stdout ---")
            self._log(execution.stdout.rstrip("\n"))
        if execution.stderr:
            self._log("--- stderr ---")
            self._log(execution.stderr.rstrip("\n"))
        self._log(f"Exit status {execution.returncode} in {execution.duration:.2f}s")

        verdict = outcome.verdict
        if outcome.passed:
            self._log("✅ Correct!")
        else:
            self._log(f'❌ Expected "{verdict.expected}", got "{verdict.actual}"')

    def _log(self, message: str) -> None:
        """Add a message to the output log."""
        self.query_one("#run-log", Log).write_line(message)

    def action_scroll_log_down(self) -> None:
        log = self.query_one("#run-log", Log)
        log.scroll_down(animate=False)

    def action_scroll_log_up(self) -> None:
        log = self.query_one("#run-log", Log)
        log.scroll_up(animate=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-back":
            self.app.pop_screen()
        elif button_id == "btn-check":
            self.action_check()
        elif button_id == "btn-hint":
            self.action_hint()
        elif button_id == "btn-save":
            self.action_save()

"""Main Textual application."""

import logging
from typing import Any, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..challenges.engine import ChallengeEngine, CheckOutcome, HintReveal
from ..challenges.intents import CheckSolution, Intent, ShowHint, StartChallenge, dispatch
from ..challenges.types import Challenge
from ..errors import DevElevateError
from ..storage.database import Database
from ..storage.progress import ActiveChallenge
from .messages import Notice, describe_error, describe_hint, describe_outcome
from .screens.challenge import ChallengeScreen
from .screens.home import HomeScreen

logger = logging.getLogger(__name__)


class DevElevateApp(App):
    """Interactive coding challenges in the terminal."""

    TITLE = "DevElevate"
    SUB_TITLE = "Level up with JavaScript and Python challenges"

    CSS = """
    Screen {
        background: $surface;
    }

    #main-content {
        width: 100%;
        height: 100%;
        padding: 1 2;
    }

    .title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    .subtitle {
        color: $text-muted;
        margin-bottom: 1;
    }

    .hint {
        color: $text-muted;
        text-style: italic;
    }

    *:focus {
        border: solid $success;
    }

    Button:focus {
        background: $primary-darken-1;
    }
    """

    BINDINGS = [
        Binding("1", "go_home", "1:Home", show=True),
        Binding("2", "open_active", "2:Current", show=True),
        Binding("j", "focus_next", "j:Down", show=True),
        Binding("k", "focus_previous", "k:Up", show=True),
        Binding("q", "quit", "q:Quit", show=True),
        Binding("?", "help", "?:Help", show=True),
        Binding("escape", "go_back", "Esc:Back", show=False),
    ]

    SCREENS = {
        "home": HomeScreen,
    }

    def __init__(self, engine: ChallengeEngine, database: Optional[Database] = None, **kwargs):
        """Initialize the app.

        Args:
            engine: Session coordinator every screen talks to
            database: Connected on mount and closed on exit, if given
        """
        super().__init__(**kwargs)
        self.engine = engine
        self.database = database

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        if self.database is not None:
            await self.database.connect()
        self.push_screen("home")

    async def on_unmount(self) -> None:
        if self.database is not None:
            await self.database.close()

    def show_notice(self, notice: Notice) -> None:
        self.notify(notice.text, title=notice.title, severity=notice.severity, timeout=8)

    async def run_intent(self, intent: Intent) -> Optional[Any]:
        """Dispatch an intent, turning errors into notifications.

        Returns:
            The engine's result, or None if the operation failed
        """
        try:
            return await dispatch(self.engine, intent)
        except DevElevateError as e:
            self.show_notice(describe_error(e))
        except Exception:
            logger.exception("Unexpected error handling %s", intent.command)
            self.notify("Something went wrong, see the log file.", title="Error", severity="error")
        return None

    async def start_challenge(self, challenge: Challenge) -> None:
        """Start a challenge and open it."""
        active = await self.run_intent(
            StartChallenge(challenge_id=challenge.id, language=challenge.language)
        )
        if isinstance(active, ActiveChallenge):
            self._open_challenge(active.challenge)
            self.notify(
                f"🎯 {active.challenge.prompt}\n\n💡 Tip: Use \"Show Hint\" if you get stuck!",
                title=f"Challenge: {active.challenge.title}",
                timeout=10,
            )

    async def show_hint(self, challenge_id: str) -> None:
        hint = await self.run_intent(ShowHint(challenge_id=challenge_id))
        if isinstance(hint, HintReveal):
            self.show_notice(describe_hint(hint))

    async def check_solution(self, challenge_id: Optional[str], source_code: str) -> Optional[CheckOutcome]:
        """Check a solution and report the verdict.

        Args:
            challenge_id: Challenge to check, or None for the active one
            source_code: The learner's program
        """
        self.notify("🔄 Running your solution...", timeout=3)
        outcome = await self.run_intent(
            CheckSolution(challenge_id=challenge_id, source_code=source_code)
        )
        if not isinstance(outcome, CheckOutcome):
            return None

        total = len(self.engine.list_challenges(outcome.challenge.language))
        for notice in describe_outcome(outcome, total):
            self.show_notice(notice)
        return outcome

    def _open_challenge(self, challenge: Challenge) -> None:
        if isinstance(self.screen, ChallengeScreen):
            self.pop_screen()
        self.push_screen(ChallengeScreen(challenge, self.engine.starter_path(challenge)))

    async def _open_active(self) -> None:
        active = await self.engine.get_active()
        if active is None:
            self.notify("No active challenge found. Please start a challenge first.", severity="error")
            return
        self._open_challenge(active.challenge)

    def action_go_home(self) -> None:
        """Navigate to home screen."""
        while len(self.screen_stack) > 2:
            self.pop_screen()

    def action_open_active(self) -> None:
        """Open the active challenge."""
        self.run_worker(self._open_active(), exclusive=True, name="open-active")

    def action_go_back(self) -> None:
        """Go back to previous screen."""
        if len(self.screen_stack) > 2:
            self.pop_screen()

    def action_focus_next(self) -> None:
        self.screen.focus_next()

    def action_focus_previous(self) -> None:
        self.screen.focus_previous()

    def action_help(self) -> None:
        """Show help."""
        self.notify(
            "Navigation: j/k=Down/Up, 1=Home, 2=Current challenge, Esc=Back\n"
            "Challenges: Enter/s=Start, h=Hint\n"
            "Editor: Ctrl+R=Check, Ctrl+S=Save, Ctrl+G=Hint\n"
            "Other: q=Quit",
            title="Keybindings",
            timeout=10,
        )

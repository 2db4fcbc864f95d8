"""Home screen listing challenges and progress."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, ScrollableContainer, Vertical
from textual.screen import Screen
from textual.widgets import Label, Static, TabbedContent, TabPane

from ...challenges.types import Language
from ..widgets.challenge_card import ChallengeCard


def tab_id(language: Language) -> str:
    return f"tab-{language.value}"


def step_tab(active: str, step: int) -> str:
    """Id of the language tab `step` places after `active`, wrapping around."""
    ids = [tab_id(language) for language in Language]
    index = ids.index(active) if active in ids else 0
    return ids[(index + step) % len(ids)]


class HomeScreen(Screen):
    """Overview of every challenge with per-language progress."""

    CSS = """
    #status-section {
        height: auto;
        margin: 1 0;
        padding: 1;
        background: $surface-darken-1;
        border: solid $primary;
    }

    #catalog-error {
        height: auto;
        padding: 2;
        border: dashed $error;
        text-align: center;
    }

    .challenge-list {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("H", "prev_tab", "H:PrevTab", show=False),
        Binding("L", "next_tab", "L:NextTab", show=False),
        Binding("r", "reload", "r:Refresh", show=True),
    ]

    def compose(self) -> ComposeResult:
        """Compose the home screen."""
        with Container(id="main-content"):
            yield Static("DevElevate Challenges", classes="title")
            yield Static(
                "Solve small exercises, check them, and track your progress",
                classes="subtitle",
            )

            with Vertical(id="status-section"):
                yield Label("", id="overall-progress")
                for language in Language:
                    yield Label("", id=f"progress-{language.value}")

            yield Static("", id="catalog-error")

            with TabbedContent(id="language-tabs"):
                for language in Language:
                    with TabPane(language.display_name, id=tab_id(language)):
                        yield ScrollableContainer(
                            id=f"list-{language.value}", classes="challenge-list"
                        )

            yield Static("Press ? for keyboard shortcuts", classes="hint")

    def on_mount(self) -> None:
        self.query_one("#catalog-error").display = False
        self.action_reload()

    def on_screen_resume(self) -> None:
        self.action_reload()

    def action_reload(self) -> None:
        self.run_worker(self._reload(), exclusive=True, group="reload")

    async def _reload(self) -> None:
        """Re-read catalog and progress and rebuild the lists."""
        engine = self.app.engine
        summary = await engine.get_summary()
        progress = await engine.get_progress()

        error = engine.catalog_error
        error_panel = self.query_one("#catalog-error", Static)
        error_panel.display = error is not None
        if error is not None:
            error_panel.update(
                "⚠️ Error Loading Challenges\n\n"
                "Unable to load challenge data. Please make sure the challenges.json file exists."
            )

        self.query_one("#overall-progress", Label).update(
            f"Overall: {summary.completed}/{summary.total} completed ({summary.percent}%)"
        )
        for item in summary.languages:
            self.query_one(f"#progress-{item.language.value}", Label).update(
                f"{item.language.display_name}: {item.completed}/{item.total}"
            )

        for language in Language:
            container = self.query_one(f"#list-{language.value}", ScrollableContainer)
            await container.remove_children()
            cards = [
                ChallengeCard(challenge, completed=challenge.id in progress[language])
                for challenge in engine.list_challenges(language)
            ]
            if cards:
                await container.mount(*cards)

    def on_challenge_card_start_requested(self, event: ChallengeCard.StartRequested) -> None:
        self.run_worker(self.app.start_challenge(event.challenge), group="intents")

    def on_challenge_card_hint_requested(self, event: ChallengeCard.HintRequested) -> None:
        self.run_worker(self.app.show_hint(event.challenge.id), group="intents")

    def action_prev_tab(self) -> None:
        """Go to previous tab (vim H)."""
        tabs = self.query_one(TabbedContent)
        tabs.active = step_tab(tabs.active, -1)

    def action_next_tab(self) -> None:
        """Go to next tab (vim L)."""
        tabs = self.query_one(TabbedContent)
        tabs.active = step_tab(tabs.active, 1)

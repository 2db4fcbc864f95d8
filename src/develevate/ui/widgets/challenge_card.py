"""Widget for displaying a challenge."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Label, Static

from ...challenges.types import Challenge, Difficulty

DIFFICULTY_CLASSES = {
    Difficulty.BEGINNER: "-beginner",
    Difficulty.INTERMEDIATE: "-intermediate",
    Difficulty.ADVANCED: "-advanced",
}


class ChallengeCard(Widget, can_focus=True):
    """A card showing one challenge with Start and Hint actions."""

    DEFAULT_CSS = """
    ChallengeCard {
        height: auto;
        margin: 1 0;
        padding: 1 2;
        border: solid $primary;
        background: $surface-darken-1;
    }

    ChallengeCard:focus {
        border: solid $success;
        background: $surface-lighten-1;
    }

    ChallengeCard.-completed {
        border: solid $success-darken-2;
    }

    ChallengeCard .card-header {
        height: auto;
    }

    ChallengeCard .challenge-title {
        text-style: bold;
        width: 1fr;
    }

    ChallengeCard .difficulty {
        padding: 0 1;
        color: $text;
    }

    ChallengeCard .difficulty.-beginner {
        background: $success;
    }

    ChallengeCard .difficulty.-intermediate {
        background: $warning;
    }

    ChallengeCard .difficulty.-advanced {
        background: $error;
    }

    ChallengeCard .challenge-desc {
        color: $text-muted;
    }

    ChallengeCard .card-actions {
        height: auto;
        margin-top: 1;
    }

    ChallengeCard Button {
        margin-right: 1;
    }
    """

    BINDINGS = [
        Binding("enter", "start", "Start", show=False),
        Binding("o", "start", "Start", show=False),
        Binding("s", "start", "Start", show=False),
        Binding("h", "hint", "Hint", show=False),
    ]

    class StartRequested(Message):
        """Message emitted when the user wants to start the challenge."""

        def __init__(self, challenge: Challenge) -> None:
            self.challenge = challenge
            super().__init__()

    class HintRequested(Message):
        """Message emitted when the user asks for a hint."""

        def __init__(self, challenge: Challenge) -> None:
            self.challenge = challenge
            super().__init__()

    def __init__(self, challenge: Challenge, completed: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.challenge = challenge
        self.completed = completed

    def compose(self) -> ComposeResult:
        """Compose the card."""
        icon = "✅ " if self.completed else "🚀 "
        with Horizontal(classes="card-header"):
            yield Label(f"{icon}{self.challenge.title}", classes="challenge-title")
            yield Label(
                self.challenge.difficulty.value,
                classes=f"difficulty {DIFFICULTY_CLASSES[self.challenge.difficulty]}",
            )
        yield Static(self.challenge.description, classes="challenge-desc")

        with Horizontal(classes="card-actions"):
            label = "🔄 Redo Challenge" if self.completed else "▶️ Start Challenge"
            yield Button(label, id="btn-start", variant="primary")
            yield Button("💡 Show Hint", id="btn-hint", variant="default")
            if self.completed:
                yield Label("🏆 Completed!")

    def on_mount(self) -> None:
        self.set_class(self.completed, "-completed")

    def action_start(self) -> None:
        self.post_message(self.StartRequested(self.challenge))

    def action_hint(self) -> None:
        self.post_message(self.HintRequested(self.challenge))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses within the card."""
        event.stop()

        if event.button.id == "btn-start":
            self.action_start()
        elif event.button.id == "btn-hint":
            self.action_hint()

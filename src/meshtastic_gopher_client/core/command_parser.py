"""Command parser for interpreting messages from mesh users."""

from abc import ABC
from dataclasses import dataclass


class Command(ABC):
    """Base class for all commands."""

    pass


@dataclass(frozen=True)
class SelectCommand(Command):
    """Open the numbered item on the current page."""

    index: int


@dataclass(frozen=True)
class BackCommand(Command):
    pass


@dataclass(frozen=True)
class HomeCommand(Command):
    pass


@dataclass(frozen=True)
class NextCommand(Command):
    pass


@dataclass(frozen=True)
class PreviousCommand(Command):
    pass


@dataclass(frozen=True)
class StopCommand(Command):
    """Cancel the fetch in progress."""

    pass


@dataclass(frozen=True)
class HistoryCommand(Command):
    pass


@dataclass(frozen=True)
class HelpCommand(Command):
    pass


@dataclass(frozen=True)
class GoCommand(Command):
    """Open a typed gopher:// URL."""

    url: str


@dataclass(frozen=True)
class QueryCommand(Command):
    """Submit text to the search entry awaiting a query."""

    text: str


@dataclass(frozen=True)
class InvalidCommand(Command):
    """Represents an invalid or unrecognized command."""

    original_input: str
    reason: str = "Unknown command"


class CommandParser:
    """Parses user input strings into Command objects."""

    MAX_SELECTION = 99

    BACK_COMMANDS = {"b", "back"}
    HOME_COMMANDS = {"h", "home"}
    NEXT_COMMANDS = {"n", "next"}
    PREVIOUS_COMMANDS = {"p", "prev"}
    STOP_COMMANDS = {"s", "stop"}
    HISTORY_COMMANDS = {"l", "history"}
    HELP_COMMANDS = {"?", "help"}
    GO_PREFIXES = ("g ", "go ")
    QUERY_PREFIXES = ("q ", "query ")

    def parse(self, input_str: str, awaiting_query: bool = False) -> Command:
        """
        Parse a user input string into a Command object.

        Args:
            input_str: The raw input string from the user.
            awaiting_query: True while a search prompt is open. Input that
                            is not a command is then taken as the query.

        Returns:
            A Command object representing the parsed input.
        """
        stripped = input_str.strip()
        cleaned = stripped.lower()

        if not cleaned:
            return InvalidCommand(original_input=input_str, reason="Empty input")

        if cleaned in self.BACK_COMMANDS:
            return BackCommand()
        if cleaned in self.HOME_COMMANDS:
            return HomeCommand()
        if cleaned in self.NEXT_COMMANDS:
            return NextCommand()
        if cleaned in self.PREVIOUS_COMMANDS:
            return PreviousCommand()
        if cleaned in self.STOP_COMMANDS:
            return StopCommand()
        if cleaned in self.HISTORY_COMMANDS:
            return HistoryCommand()
        if cleaned in self.HELP_COMMANDS:
            return HelpCommand()

        for prefix in self.GO_PREFIXES:
            if cleaned.startswith(prefix):
                # URLs keep their case; selectors are case sensitive
                return GoCommand(url=stripped[len(prefix):].strip())

        for prefix in self.QUERY_PREFIXES:
            if cleaned.startswith(prefix):
                return QueryCommand(text=stripped[len(prefix):].strip())

        if cleaned.startswith("gopher://"):
            return GoCommand(url=stripped)

        if cleaned.isdigit():
            number = int(cleaned)
            if number < 1:
                return InvalidCommand(original_input=input_str, reason="Selection must be positive")
            if number > self.MAX_SELECTION:
                return InvalidCommand(
                    original_input=input_str,
                    reason=f"Selection must be <= {self.MAX_SELECTION}",
                )
            return SelectCommand(index=number)

        if awaiting_query:
            return QueryCommand(text=stripped)

        return InvalidCommand(original_input=input_str, reason="Unknown command")

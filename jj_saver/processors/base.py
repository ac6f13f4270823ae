"""Abstract base class for output processors."""

from abc import ABC, abstractmethod

from ..lines import LineGrammar, parse_lines


class Processor(ABC):
    """Base class for all output processors.

    A processor turns the captured stdout of one jj invocation into its
    compact form. It never raises on unexpected text: unrecognized input
    degrades to the family's empty state or to the raw lines.
    """

    @abstractmethod
    def process(self, args: list[str], output: str) -> str:
        """Process and compress the output. Return compressed version."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the processor name for tracking."""


class LineProcessor(Processor):
    """Processor backed by a declarative ``LineGrammar``."""

    grammar: LineGrammar

    @property
    def name(self) -> str:
        return self.grammar.name

    def limit(self, _args: list[str]) -> int | None:
        """Maximum number of entries to emit; None for no limit."""
        return None

    def process(self, args: list[str], output: str) -> str:
        return parse_lines(output, self.grammar, self.limit(args))

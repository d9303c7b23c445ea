"""Command language of the session: parsing, autocomplete and execution"""

import dataclasses
import os
import re
from typing import Callable, NamedTuple, Protocol

from jlv.models.errors import CommandSyntaxError
from jlv.models.file_view import FileView
from jlv.models.filter import Filter, FilterOperator
from jlv.models.log_file import TagRole
from jlv.models.options import Options
from jlv.models.search import SearchDirection

_TAG = r"[\w@.-]+"
_FILTER_COMMAND = re.compile(rf":f/({_TAG})/([^/]*)(?:/([+!$-])?)?")
_TAG_SEARCH_COMMAND = re.compile(rf":s/({_TAG})/([^/]*)(?:/(\$)?)?")
_FILTER_OPTIONS = re.compile(r":f/([\w@.-]*)(?:/([\w@.-]*))?")
_TAG_SEARCH_OPTIONS = re.compile(r":s/([\w@.-]*)")


class CommandTarget(Protocol):
    """Operations a parsed command performs on the session"""

    def apply_filter(self, filter_: Filter) -> None:
        """Replace the current view with a filtered one"""

    def pop_view(self, to_root: bool) -> None:
        """Go back to the parent or the root view"""

    def start_search(
        self, mask: str, direction: SearchDirection, tag: str, is_regexp: bool
    ) -> None:
        """Search from the highlighted line"""

    def goto_line(self, line: int) -> None:
        """Highlight an absolute, 1-based file line"""

    def request_exit(self) -> None:
        """End the session"""

    def show_message(self, message: str) -> None:
        """Show a message on the status line"""


@dataclasses.dataclass(frozen=True)
class ApplyFilter:
    """`:f/<tag>/<value>[/<op>]`"""

    filter: Filter

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.apply_filter(self.filter)


@dataclasses.dataclass(frozen=True)
class PopView:
    """`:fu` and `:fr`"""

    to_root: bool

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.pop_view(self.to_root)


@dataclasses.dataclass(frozen=True)
class Search:
    """`/<value>`, `?<value>` and `:s/<tag>/<value>[/$]`"""

    mask: str
    direction: SearchDirection = SearchDirection.FORWARD
    tag: str = ""
    is_regexp: bool = False

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.start_search(self.mask, self.direction, self.tag, self.is_regexp)


@dataclasses.dataclass(frozen=True)
class GotoLine:
    """`:<digits>`"""

    line: int

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.goto_line(self.line)


@dataclasses.dataclass(frozen=True)
class Exit:
    """`:x` and `:q`"""

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.request_exit()


@dataclasses.dataclass(frozen=True)
class ShowPid:
    """`:p`"""

    def apply(self, target: CommandTarget) -> None:
        """Run the command"""
        target.show_message(str(os.getpid()))


ParsedCommand = ApplyFilter | PopView | Search | GotoLine | Exit | ShowPid


class Completion(NamedTuple):
    """Result of asking a command for autocomplete options"""

    command: str
    options: Options | None


def parse_filter(text: str) -> ParsedCommand:
    """Parse a filter command"""
    if text == ":fu":
        return PopView(to_root=False)
    if text == ":fr":
        return PopView(to_root=True)
    matches = _FILTER_COMMAND.fullmatch(text)
    if not matches:
        raise CommandSyntaxError(text)
    tag, mask, suffix = matches.groups()
    return ApplyFilter(Filter(tag, mask, FilterOperator.from_suffix(suffix)))


def parse_tag_search(text: str) -> ParsedCommand:
    """Parse a tag search command"""
    matches = _TAG_SEARCH_COMMAND.fullmatch(text)
    if not matches:
        raise CommandSyntaxError(text)
    tag, mask, regexp_flag = matches.groups()
    return Search(mask, SearchDirection.FORWARD, tag, bool(regexp_flag))


def parse_text_search(text: str) -> ParsedCommand:
    """Parse a `/` or `?` search over the raw line text"""
    direction = SearchDirection.FORWARD
    if text.startswith("?"):
        direction = SearchDirection.BACKWARD
    return Search(text[1:], direction)


def parse_goto(text: str) -> ParsedCommand:
    """Parse a line number jump"""
    try:
        return GotoLine(int(text[1:]))
    except ValueError as e:
        raise CommandSyntaxError(text) from e


def filter_options(text: str, view: FileView) -> Completion:
    """Offer field names, then level names for the level field"""
    if text == ":f":
        text = ":f/"
    matches = _FILTER_OPTIONS.fullmatch(text)
    if not matches:
        return Completion(text, None)

    tag, value = matches.groups()
    if value is None:
        options = Options.from_names(view.known_tags, append_slash=True)
        options.set_prefix(tag)
        return Completion(":f/", options)
    if tag == view.tag_name(TagRole.LEVEL):
        options = Options.from_names(view.levels, append_slash=True)
        options.set_prefix(value)
        return Completion(f":f/{tag}/", options)
    return Completion(text, None)


def tag_search_options(text: str, view: FileView) -> Completion:
    """Offer field names"""
    if text == ":s":
        text = ":s/"
    matches = _TAG_SEARCH_OPTIONS.fullmatch(text)
    if not matches:
        return Completion(text, None)
    options = Options.from_names(view.known_tags, append_slash=True)
    options.set_prefix(matches.group(1))
    return Completion(":s/", options)


@dataclasses.dataclass(frozen=True)
class Command:
    """A command of the registry.

    A command is found by `prefix` unless it has a `pattern`, which then has
    to match the whole command text.
    """

    prefix: str
    name: str
    parse: Callable[[str], ParsedCommand]
    options: Callable[[str, FileView], Completion] | None = None
    pattern: re.Pattern | None = None
    bold: tuple[int, int] | None = None
    completion: str = ""

    def matches(self, text: str) -> bool:
        """Check whether the command text belongs to this command"""
        if self.pattern is not None:
            return self.pattern.fullmatch(text) is not None
        return text.startswith(self.prefix)


COMMANDS: tuple[Command, ...] = (
    Command(":f", "filter", parse_filter, filter_options, bold=(0, 1)),
    Command(":s", "search-tag", parse_tag_search, tag_search_options, bold=(0, 1)),
    Command(":p", "", lambda _: ShowPid()),
    Command(":x", "exit", lambda _: Exit(), bold=(1, 2)),
    Command(":q", "quit", lambda _: Exit(), bold=(0, 1)),
    Command("/", "search(/)", parse_text_search, bold=(7, 8)),
    Command("?", "search-up(?)", parse_text_search, bold=(10, 11)),
    Command(
        ":",
        "goto",
        parse_goto,
        pattern=re.compile(r":[0-9]+"),
        completion=":",
    ),
)


def find_command(text: str) -> Command | None:
    """Find the command the text belongs to"""
    for command in COMMANDS:
        if command.matches(text):
            return command
    return None


def parse(text: str) -> ParsedCommand:
    """Parse a complete command text"""
    command = find_command(text)
    if command is None:
        raise CommandSyntaxError(text)
    return command.parse(text)


def root_options(text: str) -> Options:
    """Offer the named commands whose prefix starts with the text"""
    options = Options(replace=True)
    for command in COMMANDS:
        completion = command.completion or command.prefix
        if command.name and completion.startswith(text):
            options.add(command.name, completion, command.bold)
    return options

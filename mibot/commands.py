"""Text patterns the bot answers to, and the fixed replies it sends."""

import re
from dataclasses import dataclass, field
from typing import Dict, List

LIST_DEPLOYMENTS = "list_deployments"
LIST_PODS = "list_pods"
HELP = "help"
FALLBACK = "fallback"

HELP_TEXT = "```\nkubectl get deploy -n $namespace\nkubectl get po -n $namespace\n```"

FALLBACK_TEXT = "I'm {bot_name}. I'm alive, but idk what you want from me! Try help? :narwhal-dancing:"


@dataclass(frozen=True)
class Command:
    name: str
    pattern: re.Pattern


@dataclass(frozen=True)
class CommandMatch:
    name: str
    args: Dict[str, str] = field(default_factory=dict)


# Evaluated in order, first match wins. The namespace group is greedy on
# purpose: everything after "-n " up to the end of the line is the namespace.
COMMANDS: List[Command] = [
    Command(LIST_DEPLOYMENTS, re.compile(r"get deploy(ment)?(s)? -n (?P<namespace>.*)")),
    Command(LIST_PODS, re.compile(r"get po(d)?(s)? -n (?P<namespace>.*)")),
]


def named_groups(match) -> Dict[str, str]:
    """Return the named groups of a regex match, with unmatched groups as ''."""
    return {name: value or "" for name, value in match.groupdict().items()}


def match_command(text: str) -> CommandMatch:
    """
    Classify a message addressed to the bot.

    :param text: The raw message text, bot mention included.
    :return: The first matching list command with its arguments, otherwise
        the help command if the text contains "help", otherwise the fallback.
    """
    for command in COMMANDS:
        match = command.pattern.search(text)
        if match:
            return CommandMatch(command.name, named_groups(match))

    if HELP in text:
        return CommandMatch(HELP)

    return CommandMatch(FALLBACK)

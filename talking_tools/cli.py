"""
talking-prompts: command-line front end.

Usage:
    talking-prompts suggest "watch tv" --pronoun We
    talking-prompts say "go to sleep" --pronoun I --speak
    talking-prompts interactive

Exit codes:
    0: success
    1: speech was requested but failed
    2: usage error
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .config import TalkingConfig, load_config
from .log import configure_logging
from .pronouns import labels
from .sentence_builder import build_prompt
from .speech_output import SpeechOutput
from .suggestion_generator import generate_suggestions
from .talking_session import TalkingSession

logger = logging.getLogger(__name__)

_INTERACTIVE_HELP = """\
Commands:
  p <pronoun>     switch perspective ({pronouns})
  b <phrase|n>    choose a base phrase (text or number from the list)
  <n>             speak suggestion number n
  h               show history
  ?               show this help
  q               quit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="talking-prompts",
        description="Compose short spoken sentences from a pronoun and a topic.",
    )
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    suggest = sub.add_parser("suggest", help="List suggestions for a base phrase")
    suggest.add_argument("base", help="Base phrase, e.g. 'hungry'")
    suggest.add_argument("--pronoun", choices=labels(), help="Perspective (default from config)")
    suggest.add_argument("--raw", action="store_true", help="Print activities, not sentences")

    say = sub.add_parser("say", help="Build (and optionally speak) one sentence")
    say.add_argument("activity", help="Activity phrase, e.g. 'order food'")
    say.add_argument("--pronoun", choices=labels(), help="Perspective (default from config)")
    say.add_argument("--base", default="", help="Base phrase the activity came from")
    say.add_argument("--speak", action="store_true", help="Speak the sentence aloud")

    sub.add_parser("interactive", help="Pick pronoun, topic and suggestion in a loop")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_suggest(args: argparse.Namespace, config: TalkingConfig) -> int:
    pronoun = args.pronoun or config.default_pronoun
    for i, activity in enumerate(generate_suggestions(args.base), start=1):
        text = activity if args.raw else build_prompt(pronoun, args.base, activity)
        print(f"{i}. {text}")
    return 0


def cmd_say(
    args: argparse.Namespace,
    config: TalkingConfig,
    speech: Optional[SpeechOutput] = None,
) -> int:
    pronoun = args.pronoun or config.default_pronoun
    sentence = build_prompt(pronoun, args.base, args.activity)
    print(sentence)
    if not args.speak:
        return 0
    speech = speech or SpeechOutput(config.speech)
    result = speech.speak(sentence)
    if result["status"] != "ok":
        print(result["message"], file=sys.stderr)
        return 1
    return 0


def run_interactive(
    session: TalkingSession,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> int:
    """Line-based loop over the session.  Returns when the user quits or input ends."""
    pronouns = ", ".join(p.value for p in session.config.pronouns)
    help_text = _INTERACTIVE_HELP.format(pronouns=pronouns)
    bases = list(session.config.base_phrases)

    output(help_text)
    output(f"Voice status: {_voice_status(session)}")
    output("Base phrases: " + ", ".join(f"{i}) {b}" for i, b in enumerate(bases, start=1)))

    while True:
        try:
            line = input_fn(f"[{session.pronoun.value}] > ").strip()
        except EOFError:
            return 0
        if not line:
            continue
        cmd, _, rest = line.partition(" ")
        rest = rest.strip()

        if cmd == "q":
            return 0
        if cmd == "?":
            output(help_text)
        elif cmd == "h":
            lines = session.history.lines()
            output("\n".join(lines) if lines else "No messages yet.")
        elif cmd == "p":
            try:
                session.select_pronoun(rest)
            except ValueError as exc:
                output(str(exc))
                continue
            _show_prompts(session, output)
        elif cmd == "b":
            base = bases[int(rest) - 1] if rest.isdigit() and 0 < int(rest) <= len(bases) else rest
            session.select_base(base)
            _show_prompts(session, output)
        elif cmd.isdigit():
            try:
                result = session.activate(int(cmd) - 1)
            except (IndexError, ValueError) as exc:
                output(str(exc))
                continue
            if result["status"] == "ok":
                output(f"> {result['sentence']}")
            else:
                output(f"{result['sentence']} ({result['message']})")
        else:
            output(f"Unknown command '{cmd}'. Type ? for help.")


def _voice_status(session: TalkingSession) -> str:
    if not session.config.speech.enabled:
        return "disabled"
    return "available" if session.speech.available else "unavailable"


def _show_prompts(session: TalkingSession, output: Callable[[str], None]) -> None:
    if not session.suggestions:
        return
    for i, (_, sentence) in enumerate(session.prompts(), start=1):
        output(f"  {i}. {sentence}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as exc:
        parser.error(str(exc))
    pronoun = getattr(args, "pronoun", None)
    if pronoun and pronoun not in (p.value for p in config.pronouns):
        parser.error(f"pronoun '{pronoun}' is not enabled in the config")
    configure_logging("DEBUG" if args.verbose else config.log_level, config.log_file)
    logger.debug("config loaded", extra={"source": str(config.source)})

    if args.command == "suggest":
        return cmd_suggest(args, config)
    if args.command == "say":
        return cmd_say(args, config)
    return run_interactive(TalkingSession(config))


if __name__ == "__main__":
    sys.exit(main())

"""
validate_talking.py: offline checks for a talking prompts deployment.

Validates that the YAML config is present and well-formed, that every
module of the talking_tools package is on disk, and that suggestion
generation and sentence building still produce the expected phrases.

Usage:
    python validate_talking.py

No speech driver is required; nothing is spoken.

Exit codes:
    0: all checks passed
    1: one or more checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Tuple

import yaml

# ---------------------------------------------------------------------------
# Helper: resolve repo root relative to this script
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parent
PACKAGE_DIR = REPO_ROOT / "talking_tools"

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from talking_tools import BASE_PHRASES, MAX_SUGGESTIONS, build_prompt, generate_suggestions  # noqa: E402
from talking_tools.activity_catalog import DEFAULT_CATALOG  # noqa: E402
from talking_tools.config import load_config  # noqa: E402

CheckResult = Tuple[str, bool, str]


def _ok(msg: str) -> None:
    print(f"  [PASS] {msg}")


def _fail(msg: str) -> None:
    print(f"  [FAIL] {msg}", file=sys.stderr)


# ---------------------------------------------------------------------------
# 1.  Config validation
# ---------------------------------------------------------------------------

def validate_config(config_path: Path = REPO_ROOT / "config" / "talking.yaml") -> List[CheckResult]:
    """Confirm the config file parses and loads into a usable configuration."""
    results: List[CheckResult] = []
    required_keys = ["pronouns", "default_pronoun", "base_phrases", "history", "speech"]
    check = f"config:{config_path.name}"

    if not config_path.exists():
        return [(check, False, f"{config_path} not found")]
    try:
        with open(config_path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        missing = [k for k in required_keys if k not in data]
        if missing:
            return [(check, False, f"missing keys: {missing}")]
        results.append((check, True, "present and well-formed"))

        config = load_config(str(config_path))
        unknown = [b for b in config.base_phrases if DEFAULT_CATALOG.lookup(b) is None]
        results.append(
            (f"{check}:base_phrases", not unknown,
             "passed" if not unknown else f"no catalog entry for {unknown}")
        )
    except (ValueError, yaml.YAMLError) as exc:
        results.append((check, False, f"parse error: {exc}"))
    return results


# ---------------------------------------------------------------------------
# 2.  Module file existence
# ---------------------------------------------------------------------------

def validate_module_files() -> List[CheckResult]:
    """Confirm that every expected module exists on disk."""
    expected = [
        "activity_catalog.py",
        "suggestion_generator.py",
        "sentence_builder.py",
        "pronouns.py",
        "phrase_history.py",
        "speech_output.py",
        "talking_session.py",
        "config.py",
        "log.py",
        "cli.py",
    ]
    results: List[CheckResult] = []
    for filename in expected:
        path = PACKAGE_DIR / filename
        exists = path.exists()
        results.append(
            (
                f"module-file:{filename}",
                exists,
                "present" if exists else f"not found at {path}",
            )
        )
    return results


# ---------------------------------------------------------------------------
# 3.  Suggestion generation
# ---------------------------------------------------------------------------

def validate_suggestions() -> List[CheckResult]:
    """Every default base phrase yields a bounded, duplicate-free list."""
    results: List[CheckResult] = []
    for base in BASE_PHRASES + ("", "   ", "something unknown"):
        check = f"suggestions:{base!r}"
        got = generate_suggestions(base)
        if not 1 <= len(got) <= MAX_SUGGESTIONS:
            results.append((check, False, f"length {len(got)}"))
        elif len(set(got)) != len(got):
            results.append((check, False, f"duplicates in {got}"))
        else:
            results.append((check, True, "passed"))
    return results


# ---------------------------------------------------------------------------
# 4.  Sentence building
# ---------------------------------------------------------------------------

def validate_sentences() -> List[CheckResult]:
    """Pronoun rules produce the expected sentence openings."""
    cases: List[Tuple[str, str, str, str]] = [
        # (description, pronoun, activity, expected)
        ("possessive keeps existing 'my'",
         "My", "my dog needs walking", "my dog needs walking"),
        ("possessive prepends 'My'",
         "My", "dog needs walking", "My dog needs walking"),
        ("possessive ignores 'my' inside a word",
         "My", "mystery box", "My mystery box"),
        ("singular direct verb phrase",
         "I", "go to sleep", "I go to sleep"),
        ("singular falls back to 'want to'",
         "I", "eat dinner", "I want to eat dinner"),
        ("singular prefix needs a whole word",
         "I", "watcher duty", "I want to watcher duty"),
        ("plural suggestion, case-insensitive",
         "We", "watch TV", "Let's watch TV"),
        ("plural falls back to 'will'",
         "We", "drink water", "We will drink water"),
        ("activity is trimmed",
         "I", "  take a nap  ", "I take a nap"),
    ]

    results: List[CheckResult] = []
    for description, pronoun, activity, expected in cases:
        got = build_prompt(pronoun, "", activity)
        passed = got == expected
        detail = f"got '{got}'" if not passed else "passed"
        results.append((f"sentence:{description}", passed, detail))
    return results


# ---------------------------------------------------------------------------
# Main runner
# ---------------------------------------------------------------------------

def run_all_checks() -> bool:
    """Run every validation suite and print a formatted report.

    Returns:
        True if all checks passed, False otherwise.
    """
    all_results: List[CheckResult] = []

    suites = [
        ("Config file validation", validate_config),
        ("Module file presence",   validate_module_files),
        ("Suggestion generation",  validate_suggestions),
        ("Sentence building",      validate_sentences),
    ]

    for title, suite_fn in suites:
        print(f"\n{'─' * 60}")
        print(f"  {title}")
        print(f"{'─' * 60}")
        for check, passed, detail in suite_fn():
            if passed:
                _ok(check)
            else:
                _fail(f"{check}: {detail}")
            all_results.append((check, passed, detail))

    total = len(all_results)
    passed_count = sum(1 for _, p, _ in all_results if p)
    failed_count = total - passed_count

    print(f"\n{'═' * 60}")
    print(f"  Results: {passed_count}/{total} checks passed", end="")
    if failed_count:
        print(f"  ({failed_count} failed)", file=sys.stderr)
    else:
        print()
    print(f"{'═' * 60}\n")

    return failed_count == 0


if __name__ == "__main__":
    ok = run_all_checks()
    sys.exit(0 if ok else 1)

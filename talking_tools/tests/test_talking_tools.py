"""
Unit tests for the phrase-generation core: catalog, suggestions, sentences.

Modules are loaded through load_tool() by name, and the validation script is
loaded from its file path with importlib, the same way it is run in a
deployment.
"""

from __future__ import annotations

import importlib
import importlib.util
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parents[1]  # talking_tools/
REPO_ROOT = PACKAGE_DIR.parent


def load_tool(name: str):
    """Import talking_tools.<name>."""
    return importlib.import_module(f"talking_tools.{name}")


def load_script(name: str):
    """Load a top-level script from the repo root."""
    path = REPO_ROOT / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None, f"cannot load {path}"
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[union-attr]
    return module


# ---------------------------------------------------------------------------
# ActivityCatalog
# ---------------------------------------------------------------------------

class TestActivityCatalog:
    def test_lookup_returns_candidates_in_order(self):
        mod = load_tool("activity_catalog")
        assert mod.DEFAULT_CATALOG.lookup("help") == (
            "call for help", "need assistance", "send emergency alert",
        )

    def test_lookup_normalizes_key(self):
        mod = load_tool("activity_catalog")
        assert mod.DEFAULT_CATALOG.lookup("  Watch TV ") == mod.DEFAULT_CATALOG.lookup("watch tv")

    def test_unknown_key_returns_none(self):
        mod = load_tool("activity_catalog")
        assert mod.DEFAULT_CATALOG.lookup("dance") is None
        assert mod.DEFAULT_CATALOG.lookup("") is None

    def test_keys_in_declaration_order(self):
        mod = load_tool("activity_catalog")
        assert mod.DEFAULT_CATALOG.keys() == [
            "sleep", "sleeping", "watch tv", "watch", "eat", "hungry", "help",
        ]

    def test_catalog_is_read_only(self):
        mod = load_tool("activity_catalog")
        with pytest.raises(TypeError):
            mod._ACTIVITIES["dance"] = ("dance",)  # type: ignore[index]

    def test_full_table(self):
        mod = load_tool("activity_catalog")
        assert dict(mod._ACTIVITIES) == {
            "sleep": ("go to sleep", "take a nap", "set a sleep timer", "talk about sleep schedule"),
            "sleeping": ("go to sleep", "nap for 30 minutes", "adjust sleeping schedule", "sleep well wishes"),
            "watch tv": ("watch TV", "change channel", "start streaming", "recommend a show"),
            "watch": ("watch TV", "watch a movie", "turn on the show", "choose what to watch"),
            "eat": ("have dinner", "order food", "prepare a snack", "set mealtime reminder"),
            "hungry": ("grab something to eat", "order food", "prepare a snack", "drink water"),
            "help": ("call for help", "need assistance", "send emergency alert"),
        }

    def test_custom_entries_are_normalized(self):
        mod = load_tool("activity_catalog")
        catalog = mod.ActivityCatalog({" Walk ": ["go for a walk"]})
        assert "walk" in catalog
        assert catalog.lookup("WALK") == ("go for a walk",)
        assert len(catalog) == 1


# ---------------------------------------------------------------------------
# SuggestionGenerator
# ---------------------------------------------------------------------------

class TestSuggestionGenerator:
    def test_sleeping_keeps_catalog_order_then_fallbacks(self):
        mod = load_tool("suggestion_generator")
        assert mod.generate_suggestions("sleeping") == [
            "go to sleep",
            "nap for 30 minutes",
            "adjust sleeping schedule",
            "sleep well wishes",
            "sleeping",
            "think about sleeping",
            "set reminder for sleeping",
        ]

    def test_watch_tv_merges_full_phrase_and_first_word(self):
        mod = load_tool("suggestion_generator")
        # "watch TV" appears in both entries and is kept once; the list is
        # full after the first fallback.
        assert mod.generate_suggestions("watch tv") == [
            "watch TV",
            "change channel",
            "start streaming",
            "recommend a show",
            "watch a movie",
            "turn on the show",
            "choose what to watch",
            "watch tv",
        ]

    def test_empty_base_yields_only_fallbacks(self):
        mod = load_tool("suggestion_generator")
        assert mod.generate_suggestions("") == ["", "think about ", "set reminder for "]

    def test_whitespace_base_fallbacks_reuse_raw_text(self):
        mod = load_tool("suggestion_generator")
        assert mod.generate_suggestions("  ") == ["  ", "think about   ", "set reminder for   "]

    def test_matching_is_case_insensitive_but_fallbacks_are_verbatim(self):
        mod = load_tool("suggestion_generator")
        result = mod.generate_suggestions("Hungry ")
        assert result[:4] == ["grab something to eat", "order food", "prepare a snack", "drink water"]
        assert result[4:] == ["Hungry ", "think about Hungry ", "set reminder for Hungry "]

    def test_first_word_matches_single_word_entry(self):
        mod = load_tool("suggestion_generator")
        result = mod.generate_suggestions("sleep tight")
        assert result[:4] == ["go to sleep", "take a nap", "set a sleep timer", "talk about sleep schedule"]
        assert "sleep tight" in result

    def test_unknown_phrase_yields_fallbacks(self):
        mod = load_tool("suggestion_generator")
        assert mod.generate_suggestions("dance") == [
            "dance", "think about dance", "set reminder for dance",
        ]

    def test_catalog_entry_suppresses_equal_fallback(self):
        catalog_mod = load_tool("activity_catalog")
        mod = load_tool("suggestion_generator")
        catalog = catalog_mod.ActivityCatalog({"rest": ["rest", "lie down"]})
        generator = mod.SuggestionGenerator(catalog)
        assert generator.generate("rest") == [
            "rest", "lie down", "think about rest", "set reminder for rest",
        ]

    def test_duplicates_are_exact_not_case_folded(self):
        catalog_mod = load_tool("activity_catalog")
        mod = load_tool("suggestion_generator")
        catalog = catalog_mod.ActivityCatalog({"rest": ["Rest"]})
        result = mod.SuggestionGenerator(catalog).generate("rest")
        assert result[:2] == ["Rest", "rest"]

    def test_truncates_to_max(self):
        catalog_mod = load_tool("activity_catalog")
        mod = load_tool("suggestion_generator")
        catalog = catalog_mod.ActivityCatalog({"chores": [f"chore {i}" for i in range(10)]})
        result = mod.SuggestionGenerator(catalog).generate("chores")
        assert len(result) == mod.MAX_SUGGESTIONS
        assert result == [f"chore {i}" for i in range(8)]

    @pytest.mark.parametrize("base", [
        "", " ", "sleep", "sleeping", "watch", "watch tv", "WATCH TV", "eat",
        "hungry", "help", "help me now", "  eat   lunch ", "go to sleep", "x" * 200,
    ])
    def test_length_bounds_and_uniqueness(self, base):
        mod = load_tool("suggestion_generator")
        result = mod.generate_suggestions(base)
        assert 1 <= len(result) <= mod.MAX_SUGGESTIONS
        assert len(set(result)) == len(result)

    def test_repeated_calls_are_identical(self):
        mod = load_tool("suggestion_generator")
        assert mod.generate_suggestions("watch tv") == mod.generate_suggestions("watch tv")

    def test_returned_list_is_a_fresh_copy(self):
        mod = load_tool("suggestion_generator")
        first = mod.generate_suggestions("eat")
        first.clear()
        assert mod.generate_suggestions("eat")


# ---------------------------------------------------------------------------
# Pronoun
# ---------------------------------------------------------------------------

class TestPronoun:
    def test_labels_in_presentation_order(self):
        mod = load_tool("pronouns")
        assert mod.labels() == ["I", "We", "My"]

    def test_parse_accepts_labels_and_members(self):
        mod = load_tool("pronouns")
        assert mod.Pronoun.parse("We") is mod.Pronoun.WE
        assert mod.Pronoun.parse(" My ") is mod.Pronoun.MY
        assert mod.Pronoun.parse(mod.Pronoun.I) is mod.Pronoun.I

    def test_parse_rejects_unknown_label(self):
        mod = load_tool("pronouns")
        with pytest.raises(ValueError):
            mod.Pronoun.parse("They")


# ---------------------------------------------------------------------------
# SentenceBuilder
# ---------------------------------------------------------------------------

class TestSentenceBuilder:
    @pytest.mark.parametrize("pronoun, activity, expected", [
        ("My", "my dog needs walking", "my dog needs walking"),
        ("My", "MY dog needs walking", "MY dog needs walking"),
        ("My", "dog needs walking", "My dog needs walking"),
        ("My", "mystery box", "My mystery box"),
        ("My", "myéclair", "myéclair"),
        ("My", "my-day", "my-day"),
        ("My", "my_day", "My my_day"),
        ("My", "my", "my"),
        ("I", "go to sleep", "I go to sleep"),
        ("I", "Order food", "I Order food"),
        ("I", "send emergency alert", "I send emergency alert"),
        ("I", "eat dinner", "I want to eat dinner"),
        ("I", "go home", "I want to go home"),
        ("We", "watch TV", "Let's watch TV"),
        ("We", "choose what to watch", "Let's choose what to watch"),
        ("We", "set a sleep timer", "Let's set a sleep timer"),
        ("We", "drink water", "We will drink water"),
    ])
    def test_pronoun_rules(self, pronoun, activity, expected):
        mod = load_tool("sentence_builder")
        assert mod.build_prompt(pronoun, "x", activity) == expected

    def test_plural_matches_word_prefix_but_singular_needs_whole_word(self):
        mod = load_tool("sentence_builder")
        # The "We" rules match the start of a word, the "I" rules a whole
        # leading word; "watcher" is treated differently by each.
        assert mod.build_prompt("We", "", "watcher duty") == "Let's watcher duty"
        assert mod.build_prompt("I", "", "watcher duty") == "I want to watcher duty"

    def test_activity_is_trimmed_but_interior_untouched(self):
        mod = load_tool("sentence_builder")
        assert mod.build_prompt("I", "", "  Take  a   nap \n") == "I Take  a   nap"

    def test_base_phrase_does_not_change_result(self):
        mod = load_tool("sentence_builder")
        assert (
            mod.build_prompt("We", "hungry", "order food")
            == mod.build_prompt("We", "watch tv", "order food")
            == "Let's order food"
        )

    def test_accepts_pronoun_members(self):
        mod = load_tool("sentence_builder")
        pronouns = load_tool("pronouns")
        builder = mod.SentenceBuilder()
        assert builder.build(pronouns.Pronoun.MY, "turn") == "My turn"

    @pytest.mark.parametrize("pronoun", ["I", "We", "My"])
    @pytest.mark.parametrize("activity", ["", "   ", "a", "my", "watch"])
    def test_never_returns_empty(self, pronoun, activity):
        mod = load_tool("sentence_builder")
        assert mod.build_prompt(pronoun, "", activity)

    def test_every_pronoun_has_rules(self):
        mod = load_tool("sentence_builder")
        pronouns = load_tool("pronouns")
        assert set(mod._RULES) == set(pronouns.Pronoun)


# ---------------------------------------------------------------------------
# Package surface
# ---------------------------------------------------------------------------

class TestPackageExports:
    def test_core_operations_exported(self):
        import talking_tools

        assert talking_tools.generate_suggestions("help")[0] == "call for help"
        assert talking_tools.build_prompt(talking_tools.Pronoun.I, "help", "call for help") == "I call for help"


# ---------------------------------------------------------------------------
# validate_talking.py
# ---------------------------------------------------------------------------

class TestValidationScript:
    def test_all_checks_pass_on_repo(self):
        mod = load_script("validate_talking")
        assert mod.run_all_checks() is True

    def test_missing_config_is_reported(self, tmp_path):
        mod = load_script("validate_talking")
        results = mod.validate_config(tmp_path / "talking.yaml")
        assert len(results) == 1
        assert results[0][1] is False
        assert "not found" in results[0][2]

    def test_config_missing_keys_is_reported(self, tmp_path):
        mod = load_script("validate_talking")
        path = tmp_path / "talking.yaml"
        path.write_text("pronouns: [I]\n", encoding="utf-8")
        results = mod.validate_config(path)
        assert results[0][1] is False
        assert "missing keys" in results[0][2]

    def test_sentence_cases_all_pass(self):
        mod = load_script("validate_talking")
        failed = [r for r in mod.validate_sentences() if not r[1]]
        assert failed == []

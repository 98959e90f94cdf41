"""Unit tests for extraction_service."""

import pytest

from src.core.config import ScoringConfig
from src.core.errors import InvalidInputError
from src.services.extraction_service import extract_tasks, split_sentences


@pytest.mark.unit
class TestExtractTasks:
    """Tests for extract_tasks."""

    def test_keeps_only_actionable_sentences(self):
        """Test keeps only actionable sentences."""
        tasks = extract_tasks("Build the API. The sky is blue. Test the endpoints!")

        assert [t.title for t in tasks] == ["Build the API", "Test the endpoints"]
        assert [t.id for t in tasks] == ["extracted_0", "extracted_1"]

    def test_extracted_task_defaults(self):
        """Test extracted task defaults."""
        [task] = extract_tasks("  Deploy to production  ")

        assert task.title == "Deploy to production"
        assert task.description == 'Auto-extracted from: "Deploy to production"'
        assert task.priority == "medium"
        assert task.status == "todo"
        assert task.ai_generated is True

    def test_serializes_with_client_field_names(self):
        """Test serializes with client field names."""
        [task] = extract_tasks("Fix the login bug.")

        assert task.model_dump(by_alias=True) == {
            "id": "extracted_0",
            "title": "Fix the login bug",
            "description": 'Auto-extracted from: "Fix the login bug"',
            "priority": "medium",
            "status": "todo",
            "aiGenerated": True,
        }

    def test_matching_is_case_insensitive(self):
        """Test matching is case insensitive."""
        tasks = extract_tasks("DEPLOY NOW. Please REVIEW the PR")

        assert [t.title for t in tasks] == ["DEPLOY NOW", "Please REVIEW the PR"]

    def test_matching_is_by_substring(self):
        """Test matching is by substring."""
        # "contest" contains "test"
        tasks = extract_tasks("The contest starts at noon.")

        assert [t.title for t in tasks] == ["The contest starts at noon"]

    def test_repeated_sentences_are_kept(self):
        """Test repeated sentences are kept."""
        tasks = extract_tasks("Fix it. Fix it. Fix it.")

        assert [t.title for t in tasks] == ["Fix it", "Fix it", "Fix it"]
        assert [t.id for t in tasks] == ["extracted_0", "extracted_1", "extracted_2"]

    def test_runs_of_punctuation_split_once(self):
        """Test runs of punctuation split once."""
        tasks = extract_tasks("Update docs!!! Review code??? Done...")

        assert [t.title for t in tasks] == ["Update docs", "Review code"]

    def test_ids_count_only_retained_sentences(self):
        """Test ids count only retained sentences."""
        tasks = extract_tasks("Hello there. Implement search. Nice weather. Design the logo.")

        assert [(t.id, t.title) for t in tasks] == [
            ("extracted_0", "Implement search"),
            ("extracted_1", "Design the logo"),
        ]

    @pytest.mark.parametrize("text", ["", "   ", "...!!!", "Nothing to see here."])
    def test_no_tasks(self, text):
        """Test that text without action words yields no tasks."""
        assert extract_tasks(text) == []

    def test_custom_vocabulary(self):
        """Test that a configured vocabulary replaces the default words."""
        config = ScoringConfig(action_words=["refactor"])

        tasks = extract_tasks("Refactor the parser. Build the UI.", config=config)

        assert [t.title for t in tasks] == ["Refactor the parser"]

    def test_configured_words_match_regardless_of_case(self):
        """Test that capitalized configured action words still match."""
        config = ScoringConfig(action_words=["Refactor"])

        tasks = extract_tasks("Refactor the parser. REFACTOR the lexer. Ship it.", config=config)

        assert [t.title for t in tasks] == ["Refactor the parser", "REFACTOR the lexer"]

    def test_non_string_raises(self):
        """Test that non-string input is rejected."""
        with pytest.raises(InvalidInputError, match="text must be a string"):
            extract_tasks(None)


@pytest.mark.unit
def test_split_sentences_drops_blank_fragments():
    """Test split sentences drops blank fragments."""
    assert split_sentences("One. . Two!  ?Three") == ["One", " Two", "Three"]

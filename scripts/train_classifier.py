"""CLI wrapper to (re)train the request classifier and persist it."""
import sys
from pathlib import Path
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from nutrichat_app.classifier.request_classifier import NaiveBayesRequestClassifier, TRAINING_PHRASES
from nutrichat_app.model_io import save_classifier

if __name__ == '__main__':
    print(f"Training request classifier on {len(TRAINING_PHRASES)} phrases...")
    classifier = NaiveBayesRequestClassifier()
    target = save_classifier(classifier, sys.argv[1] if len(sys.argv) > 1 else None)
    print("Training done. Saved file:", target)
    for query in sys.argv[2:]:
        print(f"  {query!r} -> {classifier.classify(query).name}")

"""Bag-of-words Naive Bayes classifier for personalization levels."""
import hashlib
import logging
import re

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import Pipeline

from .base import BaseRequestClassifier, PersonalizationLevel

logger = logging.getLogger(__name__)

# Labelled seed phrases. This is the whole training set; it is part of the
# design, not user data.
TRAINING_PHRASES = [
    ('analyze my', 'FULL'),
    ('evaluate my', 'FULL'),
    ('review my', 'FULL'),
    ('check my', 'FULL'),
    ('assess my', 'FULL'),
    ('my current', 'FULL'),
    ('my progress', 'FULL'),
    ('my status', 'FULL'),
    ('my condition', 'FULL'),
    ('my situation', 'FULL'),
    ('my history', 'FULL'),

    ('recommend', 'MODERATE'),
    ('suggest', 'MODERATE'),
    ('plan', 'MODERATE'),
    ('advice', 'MODERATE'),
    ('help me with', 'MODERATE'),
    ('guide me on', 'MODERATE'),
    ('what should I', 'MODERATE'),
    ('how to', 'MODERATE'),
    ('tips for', 'MODERATE'),
    ('ideas for', 'MODERATE'),
    ('diet for', 'MODERATE'),
    ('meal plan for', 'MODERATE'),
    ('nutrition for', 'MODERATE'),

    ('what is', 'LIGHT'),
    ('tell me about', 'LIGHT'),
    ('explain', 'LIGHT'),
    ('define', 'LIGHT'),
    ('general information', 'LIGHT'),
    ('basics of', 'LIGHT'),
    ('overview of', 'LIGHT'),
    ('common questions', 'LIGHT'),
    ('information about', 'LIGHT'),
    ('learn about', 'LIGHT'),

    ('calories in', 'NONE'),
    ('nutrition facts for', 'NONE'),
    ('ingredients of', 'NONE'),
    ('food composition of', 'NONE'),
    ('basic info on', 'NONE'),
    ('simple facts about', 'NONE'),
    ('quick answer on', 'NONE'),
    ('straightforward question', 'NONE'),
    ('direct answer for', 'NONE'),
    ('basic question about', 'NONE'),
    ('how many calories', 'NONE'),
    ('what are the ingredients', 'NONE'),
    ('what is the nutrition', 'NONE'),
]

WORD_RE = re.compile(r'\w+')


def tokenize(text: str) -> list:
    """Lowercase word tokens; punctuation is dropped."""
    return WORD_RE.findall(text.lower())


def training_frame(phrases=None) -> pd.DataFrame:
    return pd.DataFrame(phrases or TRAINING_PHRASES, columns=['phrase', 'level'])


def training_fingerprint(phrases=None) -> str:
    """Short stable hash of the training set, used to name saved artefacts."""
    df = training_frame(phrases)
    joined = '\n'.join(f"{p}\t{l}" for p, l in zip(df['phrase'], df['level']))
    return hashlib.sha1(joined.encode('utf-8')).hexdigest()[:12]


def build_pipeline() -> Pipeline:
    # keep single-character tokens such as "i"
    return Pipeline([
        ('vectorizer', CountVectorizer(tokenizer=tokenize, token_pattern=None, lowercase=False)),
        ('nb', MultinomialNB(alpha=1.0)),
    ])


class NaiveBayesRequestClassifier(BaseRequestClassifier):
    """Multinomial Naive Bayes over word counts, trained on construction.

    Pass a fitted `pipeline` to reuse a saved model instead of retraining.
    """

    def __init__(self, phrases=None, pipeline: Pipeline = None):
        self.phrases = list(phrases or TRAINING_PHRASES)
        if pipeline is None:
            pipeline = self.train(self.phrases)
        self.pipeline = pipeline

    @staticmethod
    def train(phrases) -> Pipeline:
        df = training_frame(phrases)
        df['text'] = df['phrase'].map(lambda p: ' '.join(tokenize(p)))
        pipeline = build_pipeline()
        pipeline.fit(df['text'], df['level'])
        logger.info("Trained request classifier on %d phrases", len(df))
        return pipeline

    def classify(self, text: str) -> PersonalizationLevel:
        try:
            tokens = tokenize(text)
            proba = self.pipeline.predict_proba([' '.join(tokens)])[0]
            best = int(np.argmax(proba))
            label = self.pipeline.classes_[best]
            logger.debug("Classified request %r as %s (p=%.3f)", text, label, proba[best])
            return PersonalizationLevel[label]
        except Exception:
            logger.warning("Error classifying request %r, defaulting to LIGHT", text, exc_info=True)
            return PersonalizationLevel.LIGHT

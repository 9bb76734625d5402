from .url_classifier import UrlClassifier

__all__ = ['UrlClassifier']

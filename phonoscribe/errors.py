"""Exceptions raised by the phonemization pipeline."""
from typing import Optional


class PhonemizerError(Exception):
    """Base class for phonemizer errors"""
    pass


class ConfigurationError(PhonemizerError):
    """Invalid phonemizer configuration"""
    pass


class UnknownLanguageError(ConfigurationError):
    """The requested language has no dictionary"""

    def __init__(self, language: str, available: list[str]):
        super().__init__(f"Unknown language '{language}', available: {', '.join(available)}")
        self.language = language
        self.available = available


class InferenceError(PhonemizerError):
    """Error while querying the fallback model"""
    pass


class MissingOutputError(InferenceError):
    """The model response lacks the expected score matrix"""

    def __init__(self, output_name: str, message: Optional[str] = None):
        super().__init__(message or f"No '{output_name}' output tensor from model")
        self.output_name = output_name


class ModelLoadError(PhonemizerError):
    """The model asset could not be found or retrieved"""
    pass

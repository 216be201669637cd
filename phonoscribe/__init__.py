from .errors import PhonemizerError, ConfigurationError, UnknownLanguageError, \
    InferenceError, MissingOutputError, ModelLoadError
from .lexicon import Language, DictionaryStore
from .phonemizers.phonemizer import Phonemizer

__version__ = "0.1.0"

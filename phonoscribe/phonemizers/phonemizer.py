'''
Phonoscribe: dictionary-first phonemization with a sequence-to-sequence fallback
Apache 2.0 License
'''
from pathlib import Path
from typing import Union

from phonoscribe.config import PhonemizerConfig
from phonoscribe.inference import InferenceEngine, OnnxInferenceEngine, get_scores, \
    greedy_decode, make_input
from phonoscribe.lexicon import DictionaryStore, Language, LanguageCode
from phonoscribe.text import Token, reassemble, segment
from phonoscribe.tokenizer import PhonemeTokenizer, Tokenizer
from phonoscribe.utils import logger, pad_ids


class Phonemizer:

    def __init__(self,
                 engine: InferenceEngine,
                 tokenizer: Tokenizer,
                 dictionaries: DictionaryStore,
                 input_name: str = "text",
                 output_name: str = "output",
                 min_sequence_length: int = 64,
                 pad_index: int = 0):
        self.engine = engine
        self.tokenizer = tokenizer
        self.dictionaries = dictionaries
        self.input_name = input_name
        self.output_name = output_name
        self.min_sequence_length = min_sequence_length
        self.pad_index = pad_index

    @classmethod
    def from_config(cls, config: PhonemizerConfig) -> "Phonemizer":
        dictionaries = DictionaryStore.from_folder(config.dictionaries.root_path,
                                                   languages=config.dictionaries.languages)
        tokenizer = PhonemeTokenizer.from_symbols(**config.tokenizer.model_dump())
        engine = OnnxInferenceEngine.from_path(config.model.path,
                                               cache_folder=config.model.cache_folder,
                                               providers=config.model.providers,
                                               check=config.model.check)
        return cls(engine, tokenizer, dictionaries,
                   input_name=config.model.input_name,
                   output_name=config.model.output_name,
                   min_sequence_length=config.model.min_sequence_length,
                   pad_index=config.model.pad_index)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Phonemizer":
        return cls.from_config(PhonemizerConfig.from_yaml(path))

    def __call__(self, text: str,
                 lang: LanguageCode = Language.EN_US,
                 keep_punctuation: bool = False) -> str:
        return self.phonemize(text, lang, keep_punctuation)

    def phonemize(self, text: str,
                  lang: LanguageCode = Language.EN_US,
                  keep_punctuation: bool = False) -> str:
        """Transcribes ``text`` word by word and reattaches punctuation.

        Dictionary words are looked up directly. Any other word goes through
        the model, one inference call at a time in text order. Dropped punctuation
        (``keep_punctuation=False``) still leaves an empty slot in the output,
        so "hello, world" comes out with two spaces between the words.
        """
        lang = self.dictionaries.check_language(lang)
        phonemes = [self.resolve(token, lang, keep_punctuation) for token in segment(text)]
        return reassemble(phonemes)

    def resolve(self, token: Token, lang: LanguageCode, keep_punctuation: bool = False) -> str:
        if not token.is_word:
            return token.text if keep_punctuation else ""

        word = token.text.lower()
        phonemes = self.dictionaries.lookup(lang, word)
        if phonemes is None:
            logger.debug(f"'{word}' missing from '{lang}' dictionary, falling back to model")
            phonemes = self.predict(word, lang)
        return phonemes

    def predict(self, word: str, lang: LanguageCode = Language.EN_US) -> str:
        ids = self.tokenizer.encode(word, lang)
        ids = pad_ids(ids, self.min_sequence_length, self.pad_index)

        outputs = self.engine.run({self.input_name: make_input(ids)})
        scores = get_scores(outputs, self.output_name)

        out_ids = greedy_decode(scores)
        phonemes = self.tokenizer.decode(out_ids)
        logger.debug(f"Predicted '{word}' -> '{phonemes}'")
        return phonemes

from typing import Iterable, Protocol, Sequence

from .errors import ConfigurationError
from .lexicon import LanguageCode, language_code


class Tokenizer(Protocol):

    def encode(self, text: str, language: LanguageCode) -> list[int]:
        ...

    def decode(self, ids: Sequence[int]) -> str:
        ...


class SequenceTokenizer:
    """Maps symbols to integer ids for one side of the model (graphemes or phonemes).

    The id layout is fixed: the pad token takes id 0, then comes one ``<lang>``
    start token per language, then the ``<end>`` token, then the symbols in order.
    """

    def __init__(self,
                 symbols: Iterable[str],
                 languages: Iterable[LanguageCode],
                 char_repeats: int = 1,
                 lowercase: bool = True,
                 append_start_end: bool = True,
                 pad_token: str = "_",
                 end_token: str = "<end>"):
        self.languages = [language_code(lang) for lang in languages]
        self.char_repeats = char_repeats
        self.lowercase = lowercase
        self.append_start_end = append_start_end
        self.pad_index = 0
        self.token_to_idx = {pad_token: self.pad_index}
        self.special_tokens = {pad_token, end_token}
        for lang in self.languages:
            lang_token = self.start_token(lang)
            self.token_to_idx[lang_token] = len(self.token_to_idx)
            self.special_tokens.add(lang_token)
        self.token_to_idx[end_token] = len(self.token_to_idx)
        self.end_index = self.token_to_idx[end_token]
        for symbol in symbols:
            if symbol not in self.token_to_idx:
                self.token_to_idx[symbol] = len(self.token_to_idx)
        self.idx_to_token = {i: s for s, i in self.token_to_idx.items()}

    @staticmethod
    def start_token(language: str) -> str:
        return f"<{language}>"

    @property
    def vocab_size(self) -> int:
        return len(self.token_to_idx)

    def start_index(self, language: LanguageCode) -> int:
        code = language_code(language)
        if code not in self.languages:
            raise ConfigurationError(f"Language '{code}' is not supported by the tokenizer, "
                                     f"supported: {', '.join(self.languages)}")
        return self.token_to_idx[self.start_token(code)]

    def __call__(self, sentence: Iterable[str], language: LanguageCode) -> list[int]:
        start = self.start_index(language)
        if self.lowercase:
            sentence = [s.lower() for s in sentence]
        sentence = [s for s in sentence for _ in range(self.char_repeats)]
        sequence = [self.token_to_idx[s] for s in sentence if s in self.token_to_idx]
        if self.append_start_end:
            sequence = [start] + sequence + [self.end_index]
        return sequence

    def decode(self, sequence: Sequence[int], remove_special_tokens: bool = False) -> list[str]:
        sequence = [int(t) for t in sequence]
        decoded = [self.idx_to_token[t] for t in sequence if t in self.idx_to_token]
        if remove_special_tokens:
            decoded = [d for d in decoded if d not in self.special_tokens]
        return decoded


def dedup_ids(ids: Sequence[int], pad_index: int = 0) -> list[int]:
    """Collapses consecutive repeats and drops padding, as forward models emit them."""
    out = []
    previous = None
    for t in ids:
        t = int(t)
        if t != previous and t != pad_index:
            out.append(t)
        previous = t
    return out


class PhonemeTokenizer:
    """Text encoder on the input side, phoneme decoder on the output side"""

    def __init__(self,
                 text_tokenizer: SequenceTokenizer,
                 phoneme_tokenizer: SequenceTokenizer,
                 separator: str = ""):
        self.text_tokenizer = text_tokenizer
        self.phoneme_tokenizer = phoneme_tokenizer
        self.separator = separator

    @classmethod
    def from_symbols(cls,
                     languages: Iterable[LanguageCode],
                     text_symbols: Iterable[str],
                     phoneme_symbols: Iterable[str],
                     char_repeats: int = 1,
                     lowercase: bool = True,
                     append_start_end: bool = True,
                     separator: str = "") -> "PhonemeTokenizer":
        languages = list(languages)
        text_tokenizer = SequenceTokenizer(text_symbols, languages,
                                           char_repeats=char_repeats,
                                           lowercase=lowercase,
                                           append_start_end=append_start_end)
        phoneme_tokenizer = SequenceTokenizer(phoneme_symbols, languages,
                                              lowercase=False,
                                              append_start_end=append_start_end)
        return cls(text_tokenizer, phoneme_tokenizer, separator=separator)

    def encode(self, text: str, language: LanguageCode) -> list[int]:
        return self.text_tokenizer(text, language)

    def decode(self, ids: Sequence[int]) -> str:
        ids = dedup_ids(ids, self.phoneme_tokenizer.pad_index)
        if self.phoneme_tokenizer.end_index in ids:
            ids = ids[:ids.index(self.phoneme_tokenizer.end_index)]
        symbols = self.phoneme_tokenizer.decode(ids, remove_special_tokens=True)
        return self.separator.join(symbols)

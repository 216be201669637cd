import numpy as np
import pytest

from phonoscribe import MissingOutputError, Phonemizer, UnknownLanguageError
from phonoscribe.text import Token, TokenKind

# text ids of the first letter of each out of vocabulary word
C, D = 6, 7
# phoneme ids
EN_US, END, K, AE, T, D_ = 1, 3, 12, 13, 14, 11


def test_dictionary_words_keep_punctuation(phonemizer, engine):
    assert phonemizer("hello, world!", keep_punctuation=True) == "hə-loʊ, wɜːrld!"
    assert engine.calls == []


def test_dictionary_words_drop_punctuation_leaves_empty_slots(phonemizer):
    assert phonemizer("hello, world!") == "hə-loʊ  wɜːrld "


def test_case_is_ignored_for_lookup(phonemizer):
    assert phonemizer.phonemize("HeLLo World", lang="en_us") == "hə-loʊ wɜːrld"


def test_strip_set_punctuation_attaches_either_way(phonemizer):
    assert phonemizer("(hello)", keep_punctuation=True) == "(hə-loʊ)"
    assert phonemizer("(hello)") == " hə-loʊ "


def test_oov_word_goes_through_model(phonemizer, engine):
    engine.script(C, [EN_US, K, K, AE, T, END])
    assert phonemizer("hello cat.", keep_punctuation=True) == "hə-loʊ kæt."

    assert len(engine.calls) == 1
    feeds = engine.calls[0]
    assert list(feeds) == ["text"]
    x = feeds["text"]
    assert x.dtype == np.int64
    assert x.shape == (1, 64)
    assert x[0, :5].tolist() == [1, 6, 4, 23, 3]
    assert not x[0, 5:].any()


def test_one_model_call_per_oov_word_in_order(phonemizer, engine):
    engine.script(C, [EN_US, K, AE, T, END])
    engine.script(D, [EN_US, D_, AE, END])
    assert phonemizer("cat dad cat") == "kæt dæ kæt"
    assert [int(c["text"][0, 1]) for c in engine.calls] == [C, D, C]


def test_long_words_are_not_truncated(phonemizer, engine):
    word = "c" * 70
    phonemizer(word)
    assert engine.calls[0]["text"].shape == (1, 72)


def test_language_specific_dictionary(phonemizer, engine):
    assert phonemizer("Welt", lang="de") == "vɛlt"
    engine.script(22, [EN_US, K, END])  # s
    phonemizer("sonne", lang="de")
    assert int(engine.calls[0]["text"][0, 0]) == 2  # <de>


def test_unknown_language_fails_before_any_work(phonemizer, engine, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("segmentation should not happen")

    monkeypatch.setattr("phonoscribe.phonemizers.phonemizer.segment", fail)
    with pytest.raises(UnknownLanguageError):
        phonemizer("cat", lang="fr")
    assert engine.calls == []


def test_missing_output_aborts_the_call(tokenizer, dictionaries):
    class NoOutputEngine:
        def run(self, feeds):
            return {"logits": np.zeros((1, 64, 16), dtype=np.float32)}

    phonemizer = Phonemizer(NoOutputEngine(), tokenizer, dictionaries)
    assert phonemizer("hello world") == "hə-loʊ wɜːrld"
    with pytest.raises(MissingOutputError):
        phonemizer("hello cat world")


def test_engine_errors_propagate(tokenizer, dictionaries):
    class BrokenEngine:
        def run(self, feeds):
            raise RuntimeError("session died")

    phonemizer = Phonemizer(BrokenEngine(), tokenizer, dictionaries)
    with pytest.raises(RuntimeError, match="session died"):
        phonemizer("cat")


def test_custom_tensor_names(tokenizer, dictionaries, engine):
    engine.output_name = "logits"
    phonemizer = Phonemizer(engine, tokenizer, dictionaries,
                            input_name="input", output_name="logits",
                            min_sequence_length=8)
    engine.script(C, [EN_US, K, AE, T, END])
    assert phonemizer("cat") == "kæt"
    assert engine.calls[0]["input"].shape == (1, 8)


def test_resolve_punctuation(phonemizer):
    comma = Token(TokenKind.PUNCTUATION, ",")
    assert phonemizer.resolve(comma, "en_us", keep_punctuation=True) == ","
    assert phonemizer.resolve(comma, "en_us") == ""


def test_no_cache_between_calls(phonemizer, engine):
    engine.script(C, [EN_US, K, AE, T, END])
    phonemizer("cat")
    phonemizer("cat")
    assert len(engine.calls) == 2

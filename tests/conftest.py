"""
Shared fixtures: a small tokenizer, an in-memory dictionary store and a fake
inference engine returning scripted score matrices, so no model file is needed.
"""
import numpy as np
import pytest

from phonoscribe import DictionaryStore, Phonemizer
from phonoscribe.tokenizer import PhonemeTokenizer


class FakeEngine:
    """Returns one-hot scores spelling ``targets`` and records every feed it gets"""

    def __init__(self, vocab_size: int, output_name: str = "output"):
        self.vocab_size = vocab_size
        self.output_name = output_name
        self.targets: dict[int, list[int]] = {}
        self.calls: list[dict[str, np.ndarray]] = []

    def script(self, first_input_id: int, out_ids: list[int]):
        self.targets[first_input_id] = out_ids

    def run(self, feeds):
        self.calls.append(feeds)
        ids = next(iter(feeds.values()))
        seq_len = ids.shape[1]
        scores = np.zeros((1, seq_len, self.vocab_size), dtype=np.float32)
        scores[0, :, 0] = 1.0
        # keyed on the first encoded character since the start token is shared
        for t, out_id in enumerate(self.targets.get(int(ids[0, 1]), [])):
            scores[0, t, 0] = 0.0
            scores[0, t, out_id] = 1.0
        return {self.output_name: scores}


@pytest.fixture
def tokenizer():
    return PhonemeTokenizer.from_symbols(
        languages=["en_us", "de"],
        text_symbols=list("abcdefghijklmnopqrstuvwxyz'"),
        phoneme_symbols=["h", "ə", "l", "oʊ", "w", "ɜː", "r", "d", "k", "æ", "t", "-"],
    )


@pytest.fixture
def dictionaries():
    return DictionaryStore({
        "en_us": {"hello": "hə-loʊ", "world": "wɜːrld"},
        "de": {"welt": "vɛlt"},
    })


@pytest.fixture
def engine(tokenizer):
    return FakeEngine(tokenizer.phoneme_tokenizer.vocab_size)


@pytest.fixture
def phonemizer(engine, tokenizer, dictionaries):
    return Phonemizer(engine, tokenizer, dictionaries)


@pytest.fixture
def onnx_model_path(tmp_path):
    """A tiny valid model mapping int64 ``text`` [1, seq] to float ``output`` [1, seq, 1]"""
    import onnx
    from onnx import TensorProto, helper

    text = helper.make_tensor_value_info("text", TensorProto.INT64, [1, "seq"])
    output = helper.make_tensor_value_info("output", TensorProto.FLOAT, [1, "seq", 1])
    axes = helper.make_tensor("axes", TensorProto.INT64, [1], [2])
    graph = helper.make_graph(
        [helper.make_node("Cast", ["text"], ["scores"], to=TensorProto.FLOAT),
         helper.make_node("Unsqueeze", ["scores", "axes"], ["output"])],
        "fallback", [text], [output], initializer=[axes])
    model = helper.make_model(graph, opset_imports=[helper.make_opsetid("", 13)])
    model.ir_version = 8
    path = tmp_path / "model.onnx"
    onnx.save(model, str(path))
    return path

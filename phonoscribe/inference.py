import os
from pathlib import Path, PurePosixPath
from typing import Protocol, Sequence
from urllib.parse import urlparse

import numpy as np
import onnx
import onnxruntime
import requests
import validators
from tqdm import tqdm

from .errors import MissingOutputError, ModelLoadError
from .utils import logger

ONNX_CPU_PROVIDERS = [
    "CPUExecutionProvider",
]

DOWNLOAD_TIMEOUT = 120  # seconds


class InferenceEngine(Protocol):

    def run(self, feeds: dict[str, np.ndarray]) -> dict[str, np.ndarray]:
        ...


def model_filename(url: str) -> str:
    name = PurePosixPath(urlparse(url).path).name
    if not name:
        raise ModelLoadError(f"Cannot infer a model file name from {url}")
    return name


def http_get(url: str, temp_file, timeout: float = DOWNLOAD_TIMEOUT):
    with requests.get(url, stream=True, timeout=timeout) as req:
        req.raise_for_status()
        content_length = req.headers.get("Content-Length")
        total = int(content_length) if content_length is not None else None
        with tqdm(unit="B", unit_scale=True, total=total) as progress:
            for chunk in req.iter_content(chunk_size=1024 * 1024):
                if chunk:  # filter out keep-alive new chunks
                    progress.update(len(chunk))
                    temp_file.write(chunk)


def fetch_model(path: str, cache_folder: Path, timeout: float = DOWNLOAD_TIMEOUT) -> Path:
    """Returns a local path for the model, downloading it first if ``path`` is an URL.

    The download is written next to its final name and only moved there once complete,
    so an interrupted download is never mistaken for a cached model.
    """
    if not validators.url(path):
        model_path = Path(path)
        if not model_path.is_file():
            raise ModelLoadError(f"Model file not found: {model_path}")
        return model_path

    model_path = Path(cache_folder) / model_filename(path)
    if model_path.is_file():
        return model_path

    logger.info(f"Downloading model from {path} to {model_path}")
    model_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = model_path.with_name(model_path.name + ".tmp")
    try:
        with open(temp_path, "wb") as temp_file:
            http_get(path, temp_file, timeout=timeout)
        os.replace(temp_path, model_path)
    except requests.RequestException as e:
        raise ModelLoadError(f"Could not download model from {path}") from e
    finally:
        temp_path.unlink(missing_ok=True)
    return model_path


def load_session(model_path: Path,
                 providers: Sequence[str] = ONNX_CPU_PROVIDERS,
                 check: bool = False) -> onnxruntime.InferenceSession:
    if check:
        onnx.checker.check_model(str(model_path), full_check=True)

    options = onnxruntime.SessionOptions()
    options.graph_optimization_level = onnxruntime.GraphOptimizationLevel.ORT_ENABLE_ALL
    options.enable_cpu_mem_arena = True
    options.enable_mem_pattern = True
    options.execution_mode = onnxruntime.ExecutionMode.ORT_SEQUENTIAL

    logger.info(f"Loading model from {model_path}")
    return onnxruntime.InferenceSession(str(model_path), sess_options=options,
                                        providers=list(providers))


class OnnxInferenceEngine:
    """Runs named int64 feeds through an onnxruntime session and names the outputs"""

    def __init__(self, session: onnxruntime.InferenceSession):
        self.session = session
        self.output_names = [o.name for o in session.get_outputs()]

    @classmethod
    def from_path(cls, path: str,
                  cache_folder: Path,
                  providers: Sequence[str] = ONNX_CPU_PROVIDERS,
                  check: bool = False) -> "OnnxInferenceEngine":
        model_path = fetch_model(path, cache_folder)
        return cls(load_session(model_path, providers=providers, check=check))

    def run(self, feeds: dict[str, np.ndarray]) -> dict[str, np.ndarray]:
        outputs = self.session.run(self.output_names, feeds)
        return dict(zip(self.output_names, outputs))


def make_input(ids: Sequence[int]) -> np.ndarray:
    return np.array([ids], dtype=np.int64)


def get_scores(outputs: dict[str, np.ndarray], output_name: str) -> np.ndarray:
    scores = outputs.get(output_name)
    if scores is None:
        raise MissingOutputError(output_name)
    scores = np.asarray(scores)
    if scores.ndim != 3:
        raise MissingOutputError(
            output_name,
            f"Expected '{output_name}' of shape [batch, sequence, vocab], got {scores.shape}")
    if scores.shape[-1] == 0:
        raise MissingOutputError(output_name, f"'{output_name}' has an empty vocabulary axis")
    return scores


def greedy_decode(scores: np.ndarray) -> list[int]:
    """Picks the highest scoring symbol at each position of the first batch item.

    ``np.argmax`` returns the first occurrence of the maximum, so ties go to
    the lowest index.
    """
    return np.argmax(scores[0], axis=-1).tolist()

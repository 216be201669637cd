from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

from .lexicon import Language


class PhonemizerConfig(BaseModel):

    class ModelConfig(BaseModel):
        path: str  # local path or URL of the onnx model
        cache_folder: Path = Path.home() / ".cache" / "phonoscribe"
        input_name: str = "text"
        output_name: str = "output"
        min_sequence_length: int = 64
        pad_index: int = 0
        providers: list[str] = ["CPUExecutionProvider"]
        check: bool = False  # run the onnx checker before creating the session

    model: ModelConfig

    class DictionariesConfig(BaseModel):
        root_path: Path
        languages: Optional[list[str]] = None  # None loads every json in root_path

    dictionaries: DictionariesConfig

    class TokenizerConfig(BaseModel):
        languages: list[str] = Field(default_factory=lambda: [lang.value for lang in Language])
        text_symbols: list[str]
        phoneme_symbols: list[str]
        char_repeats: int = 1
        lowercase: bool = True
        append_start_end: bool = True
        separator: str = ""

    tokenizer: TokenizerConfig

    class DefaultsConfig(BaseModel):
        language: str = Language.EN_US.value
        keep_punctuation: bool = False

    defaults: DefaultsConfig = DefaultsConfig()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PhonemizerConfig":
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.load(f, Loader=yaml.FullLoader)
        return cls(**config)

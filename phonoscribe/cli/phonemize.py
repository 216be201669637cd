'''
Usage:
    phonoscribe-phonemize --config phonemizer.yaml --text "Hello, world!" --lang en_us
    phonoscribe-phonemize --config phonemizer.yaml --input_file sentences.txt --keep_punctuation True
'''
import logging
from pathlib import Path
from typing import Optional

from tap import Tap
from tqdm import tqdm

from phonoscribe.config import PhonemizerConfig
from phonoscribe.phonemizers import Phonemizer
from phonoscribe.utils import logger, print_args


class PhonemizeCommand(Tap):
    config: Path  # Path to phonemizer config file (yaml)
    text: Optional[str] = None  # Text to phonemize
    input_file: Optional[Path] = None  # Text file to phonemize, one sentence per line
    lang: Optional[str] = None  # Language code, defaults to the config's language
    keep_punctuation: Optional[bool] = None  # Keep punctuation marks (True/False), defaults to the config
    verbose: bool = False

    def process_args(self):
        if (self.text is None) == (self.input_file is None):
            self.error("provide exactly one of --text or --input_file")


def main():
    args = PhonemizeCommand().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    if args.verbose:
        print_args(args)

    config = PhonemizerConfig.from_yaml(args.config)
    lang = args.lang if args.lang is not None else config.defaults.language
    keep_punctuation = args.keep_punctuation if args.keep_punctuation is not None \
        else config.defaults.keep_punctuation

    phonemizer = Phonemizer.from_config(config)

    if args.text is not None:
        print(phonemizer(args.text, lang=lang, keep_punctuation=keep_punctuation))
        return

    with open(args.input_file, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()
    logger.info(f"Phonemizing {len(lines)} lines from {args.input_file}")
    for line in tqdm(lines):
        tqdm.write(phonemizer(line, lang=lang, keep_punctuation=keep_punctuation))


if __name__ == "__main__":
    main()

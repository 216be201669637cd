'''
Usage:
    phonoscribe-check-model --checkpoint deep-phonemizer.onnx
'''
import logging
from pathlib import Path

import onnx
from tap import Tap

from phonoscribe.inference import ONNX_CPU_PROVIDERS, fetch_model, load_session


class CheckModelCommand(Tap):
    checkpoint: str  # Path or URL to the onnx model
    cache_folder: Path = Path.home() / ".cache" / "phonoscribe"
    verbose: bool = False


def describe(nodes) -> str:
    return ", ".join(f"{node.name}{node.shape} ({node.type})" for node in nodes)


def main():
    args = CheckModelCommand().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    model_path = fetch_model(args.checkpoint, args.cache_folder)
    onnx_model = onnx.load(str(model_path))
    onnx.checker.check_model(onnx_model, full_check=True)
    opsets = [f"{o.domain or 'ai.onnx'}:{o.version}" for o in onnx_model.opset_import]
    print(f"Opset: {', '.join(opsets)}")

    session = load_session(model_path, providers=ONNX_CPU_PROVIDERS)
    print(f"Inputs: {describe(session.get_inputs())}")
    print(f"Outputs: {describe(session.get_outputs())}")


if __name__ == "__main__":
    main()

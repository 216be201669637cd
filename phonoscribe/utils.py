import logging

logger = logging.getLogger("phonoscribe")


def pad_ids(ids: list[int], min_length: int, pad_index: int = 0) -> list[int]:
    """Right-pads an id sequence up to ``min_length``. Longer sequences are left untouched."""
    if len(ids) >= min_length:
        return list(ids)
    return list(ids) + [pad_index] * (min_length - len(ids))


def print_args(args):
    opt_log = '--------------- Options ---------------\n'
    opt = vars(args)
    for k, v in opt.items():
        opt_log += f'{str(k)}: {str(v)}\n'
    opt_log += '---------------------------------------\n'
    print(opt_log)
    return opt_log

"""
Groth16 키 생성 도구
======================

MultiplicationCircuit.empty() 로 setup 을 한 번 실행하고 키를 두 가지 형태로
저장한다:

    <keys-dir>/proving_key.bin       <keys-dir>/proving_key.hex
    <keys-dir>/verification_key.bin  <keys-dir>/verification_key.hex

실행:
    $ python -m zkmul.groth16.keygen                 # 고정 seed (테스트용)
    $ python -m zkmul.groth16.keygen --secure        # OS 난수 (운영용)
    $ python -m zkmul.groth16.keygen --seed 00ff...  # 지정 seed

setup 을 다시 실행하면 이전 키로 만든 모든 증명은 새 검증 키로 검증되지 않는다.
"""

import argparse
import logging
import os
import sys
import tempfile

from zkmul import config
from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.codec import hex_to_bytes
from zkmul.groth16.errors import DecodingError, Groth16Error
from zkmul.groth16.rng import SecureRandom, SeededRandom
from zkmul.groth16.setup import generate_random_parameters

logger = logging.getLogger(__name__)


def key_paths(keys_dir, name):
    return (os.path.join(keys_dir, name + ".bin"),
            os.path.join(keys_dir, name + ".hex"))


def _write_temp(keys_dir, data, mode):
    """keys_dir 안의 임시 파일에 쓰고 경로를 돌려준다. 실패하면 임시 파일은 지운다."""
    fd, tmp_path = tempfile.mkstemp(dir=keys_dir, prefix=".", suffix=".tmp")
    try:
        with os.fdopen(fd, mode) as f:
            f.write(data)
    except OSError:
        os.remove(tmp_path)
        raise
    return tmp_path


def write_keys(keys_dir, pk, vk):
    """두 키를 .bin / .hex 로 저장한다.

    네 파일을 모두 임시 파일로 쓴 뒤에만 os.replace 로 제자리에 옮긴다.
    중간에 실패하면 기존 키 파일은 그대로 남는다.
    """
    vk_bytes = vk.to_bytes()
    pk_bytes = pk.to_bytes()
    os.makedirs(keys_dir, exist_ok=True)

    staged = []
    try:
        for name, key_bytes in ((config.VERIFYING_KEY_NAME, vk_bytes),
                                (config.PROVING_KEY_NAME, pk_bytes)):
            bin_path, hex_path = key_paths(keys_dir, name)
            staged.append((_write_temp(keys_dir, key_bytes, "wb"), bin_path))
            staged.append((_write_temp(keys_dir, key_bytes.hex(), "w"), hex_path))
    except OSError:
        for tmp_path, _ in staged:
            os.remove(tmp_path)
        raise

    for tmp_path, final_path in staged:
        os.replace(tmp_path, final_path)
    logger.info("keys written to %s (proving key %d bytes, verifying key %d bytes)",
                keys_dir, len(pk_bytes), len(vk_bytes))


def _read_hex(keys_dir, name):
    _, hex_path = key_paths(keys_dir, name)
    with open(hex_path) as f:
        return f.read().strip()


def load_proving_key_hex(keys_dir=None):
    return _read_hex(keys_dir or config.KEYS_DIR, config.PROVING_KEY_NAME)


def load_verifying_key_hex(keys_dir=None):
    return _read_hex(keys_dir or config.KEYS_DIR, config.VERIFYING_KEY_NAME)


def make_rng(seed_hex=None, secure=False):
    if secure:
        return SecureRandom()
    seed = config.TEST_SEED if seed_hex is None else hex_to_bytes(seed_hex)
    logger.warning("using a deterministic setup seed; do not use these keys in production")
    return SeededRandom(seed)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate Groth16 proving and verifying keys for the c = a * b circuit")
    parser.add_argument("--keys-dir", default=config.KEYS_DIR,
                        help="output directory (default: %(default)s)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--seed", help="hex seed for a reproducible setup")
    group.add_argument("--secure", action="store_true",
                       help="draw toxic waste from the OS random source")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)

    try:
        rng = make_rng(args.seed, args.secure)
    except DecodingError as e:
        logger.error("invalid --seed: %s", e)
        return 2

    logger.info("running setup (this may take a while)")
    try:
        pk, vk = generate_random_parameters(MultiplicationCircuit.empty(), rng)
        write_keys(args.keys_dir, pk, vk)
    except (Groth16Error, OSError) as e:
        logger.error("key generation failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.proving import prove
from zkmul.groth16.rng import SeededRandom
from zkmul.groth16.setup import generate_random_parameters
from zkmul.groth16.verifying import prepare_verifying_key


# ── 테스트 상수 ──
SETUP_SEED = bytes(32)
OTHER_SETUP_SEED = b"\x01" * 32
PROVER_SEED = b"prover"

TEST_C = 12
TEST_A = 3
TEST_B = 4


@pytest.fixture(scope="session")
def keypair():
    """고정 seed 로 만든 (ProvingKey, VerifyingKey)."""
    return generate_random_parameters(MultiplicationCircuit.empty(), SeededRandom(SETUP_SEED))


@pytest.fixture(scope="session")
def other_keypair():
    """다른 seed 로 만든 키 쌍 (교차 검증용)."""
    return generate_random_parameters(MultiplicationCircuit.empty(), SeededRandom(OTHER_SETUP_SEED))


@pytest.fixture(scope="session")
def pvk(keypair):
    _, vk = keypair
    return prepare_verifying_key(vk)


@pytest.fixture(scope="session")
def circuit():
    return MultiplicationCircuit(TEST_C, TEST_A, TEST_B)


@pytest.fixture(scope="session")
def proof(keypair, circuit):
    """c = 12, a = 3, b = 4 에 대한 증명."""
    pk, _ = keypair
    return prove(pk, circuit, SeededRandom(PROVER_SEED))

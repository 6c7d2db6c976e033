"""
Groth16 Prover
================

  1. 제약 검사: 임시 ConstraintSystem 에 합성(synthesize)해서 만족 여부를
     먼저 확인한다. 만족하지 않는 witness 로 증명 알고리즘까지 가면 형식만
     올바른 무의미한 증명이 나오므로 ConstraintViolation 으로 중단한다.
  2. 호출마다 새 난수 r, s 를 뽑는다. 같은 입력이라도 증명은 매번 다르며
     모두 유효하다.
  3. 증명 계산:
       A  = α + Σ z_i·a_query_i + r·δ                       (G1)
       B  = β + Σ z_i·b_g2_query_i + s·δ                    (G2)
       B₁ = β + Σ z_i·b_g1_query_i + s·δ                    (G1)
       C  = Σ_witness z_j·l_query_j + Σ h_k·h_query_k
            + s·A + r·B₁ - r·s·δ                            (G1)
  4. create_proof_output(): 성분별 압축 바이트, 공개 입력(회로에서 추출),
     전체 proof hex, 공개 입력 hex 를 하나의 레코드로 묶는다.
"""

import logging

from zkmul.groth16.codec import (
    bytes_to_hex,
    encode_g1,
    encode_g2,
    fr_to_decimal,
)
from zkmul.groth16.errors import (
    ConstraintViolation,
    KeyDeserializationError,
    ProofGenerationError,
    SerializationError,
)
from zkmul.groth16.field import Z1, Z2, ec_add, ec_mul, ec_neg, ec_sum
from zkmul.groth16.keys import Proof
from zkmul.groth16.qap import qap_from_constraint_system, hxr, is_zero_poly
from zkmul.groth16.r1cs import ConstraintSystem
from zkmul.groth16.rng import SecureRandom

logger = logging.getLogger(__name__)


def synthesize_checked(circuit):
    """witness 를 채운 ConstraintSystem. 관계가 깨져 있으면 ConstraintViolation."""
    cs = ConstraintSystem()
    circuit.synthesize(cs)
    unsatisfied = cs.which_is_unsatisfied()
    if unsatisfied is not None:
        raise ConstraintViolation("Constraints are not satisfied: {}".format(unsatisfied))
    return cs


def check_key_shape(pk, cs, numGates):
    numWires = cs.num_variables
    num_instance = cs.num_instance_variables
    expected = [
        ("a_query", len(pk.a_query), numWires),
        ("b_g1_query", len(pk.b_g1_query), numWires),
        ("b_g2_query", len(pk.b_g2_query), numWires),
        ("gamma_abc_g1", len(pk.vk.gamma_abc_g1), num_instance),
        ("l_query", len(pk.l_query), numWires - num_instance),
        ("h_query", len(pk.h_query), numGates - 1),
    ]
    for name, got, want in expected:
        if got != want:
            raise KeyDeserializationError(
                "proving key does not match circuit: {} has {} elements, expected {}".format(
                    name, got, want))


def proof_a(pk, Rx, r):
    proof_A = ec_add(pk.vk.alpha_g1, ec_sum(pk.a_query, Rx, Z1))
    return ec_add(proof_A, ec_mul(pk.delta_g1, r))


def proof_b(pk, Rx, s):
    proof_B = ec_add(pk.vk.beta_g2, ec_sum(pk.b_g2_query, Rx, Z2))
    return ec_add(proof_B, ec_mul(pk.vk.delta_g2, s))


def proof_c(pk, Rx, Hx, num_instance, r, s, prf_A):
    #Build temp_proof_B, g1_based
    temp_proof_B = ec_add(pk.beta_g1, ec_sum(pk.b_g1_query, Rx, Z1))
    temp_proof_B = ec_add(temp_proof_B, ec_mul(pk.delta_g1, s))

    proof_C = ec_add(ec_mul(prf_A, s), ec_mul(temp_proof_B, r))
    proof_C = ec_add(proof_C, ec_neg(ec_mul(pk.delta_g1, r * s)))
    proof_C = ec_add(proof_C, ec_sum(pk.l_query, Rx[num_instance:], Z1))
    proof_C = ec_add(proof_C, ec_sum(pk.h_query, Hx, Z1))
    return proof_C


def prove(pk, circuit, rng=None):
    """Groth16 증명을 생성한다.

    Args:
        pk: ProvingKey
        circuit: witness 가 채워진 MultiplicationCircuit
        rng: 난수 소스. 없으면 이 호출 전용 SecureRandom 을 만든다.

    Raises:
        ConstraintViolation: c ≠ a·b
        KeyDeserializationError: 키의 쿼리 크기가 회로와 맞지 않음
        ProofGenerationError: QAP 나눗셈이 실패함
    """
    if rng is None:
        rng = SecureRandom()

    cs = synthesize_checked(circuit)

    Ax, Bx, Cx, Zx = qap_from_constraint_system(cs)
    numGates = len(Zx) - 1
    check_key_shape(pk, cs, numGates)

    Rx = cs.full_assignment()
    Hx, remainder = hxr(Ax, Bx, Cx, Zx, Rx)
    if not is_zero_poly(remainder):
        raise ProofGenerationError("QAP division left a non-zero remainder")

    r = rng.random_fr()
    s = rng.random_fr()

    prf_A = proof_a(pk, Rx, r)
    prf_B = proof_b(pk, Rx, s)
    prf_C = proof_c(pk, Rx, Hx, cs.num_instance_variables, r, s, prf_A)
    logger.debug("proof generated for %d constraints", cs.num_constraints)
    return Proof(prf_A, prf_B, prf_C)


def create_proof_output(proof, circuit):
    """증명 + 회로 → 경계(boundary) 출력 레코드 (camelCase 키의 dict).

    공개 입력은 호출자가 넘긴 사본이 아니라 회로에서 직접 꺼낸다.
    """
    try:
        proof_a_bytes = encode_g1(proof.a)
        proof_b_bytes = encode_g2(proof.b)
        proof_c_bytes = encode_g1(proof.c)
        public_inputs = [fr_to_decimal(x) for x in circuit.public_inputs()]
        public_inputs_serialized = circuit.serialized_public_inputs()
        proof_serialized = proof_a_bytes + proof_b_bytes + proof_c_bytes
    except (TypeError, ValueError, ZeroDivisionError) as e:
        raise SerializationError("Failed to serialize proof: {}".format(e))

    return {
        "proofA": list(proof_a_bytes),
        "proofB": list(proof_b_bytes),
        "proofC": list(proof_c_bytes),
        "publicInputs": public_inputs,
        "proofSerializedHex": bytes_to_hex(proof_serialized),
        "publicInputsSerializedHex": bytes_to_hex(public_inputs_serialized),
    }

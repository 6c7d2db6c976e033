"""
Groth16 Verifier
==================

검증식:
    e(A, B) == e(α, β) · e(Σ x_i·gamma_abc_i, γ) · e(C, δ)

x_0 = 1 (상수 변수), x_1.. = 공개 입력 (선언 순서).

형식은 올바르지만 검증식이 성립하지 않는 증명은 False 를 돌려준다.
공개 입력의 개수가 키와 맞지 않는 것은 입력 오류(VerificationInputError)이다.
"""

from zkmul.groth16.errors import VerificationInputError
from zkmul.groth16.field import FR, ec_add, ec_pairing, ec_sum, Z1
from zkmul.groth16.keys import PreparedVerifyingKey


def prepare_verifying_key(vk):
    return PreparedVerifyingKey.from_verifying_key(vk)


def prepare_inputs(pvk, public_inputs):
    """Σ x_i·gamma_abc_i (x_0 = 1)"""
    gamma_abc = pvk.vk.gamma_abc_g1
    if len(public_inputs) + 1 != len(gamma_abc):
        raise VerificationInputError(
            "expected {} public inputs, got {}".format(len(gamma_abc) - 1, len(public_inputs)))
    scalars = [x if isinstance(x, FR) else FR(x) for x in public_inputs]
    return ec_add(gamma_abc[0], ec_sum(gamma_abc[1:], scalars, Z1))


def lhs(prf_A, prf_B):
    return ec_pairing(prf_B, prf_A)


def rhs(pvk, prf_C, vk_x):
    vk = pvk.vk
    RHS = pvk.alpha_g1_beta_g2
    RHS = RHS * ec_pairing(vk.gamma_g2, vk_x)
    RHS = RHS * ec_pairing(vk.delta_g2, prf_C)
    return RHS


def verify_proof(pvk, proof, public_inputs):
    vk_x = prepare_inputs(pvk, public_inputs)
    return bool(lhs(proof.a, proof.b) == rhs(pvk, proof.c, vk_x))


def verify(vk, proof, public_inputs):
    return verify_proof(prepare_verifying_key(vk), proof, public_inputs)

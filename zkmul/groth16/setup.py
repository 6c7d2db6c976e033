"""
Groth16 신뢰 설정 (Trusted Setup)
===================================

회로의 제약 모양(topology)만으로 (ProvingKey, VerifyingKey) 를 만든다.
witness 값은 사용하지 않으므로 MultiplicationCircuit.empty() 를 넘긴다.

toxic waste τ(x_val), α, β, γ, δ 는 주입된 난수 소스에서 뽑는다.
이 값을 아는 사람은 거짓 증명을 만들 수 있으므로 setup 이 끝나면 버린다.
같은 seed 의 SeededRandom 은 바이트 단위로 같은 키를 만든다.

  alpha_g1 = α·G1          beta_g1 = β·G1          delta_g1 = δ·G1
  beta_g2  = β·G2          gamma_g2 = γ·G2         delta_g2 = δ·G2
  a_query[i]    = A_i(τ)·G1
  b_g1_query[i] = B_i(τ)·G1,   b_g2_query[i] = B_i(τ)·G2
  gamma_abc_g1[i] = (β·A_i(τ) + α·B_i(τ) + C_i(τ)) / γ · G1   (공개 변수)
  l_query[j]      = (β·A_j(τ) + α·B_j(τ) + C_j(τ)) / δ · G1   (witness)
  h_query[k]      = τ^k · Z(τ) / δ · G1                        (k = 0..n-2)
"""

import logging

from zkmul.groth16.field import FR, G1, G2, ec_mul
from zkmul.groth16.keys import ProvingKey, VerifyingKey
from zkmul.groth16.qap import (
    qap_from_constraint_system,
    getNumGates,
    getNumWires,
    eval_polys,
    eval_poly,
)
from zkmul.groth16.r1cs import ConstraintSystem

logger = logging.getLogger(__name__)


def sample_toxic_waste(rng, numGates):
    """(x_val, alpha, beta, gamma, delta). x_val 은 도메인 {1..n} 밖이어야 Z(x_val) ≠ 0."""
    while True:
        x_val = rng.random_fr()
        if int(x_val) == 0 or int(x_val) > numGates:
            break
    alpha = rng.nonzero_fr()
    beta = rng.nonzero_fr()
    gamma = rng.nonzero_fr()
    delta = rng.nonzero_fr()
    return x_val, alpha, beta, gamma, delta


def query_g1(vals):
    return [ec_mul(G1, val) for val in vals]


def query_g2(vals):
    return [ec_mul(G2, val) for val in vals]


def ic_query(num_instance, alpha, beta, gamma, Ax_val, Bx_val, Cx_val):
    vals = []
    for i in range(num_instance):
        vals.append((beta*Ax_val[i] + alpha*Bx_val[i] + Cx_val[i]) / gamma)
    return query_g1(vals)


def l_query(num_instance, numWires, alpha, beta, delta, Ax_val, Bx_val, Cx_val):
    vals = []
    for i in range(num_instance, numWires):
        vals.append((beta*Ax_val[i] + alpha*Bx_val[i] + Cx_val[i]) / delta)
    return query_g1(vals)


def h_query(numGates, delta, x_val, Zx_val):
    vals = []
    for i in range(numGates - 1):
        vals.append(x_val**i * Zx_val / delta)
    return query_g1(vals)


def generate_parameters(circuit, rng):
    """circuit 의 제약 모양으로 ProvingKey 를 만든다. VerifyingKey 는 pk.vk."""
    cs = ConstraintSystem(setup_mode=True)
    circuit.synthesize(cs)

    Ax, Bx, Cx, Zx = qap_from_constraint_system(cs)
    numGates = getNumGates(Ax)
    numWires = getNumWires(Ax)
    num_instance = cs.num_instance_variables
    logger.info("setup: %d constraints (%d rows), %d variables (%d public)",
                cs.num_constraints, numGates, numWires, num_instance)

    x_val, alpha, beta, gamma, delta = sample_toxic_waste(rng, numGates)

    Ax_val = eval_polys(Ax, x_val)
    Bx_val = eval_polys(Bx, x_val)
    Cx_val = eval_polys(Cx, x_val)
    Zx_val = eval_poly(Zx, x_val)

    vk = VerifyingKey(
        alpha_g1=ec_mul(G1, alpha),
        beta_g2=ec_mul(G2, beta),
        gamma_g2=ec_mul(G2, gamma),
        delta_g2=ec_mul(G2, delta),
        gamma_abc_g1=ic_query(num_instance, alpha, beta, gamma, Ax_val, Bx_val, Cx_val),
    )
    pk = ProvingKey(
        vk=vk,
        beta_g1=ec_mul(G1, beta),
        delta_g1=ec_mul(G1, delta),
        a_query=query_g1(Ax_val),
        b_g1_query=query_g1(Bx_val),
        b_g2_query=query_g2(Bx_val),
        h_query=h_query(numGates, delta, x_val, Zx_val),
        l_query=l_query(num_instance, numWires, alpha, beta, delta, Ax_val, Bx_val, Cx_val),
    )
    logger.info("setup: generated proving key with %d h_query and %d l_query elements",
                len(pk.h_query), len(pk.l_query))
    return pk


def generate_random_parameters(circuit, rng):
    """(ProvingKey, VerifyingKey)"""
    pk = generate_parameters(circuit, rng)
    return pk, pk.vk

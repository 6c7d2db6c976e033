"""
Groth16 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
=========================================================

**유한체 FR**:
  BN254(bn128) 곡선의 스칼라 필드. 회로의 모든 값(c, a, b), QAP 다항식,
  toxic waste, 증명 난수 r/s 가 이 필드의 원소이다.
  - 위수 r ≈ 2^254 (소수)

**타원곡선 연산**:
  키와 증명은 G1, G2 위의 점이다. 점 연산은 py_ecc의 optimized_bn128
  (사영 좌표, projective) 백엔드를 사용한다. 점은 (x, y, z) 튜플이며
  z == 0 이면 무한원점이다.

사용 예시:
    >>> from zkmul.groth16.field import FR, G1, ec_mul
    >>> c = FR(3) * FR(4)   # FR(12)
    >>> P = ec_mul(G1, c)   # 12·G1
"""

from py_ecc import optimized_bn128 as bn128
from py_ecc.fields import bn128_FQ
from py_ecc.fields import optimized_bn128_FQ as FQ
from py_ecc.fields import optimized_bn128_FQ2 as FQ2


class FR(bn128_FQ):
    field_modulus = bn128.curve_order


# 스칼라 필드 위수 r
CURVE_ORDER = bn128.curve_order

# 기저 필드 위수 p
FIELD_MODULUS = bn128.field_modulus

G1 = bn128.G1
G2 = bn128.G2

# 무한원점 (항등원)
Z1 = bn128.Z1
Z2 = bn128.Z2

# 곡선 방정식 y² = x³ + b 의 상수 (G1: FQ, G2: FQ2 twist)
B1 = bn128.b
B2 = bn128.b2


def ec_mul(point, scalar):
    """scalar · point. scalar 는 int 또는 FR."""
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    return bn128.add(p1, p2)


def ec_neg(point):
    return bn128.neg(point)


def ec_sum(points, scalars, zero):
    """Σ scalars[i]·points[i] (multi-scalar multiplication)."""
    acc = zero
    for point, scalar in zip(points, scalars):
        if int(scalar) == 0 or is_inf(point):
            continue
        acc = ec_add(acc, ec_mul(point, scalar))
    return acc


def ec_pairing(g2_point, g1_point):
    """페어링 e(G1, G2) → GT.

    주의: py_ecc 의 인자 순서는 (G2, G1) 이다.
    """
    return bn128.pairing(g2_point, g1_point)


def is_inf(point):
    return bn128.is_inf(point)


def normalize(point):
    """사영 좌표 → 아핀 좌표 (x, y). 무한원점은 None."""
    if is_inf(point):
        return None
    return bn128.normalize(point)


def from_affine_g1(x, y):
    return (FQ(x), FQ(y), FQ.one())


def from_affine_g2(x, y):
    return (x, y, FQ2.one())


def is_on_curve_g1(point):
    return bn128.is_on_curve(point, B1)


def is_on_curve_g2(point):
    return bn128.is_on_curve(point, B2)


def in_subgroup_g2(point):
    """G2 는 cofactor 가 1이 아니므로 r·Q == O 를 별도로 확인한다."""
    return is_inf(bn128.multiply(point, CURVE_ORDER))

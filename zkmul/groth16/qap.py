"""
R1CS → QAP (Quadratic Arithmetic Program)
===========================================

R1CS 의 각 열(변수 i)을 도메인 점 1..n 에서 보간하여 다항식
A_i(x), B_i(x), C_i(x) 를 만든다 (n = 제약 행의 수).

    Z(x) = (x - 1)(x - 2)...(x - n)

z 가 모든 제약을 만족하면
    P(x) = (Σ z_i·A_i(x))·(Σ z_i·B_i(x)) - Σ z_i·C_i(x)
는 Z(x) 로 나누어떨어지고 몫이 H(x) 이다.

공개 입력(상수 1 포함)마다 x_i · 0 = 0 형태의 행을 추가한다. 이 행은
공개 입력 다항식들이 서로 선형 독립이 되도록 한다.

모든 연산은 FR 위에서 이루어진다.
"""

from zkmul.groth16.field import FR


def multiply_polys(a, b):
    o = [FR(0)] * (len(a) + len(b) - 1)
    for i in range(len(a)):
        for j in range(len(b)):
            o[i + j] += a[i] * b[j]
    return o


def add_polys(a, b, subtract=False):
    o = [FR(0)] * max(len(a), len(b))
    for i in range(len(a)):
        o[i] += a[i]
    for i in range(len(b)):
        o[i] += b[i] * (FR(-1) if subtract else FR(1))
    return o


def subtract_polys(a, b):
    return add_polys(a, b, subtract=True)


def div_polys(a, b):
    """a / b → (몫, 나머지)"""
    if b[-1] == FR(0):
        raise ZeroDivisionError("Division by polynomial with zero leading coefficient")
    o = [FR(0)] * max(len(a) - len(b) + 1, 0)
    remainder = a
    while len(remainder) >= len(b):
        leading_fac = remainder[-1] / b[-1]
        pos = len(remainder) - len(b)
        o[pos] = leading_fac
        remainder = subtract_polys(remainder, multiply_polys(b, [FR(0)] * pos + [leading_fac]))[:-1]
    return o, remainder


def eval_poly(poly, x):
    return sum([poly[i] * x**i for i in range(len(poly))], FR(0))


def mk_singleton(point_loc, height, total_pts):
    fac = FR(1)
    for i in range(1, total_pts + 1):
        if i != point_loc:
            fac *= FR(point_loc - i)
    o = [FR(height) / fac]
    for i in range(1, total_pts + 1):
        if i != point_loc:
            o = multiply_polys(o, [FR(-i), FR(1)])
    return o


def lagrange_interp(vec):
    o = []
    for i in range(len(vec)):
        o = add_polys(o, mk_singleton(i + 1, FR(vec[i]), len(vec)))
    return o


def transpose(matrix):
    return list(map(list, zip(*matrix)))


def vanishing_poly(num_points):
    Z = [FR(1)]
    for i in range(1, num_points + 1):
        Z = multiply_polys(Z, [FR(-i), FR(1)])
    return Z


def r1cs_to_qap(A, B, C):
    """행렬 (행 = 제약, 열 = 변수) → 변수별 다항식 계수 리스트와 Z(x)."""
    A, B, C = transpose(A), transpose(B), transpose(C)
    new_A = [lagrange_interp(row) for row in A]
    new_B = [lagrange_interp(row) for row in B]
    new_C = [lagrange_interp(row) for row in C]
    Z = vanishing_poly(len(A[0]))
    return new_A, new_B, new_C, Z


def constraint_matrices(cs):
    """cs 의 제약 행렬 + 공개 입력 행 (x_i · 0 = 0)."""
    A, B, C = cs.matrices()
    for i in range(cs.num_instance_variables):
        row = [FR(0)] * cs.num_variables
        row[i] = FR(1)
        A.append(row)
        B.append([FR(0)] * cs.num_variables)
        C.append([FR(0)] * cs.num_variables)
    return A, B, C


def qap_from_constraint_system(cs):
    return r1cs_to_qap(*constraint_matrices(cs))


def getNumWires(Ax):
    return len(Ax)


def getNumGates(Ax):
    return len(Ax[0])


def eval_polys(polys, x_val):
    return [eval_poly(poly, x_val) for poly in polys]


def combine_polys(R, polys):
    """Σ R_i · polys_i"""
    o = []
    for r_i, poly in zip(R, polys):
        if r_i == FR(0):
            continue
        o = add_polys(o, [r_i * coeff for coeff in poly])
    return o or [FR(0)]


# (Ax.R * Bx.R - Cx.R) / Zx = Hx .... r
def hxr(Ax, Bx, Cx, Zx, R):
    Rax = combine_polys(R, Ax)
    Rbx = combine_polys(R, Bx)
    Rcx = combine_polys(R, Cx)
    Px = subtract_polys(multiply_polys(Rax, Rbx), Rcx)

    Hx, r = div_polys(Px, Zx)
    # 곱이 0 다항식이면 Px 가 짧아져 몫이 비므로 Z 의 차수에 맞춰 채운다
    Hx = Hx + [FR(0)] * (getNumGates(Ax) - 1 - len(Hx))
    return Hx, r


def is_zero_poly(poly):
    return all(coeff == FR(0) for coeff in poly)

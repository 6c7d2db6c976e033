"""
R1CS (Rank-1 Constraint System)
=================================

제약 하나는 ⟨A, z⟩ · ⟨B, z⟩ = ⟨C, z⟩ 형태이다.
z 는 전체 변수 벡터(full assignment)로, 순서는 다음과 같다:

    z = [1, 공개 입력들..., 비공개 witness 들...]

인덱스 0 은 항상 상수 1 변수("one")이다. 공개 입력은 선언된 순서 그대로
z 에 놓이며, 이 순서가 검증기의 공개 입력 순서가 된다.

setup 모드에서는 값 없이 제약의 "모양(topology)"만 기록한다.

사용 예시:
    >>> cs = ConstraintSystem()
    >>> c = cs.new_input("c", FR(12))
    >>> a = cs.new_witness("a", FR(3))
    >>> b = cs.new_witness("b", FR(4))
    >>> cs.enforce("c = a * b", a, b, c)
    >>> cs.is_satisfied()
    True
"""

from zkmul.groth16.field import FR

INSTANCE = "instance"
WITNESS = "witness"


class LinearCombination:
    """변수들의 선형결합 Σ coeff·var.

    terms: {(kind, index): FR}
    """

    def __init__(self, terms=None):
        self.terms = {}
        for var, coeff in (terms or {}).items():
            coeff = coeff if isinstance(coeff, FR) else FR(coeff)
            if coeff != FR(0):
                self.terms[var] = coeff

    def __add__(self, other):
        terms = dict(self.terms)
        for var, coeff in other.terms.items():
            terms[var] = terms.get(var, FR(0)) + coeff
        return LinearCombination(terms)

    def __neg__(self):
        return LinearCombination({var: -coeff for var, coeff in self.terms.items()})

    def __sub__(self, other):
        return self + (-other)

    def __repr__(self):
        return "LinearCombination({})".format(
            {"{}{}".format(k[0][0], k[1]): int(v) for k, v in self.terms.items()})


class ConstraintSystem:
    """R1CS 제약 시스템.

    속성:
        instance_names: 공개 변수 이름 (0번은 "one")
        witness_names: 비공개 변수 이름
        instance_assignment / witness_assignment: 변수 값 (setup 모드에서는 None)
        constraints: (name, a, b, c) 튜플 리스트
    """

    def __init__(self, setup_mode=False):
        self.setup_mode = setup_mode
        self.instance_names = ["one"]
        self.instance_assignment = [None if setup_mode else FR(1)]
        self.witness_names = []
        self.witness_assignment = []
        self.constraints = []

    @property
    def num_instance_variables(self):
        return len(self.instance_names)

    @property
    def num_witness_variables(self):
        return len(self.witness_names)

    @property
    def num_variables(self):
        return self.num_instance_variables + self.num_witness_variables

    @property
    def num_constraints(self):
        return len(self.constraints)

    def one(self):
        return LinearCombination({(INSTANCE, 0): FR(1)})

    def _value(self, value):
        if self.setup_mode:
            return None
        return value if isinstance(value, FR) else FR(value)

    def new_input(self, name, value=None):
        """공개 입력 변수를 할당한다."""
        self.instance_names.append(name)
        self.instance_assignment.append(self._value(value))
        return LinearCombination({(INSTANCE, len(self.instance_names) - 1): FR(1)})

    def new_witness(self, name, value=None):
        """비공개 witness 변수를 할당한다."""
        self.witness_names.append(name)
        self.witness_assignment.append(self._value(value))
        return LinearCombination({(WITNESS, len(self.witness_names) - 1): FR(1)})

    def enforce(self, name, a, b, c):
        """제약 a · b = c 를 추가한다."""
        self.constraints.append((name, a, b, c))

    def variable_index(self, var):
        kind, index = var
        if kind == INSTANCE:
            return index
        return self.num_instance_variables + index

    def full_assignment(self):
        """z = [instance..., witness...]"""
        if self.setup_mode:
            raise ValueError("constraint system in setup mode has no assignment")
        return list(self.instance_assignment) + list(self.witness_assignment)

    def evaluate(self, lc, assignment=None):
        if assignment is None:
            assignment = self.full_assignment()
        total = FR(0)
        for var, coeff in lc.terms.items():
            total = total + coeff * assignment[self.variable_index(var)]
        return total

    def which_is_unsatisfied(self):
        """만족되지 않는 첫 번째 제약의 이름. 모두 만족하면 None."""
        z = self.full_assignment()
        for name, a, b, c in self.constraints:
            if self.evaluate(a, z) * self.evaluate(b, z) != self.evaluate(c, z):
                return name
        return None

    def is_satisfied(self):
        return self.which_is_unsatisfied() is None

    def _row(self, lc):
        row = [FR(0)] * self.num_variables
        for var, coeff in lc.terms.items():
            row[self.variable_index(var)] = coeff
        return row

    def matrices(self):
        """A, B, C 행렬. 행 = 제약, 열 = 변수 (z 의 순서)."""
        A = [self._row(a) for _, a, _, _ in self.constraints]
        B = [self._row(b) for _, _, b, _ in self.constraints]
        C = [self._row(c) for _, _, _, c in self.constraints]
        return A, B, C

import pytest

from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.field import FR
from zkmul.groth16.r1cs import INSTANCE, WITNESS, ConstraintSystem, LinearCombination


def synthesized(c, a, b, setup_mode=False):
    cs = ConstraintSystem(setup_mode=setup_mode)
    MultiplicationCircuit(c, a, b).synthesize(cs)
    return cs


class TestLinearCombination:
    def test_drops_zero_coefficients(self):
        lc = LinearCombination({(INSTANCE, 0): FR(0), (WITNESS, 0): FR(2)})
        assert list(lc.terms) == [(WITNESS, 0)]

    def test_add_cancels(self):
        x = LinearCombination({(WITNESS, 1): FR(5)})
        assert (x - x).terms == {}

    def test_add_merges(self):
        x = LinearCombination({(WITNESS, 0): 1})
        y = LinearCombination({(WITNESS, 0): 2, (INSTANCE, 1): 1})
        assert (x + y).terms == {(WITNESS, 0): FR(3), (INSTANCE, 1): FR(1)}


class TestConstraintSystem:
    """c = a·b 회로 합성 결과"""

    def test_variable_layout(self):
        cs = synthesized(12, 3, 4)
        assert cs.instance_names == ["one", "c"]
        assert cs.witness_names == ["a", "b"]
        assert cs.num_variables == 4
        assert cs.num_constraints == 1

    def test_full_assignment(self):
        cs = synthesized(12, 3, 4)
        assert cs.full_assignment() == [FR(1), FR(12), FR(3), FR(4)]

    def test_satisfied(self):
        assert synthesized(12, 3, 4).is_satisfied()

    def test_unsatisfied_names_constraint(self):
        cs = synthesized(13, 3, 4)
        assert not cs.is_satisfied()
        assert cs.which_is_unsatisfied() == "c = a * b"

    def test_wraps_modulo_order(self):
        r = FR.field_modulus
        assert synthesized(r - 2, r - 1, 2).is_satisfied()

    def test_matrices(self):
        A, B, C = synthesized(12, 3, 4).matrices()
        assert A == [[FR(0), FR(0), FR(1), FR(0)]]
        assert B == [[FR(0), FR(0), FR(0), FR(1)]]
        assert C == [[FR(0), FR(1), FR(0), FR(0)]]

    def test_setup_mode_has_no_assignment(self):
        cs = synthesized(0, 0, 0, setup_mode=True)
        assert cs.num_variables == 4
        with pytest.raises(ValueError):
            cs.full_assignment()

    def test_setup_mode_same_topology(self):
        assert synthesized(0, 0, 0, setup_mode=True).matrices() == synthesized(12, 3, 4).matrices()


class TestMultiplicationCircuit:
    def test_coerces_to_field(self):
        circuit = MultiplicationCircuit(12, 3, 4)
        assert circuit.c == FR(12)
        assert circuit.public_inputs() == [FR(12)]

    def test_empty(self):
        circuit = MultiplicationCircuit.empty()
        assert (circuit.c, circuit.a, circuit.b) == (FR(0), FR(0), FR(0))

    def test_serialized_public_inputs(self):
        assert MultiplicationCircuit(12, 3, 4).serialized_public_inputs() == bytes([12]) + bytes(31)

    def test_repr_hides_witness(self):
        text = repr(MultiplicationCircuit(12, 3, 4))
        assert "c=12" in text
        assert "3" not in text.replace("c=12", "")

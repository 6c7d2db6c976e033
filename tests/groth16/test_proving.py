import pytest

from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.errors import ConstraintViolation, KeyDeserializationError
from zkmul.groth16.field import FR
from zkmul.groth16.keys import ProvingKey
from zkmul.groth16.proving import create_proof_output, prove, synthesize_checked
from zkmul.groth16.rng import SeededRandom


class TestConstraintCheck:
    """만족하지 않는 witness 는 증명 전에 거부된다"""

    def test_synthesize_checked(self):
        cs = synthesize_checked(MultiplicationCircuit(12, 3, 4))
        assert cs.is_satisfied()

    def test_wrong_product(self, keypair):
        pk, _ = keypair
        with pytest.raises(ConstraintViolation, match=r"c = a \* b"):
            prove(pk, MultiplicationCircuit(13, 3, 4), SeededRandom(b"x"))

    def test_message_has_stage(self):
        with pytest.raises(ConstraintViolation) as e:
            synthesize_checked(MultiplicationCircuit(1, 2, 3))
        assert str(e.value).startswith("constraints:")


class TestProve:
    def test_seeded_prover_is_deterministic(self, keypair, circuit, proof):
        pk, _ = keypair
        assert prove(pk, circuit, SeededRandom(b"prover")) == proof

    def test_fresh_randomness_changes_proof(self, keypair, circuit, proof):
        pk, _ = keypair
        assert prove(pk, circuit, SeededRandom(b"another prover")) != proof

    def test_default_rng(self, keypair, circuit, proof):
        pk, _ = keypair
        assert prove(pk, circuit) != proof

    def test_key_shape_mismatch(self, keypair, circuit):
        pk, _ = keypair
        broken = ProvingKey(pk.vk, pk.beta_g1, pk.delta_g1, pk.a_query, pk.b_g1_query,
                            pk.b_g2_query, pk.h_query[:1], pk.l_query)
        with pytest.raises(KeyDeserializationError, match="h_query") as e:
            prove(broken, circuit, SeededRandom(b"x"))
        assert str(e.value).startswith("key:")


class TestProofOutput:
    def test_schema(self, proof, circuit):
        output = create_proof_output(proof, circuit)
        assert set(output) == {
            "proofA", "proofB", "proofC", "publicInputs",
            "proofSerializedHex", "publicInputsSerializedHex",
        }
        assert len(output["proofA"]) == 32
        assert len(output["proofB"]) == 64
        assert len(output["proofC"]) == 32

    def test_public_inputs_come_from_circuit(self, proof, circuit):
        output = create_proof_output(proof, circuit)
        assert output["publicInputs"] == ["12"]
        assert output["publicInputsSerializedHex"] == "0c" + "00" * 31

    def test_serialized_hex_is_concatenation(self, proof, circuit):
        output = create_proof_output(proof, circuit)
        joined = bytes(output["proofA"] + output["proofB"] + output["proofC"])
        assert output["proofSerializedHex"] == joined.hex()
        assert output["proofSerializedHex"] == proof.to_hex()

    def test_reduced_public_input(self, proof):
        r = FR.field_modulus
        output = create_proof_output(proof, MultiplicationCircuit(r + 12, 3, 4))
        assert output["publicInputs"] == ["12"]

import json

import pytest

from zkmul.groth16 import bindings
from zkmul.groth16.errors import BindingError, InputParseError
from zkmul.groth16.field import FR
from zkmul.groth16.rng import SeededRandom


def input_json(c="12", a="3", b="4"):
    return json.dumps({"c": c, "a": a, "b": b})


@pytest.fixture(scope="module")
def pk_hex(keypair):
    return keypair[0].to_hex()


@pytest.fixture(scope="module")
def vk_hex(keypair):
    return keypair[1].to_hex()


@pytest.fixture(scope="module")
def proof_json(pk_hex):
    return bindings.prove(input_json(), pk_hex)


class TestParseInput:
    def test_fields(self):
        assert bindings.parse_proof_input(input_json()) == ["12", "3", "4"]

    def test_missing_field(self):
        with pytest.raises(InputParseError, match="`b`"):
            bindings.parse_proof_input(json.dumps({"c": "12", "a": "3"}))

    def test_number_instead_of_string(self):
        with pytest.raises(InputParseError):
            bindings.parse_proof_input(json.dumps({"c": 12, "a": "3", "b": "4"}))

    def test_not_json(self):
        with pytest.raises(InputParseError):
            bindings.parse_proof_input("{c: 12")

    def test_not_object(self):
        with pytest.raises(InputParseError, match="object"):
            bindings.parse_proof_input("[1, 2, 3]")


class TestProveBoundary:
    def test_output_schema(self, proof_json):
        output = json.loads(proof_json)
        assert output["publicInputs"] == ["12"]
        assert all(0 <= v <= 255 for v in output["proofA"])

    def test_compact_json(self, proof_json):
        assert " " not in proof_json

    def test_seeded_prove_json(self, pk_hex):
        a = bindings.prove_json(input_json(), pk_hex, SeededRandom(b"p"))
        b = bindings.prove_json(input_json(), pk_hex, SeededRandom(b"p"))
        assert a == b

    def test_unsatisfied(self, pk_hex):
        with pytest.raises(BindingError, match="constraints"):
            bindings.prove(input_json(c="13"), pk_hex)

    def test_bad_decimal(self, pk_hex):
        with pytest.raises(BindingError, match="Failed to parse decimal"):
            bindings.prove(input_json(a="three"), pk_hex)

    def test_very_long_public_input(self, pk_hex, vk_hex):
        a = "1" + "0" * 5000
        c = str(pow(10, 5000, FR.field_modulus))
        proof_json = bindings.prove(input_json(c=c, a=a, b="1"), pk_hex)
        assert json.loads(proof_json)["publicInputs"] == [c]
        assert bindings.verify(proof_json, vk_hex) == "true"

    def test_very_long_unsatisfied(self, pk_hex):
        with pytest.raises(BindingError, match="constraints"):
            bindings.prove(input_json(c="1" + "0" * 5000), pk_hex)

    def test_bad_key(self):
        with pytest.raises(BindingError, match="proving key"):
            bindings.prove(input_json(), "00" * 10)


class TestVerifyBoundary:
    def test_true(self, proof_json, vk_hex):
        assert bindings.verify(proof_json, vk_hex) == "true"

    def test_false_for_other_public_input(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        data["publicInputs"] = ["13"]
        assert bindings.verify(json.dumps(data), vk_hex) == "false"

    def test_hex_fields_are_not_used(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        data["proofSerializedHex"] = ""
        data["publicInputsSerializedHex"] = ""
        assert bindings.verify(json.dumps(data), vk_hex) == "true"

    def test_missing_hex_field(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        del data["proofSerializedHex"]
        with pytest.raises(BindingError, match="proofSerializedHex"):
            bindings.verify(json.dumps(data), vk_hex)

    def test_short_proof_component(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        data["proofA"] = data["proofA"][:31]
        with pytest.raises(BindingError, match="expected 32 bytes, got 31"):
            bindings.verify(json.dumps(data), vk_hex)

    def test_byte_out_of_range(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        data["proofC"][0] = 256
        with pytest.raises(BindingError, match="list of bytes"):
            bindings.verify(json.dumps(data), vk_hex)

    def test_bad_public_input(self, proof_json, vk_hex):
        data = json.loads(proof_json)
        data["publicInputs"] = ["-12"]
        with pytest.raises(BindingError, match="public input"):
            bindings.verify(json.dumps(data), vk_hex)

    def test_bad_key(self, proof_json):
        with pytest.raises(BindingError, match="verifying key"):
            bindings.verify(proof_json, "zz")

    def test_cached_key_is_reused(self, vk_hex):
        assert bindings.prepared_verifying_key(vk_hex) is bindings.prepared_verifying_key(vk_hex)

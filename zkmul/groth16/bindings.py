"""
호스트 경계 (Host Boundary)
=============================

문자열만 주고받는 두 함수. 브라우저/클라이언트/HTTP 호출자는 이 경계만 본다.

    prove(input_json, proving_key_hex)  -> proof_json
    verify(proof_json, verifying_key_hex) -> "true" | "false"

input_json:
    {"c": "<10진수>", "a": "<10진수>", "b": "<10진수>"}

proof_json (prove 의 출력, verify 의 입력):
    {"proofA": [32 bytes], "proofB": [64 bytes], "proofC": [32 bytes],
     "publicInputs": ["<10진수>", ...],
     "proofSerializedHex": "...", "publicInputsSerializedHex": "..."}

모든 도메인 에러는 BindingError 하나로 바뀌며, 메시지에 실패한 단계가 들어간다.
"false" 는 에러가 아니다.
"""

import functools
import json
import logging

from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.codec import G1_SIZE, G2_SIZE, parse_field_element
from zkmul.groth16.errors import (
    BindingError,
    DecodingError,
    Groth16Error,
    InputParseError,
    VerificationInputError,
)
from zkmul.groth16.keys import Proof, ProvingKey, VerifyingKey
from zkmul.groth16.proving import create_proof_output
from zkmul.groth16.proving import prove as groth16_prove
from zkmul.groth16.verifying import prepare_verifying_key, verify_proof

logger = logging.getLogger(__name__)

INPUT_FIELDS = ("c", "a", "b")

PROOF_BYTE_FIELDS = (("proofA", G1_SIZE), ("proofB", G2_SIZE), ("proofC", G1_SIZE))
PROOF_HEX_FIELDS = ("proofSerializedHex", "publicInputsSerializedHex")


def _load_json_object(text, what):
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise InputParseError("Failed to parse {} JSON: {}".format(what, e))
    if not isinstance(data, dict):
        raise InputParseError("Failed to parse {} JSON: expected an object".format(what))
    return data


def parse_proof_input(input_json):
    """input_json → (c, a, b) 문자열."""
    data = _load_json_object(input_json, "input")
    values = []
    for field in INPUT_FIELDS:
        if field not in data:
            raise InputParseError("Failed to parse input JSON: missing field `{}`".format(field))
        if not isinstance(data[field], str):
            raise InputParseError(
                "Failed to parse input JSON: field `{}` must be a decimal string".format(field))
        values.append(data[field])
    return values


def _byte_list(value, field):
    if not isinstance(value, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in value):
        raise InputParseError(
            "Failed to parse proof JSON: field `{}` must be a list of bytes".format(field))
    return bytes(value)


def parse_proof_output(proof_json):
    """proof_json → dict (바이트 필드는 bytes 로 변환)."""
    data = _load_json_object(proof_json, "proof")
    for field, _ in PROOF_BYTE_FIELDS:
        if field not in data:
            raise InputParseError("Failed to parse proof JSON: missing field `{}`".format(field))
    for field in ("publicInputs",) + PROOF_HEX_FIELDS:
        if field not in data:
            raise InputParseError("Failed to parse proof JSON: missing field `{}`".format(field))

    parsed = {}
    for field, _ in PROOF_BYTE_FIELDS:
        parsed[field] = _byte_list(data[field], field)
    public_inputs = data["publicInputs"]
    if not isinstance(public_inputs, list) or not all(isinstance(s, str) for s in public_inputs):
        raise InputParseError(
            "Failed to parse proof JSON: field `publicInputs` must be a list of strings")
    parsed["publicInputs"] = public_inputs
    for field in PROOF_HEX_FIELDS:
        if not isinstance(data[field], str):
            raise InputParseError(
                "Failed to parse proof JSON: field `{}` must be a string".format(field))
        parsed[field] = data[field]
    return parsed


def decode_proof(parsed):
    components = []
    for (field, size), decode_name in zip(PROOF_BYTE_FIELDS, ("proof.a", "proof.b", "proof.c")):
        data = parsed[field]
        if len(data) != size:
            raise VerificationInputError(
                "Failed to deserialize {}: expected {} bytes, got {}".format(
                    decode_name, size, len(data)))
        components.append(data)
    try:
        return Proof.from_components(*components)
    except DecodingError as e:
        raise VerificationInputError("Failed to deserialize proof: {}".format(e.message))


def decode_public_inputs(strings):
    try:
        return [parse_field_element(s) for s in strings]
    except InputParseError as e:
        raise VerificationInputError("Failed to parse public input: {}".format(e.message))


@functools.lru_cache(maxsize=8)
def prepared_verifying_key(verifying_key_hex):
    """같은 키로 반복 검증할 때 역직렬화와 e(α, β) 계산을 재사용한다."""
    return prepare_verifying_key(VerifyingKey.from_hex(verifying_key_hex))


def prove_json(input_json, proving_key_hex, rng=None):
    c_str, a_str, b_str = parse_proof_input(input_json)
    pk = ProvingKey.from_hex(proving_key_hex)

    circuit = MultiplicationCircuit(
        parse_field_element(c_str),
        parse_field_element(a_str),
        parse_field_element(b_str),
    )
    proof = groth16_prove(pk, circuit, rng)
    output = create_proof_output(proof, circuit)
    return json.dumps(output, separators=(",", ":"))


def verify_json(proof_json, verifying_key_hex):
    parsed = parse_proof_output(proof_json)
    if isinstance(verifying_key_hex, str):
        pvk = prepared_verifying_key(verifying_key_hex.strip())
    else:
        pvk = prepare_verifying_key(VerifyingKey.from_hex(verifying_key_hex))
    proof = decode_proof(parsed)
    public_inputs = decode_public_inputs(parsed["publicInputs"])
    return verify_proof(pvk, proof, public_inputs)


def prove(input_json, proving_key_hex):
    """경계 함수: 증명 JSON 문자열을 돌려준다. 실패 시 BindingError."""
    try:
        return prove_json(input_json, proving_key_hex)
    except Groth16Error as e:
        logger.warning("prove failed: %s", e)
        raise BindingError(str(e)) from e


def verify(proof_json, verifying_key_hex):
    """경계 함수: "true" 또는 "false". 형식 오류는 BindingError."""
    try:
        valid = verify_json(proof_json, verifying_key_hex)
    except Groth16Error as e:
        logger.warning("verify failed: %s", e)
        raise BindingError(str(e)) from e
    return "true" if valid else "false"

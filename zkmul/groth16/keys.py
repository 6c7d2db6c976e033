"""
Groth16 키와 증명 (Keys & Proof)
==================================

**VerifyingKey**:
  alpha_g1, beta_g2, gamma_g2, delta_g2, gamma_abc_g1[]
  gamma_abc_g1 은 공개 변수마다 하나 (상수 1 변수가 0번).

**ProvingKey**:
  vk, beta_g1, delta_g1, a_query[], b_g1_query[], b_g2_query[],
  h_query[], l_query[]

**Proof**:
  A (G1), B (G2), C (G1)

모두 생성 후 변경되지 않는다. 여러 증명/검증 호출이 잠금 없이 공유한다.

**정규 압축 직렬화** (필드 순서대로 이어붙임, 벡터는 u64 길이 접두어):
  VerifyingKey = alpha_g1 ‖ beta_g2 ‖ gamma_g2 ‖ delta_g2 ‖ vec(gamma_abc_g1)
  ProvingKey   = VerifyingKey ‖ beta_g1 ‖ delta_g1 ‖ vec(a_query)
                 ‖ vec(b_g1_query) ‖ vec(b_g2_query) ‖ vec(h_query) ‖ vec(l_query)
  Proof        = A ‖ B ‖ C   (32 + 64 + 32 = 128바이트)
"""

from zkmul.groth16.codec import (
    G1_SIZE, G2_SIZE,
    ByteReader,
    bytes_to_hex, hex_to_bytes,
    decode_g1, decode_g2,
    encode_g1, encode_g2, encode_g1_vec, encode_g2_vec,
)
from zkmul.groth16.errors import DecodingError, KeyDeserializationError
from zkmul.groth16.field import ec_pairing

PROOF_SIZE = G1_SIZE + G2_SIZE + G1_SIZE


class VerifyingKey:

    def __init__(self, alpha_g1, beta_g2, gamma_g2, delta_g2, gamma_abc_g1):
        self.alpha_g1 = alpha_g1
        self.beta_g2 = beta_g2
        self.gamma_g2 = gamma_g2
        self.delta_g2 = delta_g2
        self.gamma_abc_g1 = list(gamma_abc_g1)

    @property
    def num_public_inputs(self):
        # 상수 1 변수를 제외한 공개 입력 수
        return len(self.gamma_abc_g1) - 1

    def to_bytes(self):
        return (
            encode_g1(self.alpha_g1)
            + encode_g2(self.beta_g2)
            + encode_g2(self.gamma_g2)
            + encode_g2(self.delta_g2)
            + encode_g1_vec(self.gamma_abc_g1)
        )

    def to_hex(self):
        return bytes_to_hex(self.to_bytes())

    @classmethod
    def read(cls, reader):
        return cls(
            reader.read_g1(),
            reader.read_g2(),
            reader.read_g2(),
            reader.read_g2(),
            reader.read_g1_vec(),
        )

    @classmethod
    def from_bytes(cls, data):
        try:
            reader = ByteReader(data)
            vk = cls.read(reader)
            reader.finish()
        except DecodingError as e:
            raise KeyDeserializationError("Failed to deserialize verifying key: {}".format(e.message))
        return vk

    @classmethod
    def from_hex(cls, s):
        try:
            data = hex_to_bytes(s)
        except DecodingError as e:
            raise KeyDeserializationError("Failed to decode verifying key hex: {}".format(e.message))
        return cls.from_bytes(data)

    def __eq__(self, other):
        if not isinstance(other, VerifyingKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())


class ProvingKey:

    def __init__(self, vk, beta_g1, delta_g1, a_query, b_g1_query, b_g2_query,
                 h_query, l_query):
        self.vk = vk
        self.beta_g1 = beta_g1
        self.delta_g1 = delta_g1
        self.a_query = list(a_query)
        self.b_g1_query = list(b_g1_query)
        self.b_g2_query = list(b_g2_query)
        self.h_query = list(h_query)
        self.l_query = list(l_query)

    def to_bytes(self):
        return (
            self.vk.to_bytes()
            + encode_g1(self.beta_g1)
            + encode_g1(self.delta_g1)
            + encode_g1_vec(self.a_query)
            + encode_g1_vec(self.b_g1_query)
            + encode_g2_vec(self.b_g2_query)
            + encode_g1_vec(self.h_query)
            + encode_g1_vec(self.l_query)
        )

    def to_hex(self):
        return bytes_to_hex(self.to_bytes())

    @classmethod
    def from_bytes(cls, data):
        try:
            reader = ByteReader(data)
            pk = cls(
                VerifyingKey.read(reader),
                reader.read_g1(),
                reader.read_g1(),
                reader.read_g1_vec(),
                reader.read_g1_vec(),
                reader.read_g2_vec(),
                reader.read_g1_vec(),
                reader.read_g1_vec(),
            )
            reader.finish()
        except DecodingError as e:
            raise KeyDeserializationError("Failed to deserialize proving key: {}".format(e.message))
        return pk

    @classmethod
    def from_hex(cls, s):
        try:
            data = hex_to_bytes(s)
        except DecodingError as e:
            raise KeyDeserializationError("Failed to decode proving key hex: {}".format(e.message))
        return cls.from_bytes(data)

    def __eq__(self, other):
        if not isinstance(other, ProvingKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())


class PreparedVerifyingKey:
    """e(alpha_g1, beta_g2) 를 미리 계산해 둔 검증 키.

    같은 VerifyingKey 로 여러 번 검증할 때 페어링 1회를 아낀다.
    """

    def __init__(self, vk, alpha_g1_beta_g2):
        self.vk = vk
        self.alpha_g1_beta_g2 = alpha_g1_beta_g2

    @classmethod
    def from_verifying_key(cls, vk):
        return cls(vk, ec_pairing(vk.beta_g2, vk.alpha_g1))


class Proof:

    def __init__(self, a, b, c):
        self.a = a
        self.b = b
        self.c = c

    def to_bytes(self):
        return encode_g1(self.a) + encode_g2(self.b) + encode_g1(self.c)

    def to_hex(self):
        return bytes_to_hex(self.to_bytes())

    @classmethod
    def from_components(cls, a_bytes, b_bytes, c_bytes):
        """성분별 압축 바이트 → Proof. 형식 오류는 DecodingError."""
        return cls(decode_g1(bytes(a_bytes)), decode_g2(bytes(b_bytes)), decode_g1(bytes(c_bytes)))

    @classmethod
    def from_bytes(cls, data):
        if len(data) != PROOF_SIZE:
            raise DecodingError(
                "proof must be {} bytes, got {}".format(PROOF_SIZE, len(data)))
        return cls.from_components(
            data[:G1_SIZE], data[G1_SIZE:G1_SIZE + G2_SIZE], data[G1_SIZE + G2_SIZE:])

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

"""
Groth16 정규(canonical) 인코딩
================================

프로세스/네트워크 경계를 넘는 모든 값의 바이트 / 문자열 표현을 정의한다.

**스칼라 필드 원소 (FR)**:
  - 바이너리: 32바이트 little-endian. 디코딩 시 값은 반드시 r 미만.
  - 10진수 문자열: JSON 페이로드용. 파싱 시 r 로 축소(reduce)한다.

**압축 점 인코딩 (compressed point)**:
  x 좌표만 little-endian 으로 기록하고, 마지막 바이트의 상위 2비트에
  플래그를 둔다. BN254 기저 필드는 254비트이므로 2비트가 남는다.

    0x80  y 가 두 제곱근 중 큰 쪽 (y > -y)
    0x40  무한원점 (x = 0)

  G1 = 32바이트, G2 = 64바이트 (x = c0 ‖ c1, 플래그는 c1 의 마지막 바이트).
  Fq2 원소의 크기 비교는 (c1, c0) 사전식 순서이다.

**점 벡터**:
  u64 little-endian 길이 접두어 + 점들.

사용 예시:
    >>> encode_g1(G1).hex()
    '0100000000000000000000000000000000000000000000000000000000000000'
    >>> parse_field_element("12")
    12
"""

import re
import struct

from zkmul.groth16.errors import DecodingError, InputParseError
from zkmul.groth16.field import (
    FR, FQ, FQ2, B1, B2, Z1, Z2,
    CURVE_ORDER, FIELD_MODULUS,
    normalize, from_affine_g1, from_affine_g2,
    is_on_curve_g1, is_on_curve_g2, in_subgroup_g2,
)

FR_SIZE = 32
G1_SIZE = 32
G2_SIZE = 64
LENGTH_PREFIX_SIZE = 8

FLAG_Y_NEGATIVE = 0x80
FLAG_INFINITY = 0x40
FLAG_MASK = FLAG_Y_NEGATIVE | FLAG_INFINITY

_DECIMAL = re.compile(r"[0-9]+\Z", re.ASCII)

# int(str) 는 4300자리를 넘으면 ValueError 이므로 나눠서 축소한다
_DECIMAL_CHUNK = 1000


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드 FR
# ─────────────────────────────────────────────────────────────────────

def fr_to_bytes(val):
    return (int(val) % CURVE_ORDER).to_bytes(FR_SIZE, "little")


def fr_from_bytes(data):
    if len(data) != FR_SIZE:
        raise DecodingError(
            "field element must be {} bytes, got {}".format(FR_SIZE, len(data)))
    n = int.from_bytes(data, "little")
    if n >= CURVE_ORDER:
        raise DecodingError("field element is not reduced modulo the field order")
    return FR(n)


def fr_to_decimal(val):
    return str(int(val))


def parse_field_element(s):
    """10진수 문자열 → FR.

    앞뒤 공백은 무시하고, ASCII 숫자만 허용한다. 부호, 0x 접두어,
    소수점, 밑줄 구분자는 모두 InputParseError.
    """
    if not isinstance(s, str):
        raise InputParseError("expected a decimal string, got {}".format(type(s).__name__))
    s = s.strip()
    if not _DECIMAL.match(s):
        raise InputParseError("Failed to parse decimal '{}'".format(s))
    n = 0
    for i in range(0, len(s), _DECIMAL_CHUNK):
        chunk = s[i:i + _DECIMAL_CHUNK]
        n = (n * pow(10, len(chunk), CURVE_ORDER) + int(chunk)) % CURVE_ORDER
    return FR(n)


# ─────────────────────────────────────────────────────────────────────
# 기저 필드 제곱근
# ─────────────────────────────────────────────────────────────────────

def _fq_sqrt(a):
    # p ≡ 3 (mod 4)
    root = a ** ((FIELD_MODULUS + 1) // 4)
    if root * root != a:
        return None
    return root


def _fq2_sqrt(a):
    # Adj, Rodríguez-Henríquez, Algorithm 9 (i² = -1, p ≡ 3 mod 4)
    if a == FQ2.zero():
        return a
    a1 = a ** ((FIELD_MODULUS - 3) // 4)
    alpha = a1 * a1 * a
    x0 = a1 * a
    if alpha == FQ2([FIELD_MODULUS - 1, 0]):
        root = FQ2([0, 1]) * x0
    else:
        root = ((FQ2.one() + alpha) ** ((FIELD_MODULUS - 1) // 2)) * x0
    if root * root != a:
        return None
    return root


def _fq_is_larger(y):
    return y.n > (-y).n


def _fq2_key(y):
    c0, c1 = (int(c) for c in y.coeffs)
    return (c1, c0)


def _fq2_is_larger(y):
    return _fq2_key(y) > _fq2_key(-y)


def _split_flags(data, size, what):
    if len(data) != size:
        raise DecodingError(
            "{} point must be {} bytes, got {}".format(what, size, len(data)))
    flags = data[-1] & FLAG_MASK
    if flags == FLAG_MASK:
        raise DecodingError("{} point has both infinity and sign flags set".format(what))
    cleared = bytes(data[:-1]) + bytes([data[-1] & ~FLAG_MASK & 0xFF])
    return cleared, flags


def _read_fq(data, what):
    n = int.from_bytes(data, "little")
    if n >= FIELD_MODULUS:
        raise DecodingError("{} coordinate is not a canonical field element".format(what))
    return n


# ─────────────────────────────────────────────────────────────────────
# G1
# ─────────────────────────────────────────────────────────────────────

def encode_g1(point):
    affine = normalize(point)
    if affine is None:
        out = bytearray(G1_SIZE)
        out[-1] |= FLAG_INFINITY
        return bytes(out)
    x, y = affine
    out = bytearray(x.n.to_bytes(G1_SIZE, "little"))
    if _fq_is_larger(y):
        out[-1] |= FLAG_Y_NEGATIVE
    return bytes(out)


def decode_g1(data):
    cleared, flags = _split_flags(data, G1_SIZE, "G1")
    x_int = _read_fq(cleared, "G1")
    if flags == FLAG_INFINITY:
        if x_int != 0:
            raise DecodingError("G1 point at infinity must have a zero x coordinate")
        return Z1

    x = FQ(x_int)
    y = _fq_sqrt(x ** 3 + B1)
    if y is None:
        raise DecodingError("G1 x coordinate is not on the curve")
    if _fq_is_larger(y) != bool(flags & FLAG_Y_NEGATIVE):
        y = -y

    point = from_affine_g1(x.n, y.n)
    if not is_on_curve_g1(point):
        raise DecodingError("G1 point is not on the curve")
    return point


# ─────────────────────────────────────────────────────────────────────
# G2
# ─────────────────────────────────────────────────────────────────────

def encode_g2(point):
    affine = normalize(point)
    if affine is None:
        out = bytearray(G2_SIZE)
        out[-1] |= FLAG_INFINITY
        return bytes(out)
    x, y = affine
    c0, c1 = (int(c) for c in x.coeffs)
    out = bytearray(c0.to_bytes(32, "little") + c1.to_bytes(32, "little"))
    if _fq2_is_larger(y):
        out[-1] |= FLAG_Y_NEGATIVE
    return bytes(out)


def decode_g2(data):
    cleared, flags = _split_flags(data, G2_SIZE, "G2")
    c0 = _read_fq(cleared[:32], "G2")
    c1 = _read_fq(cleared[32:], "G2")
    if flags == FLAG_INFINITY:
        if c0 != 0 or c1 != 0:
            raise DecodingError("G2 point at infinity must have a zero x coordinate")
        return Z2

    x = FQ2([c0, c1])
    y = _fq2_sqrt(x ** 3 + B2)
    if y is None:
        raise DecodingError("G2 x coordinate is not on the curve")
    if _fq2_is_larger(y) != bool(flags & FLAG_Y_NEGATIVE):
        y = -y

    point = from_affine_g2(x, y)
    if not is_on_curve_g2(point):
        raise DecodingError("G2 point is not on the curve")
    if not in_subgroup_g2(point):
        raise DecodingError("G2 point is not in the prime-order subgroup")
    return point


# ─────────────────────────────────────────────────────────────────────
# hex
# ─────────────────────────────────────────────────────────────────────

def bytes_to_hex(data):
    return bytes(data).hex()


def hex_to_bytes(s):
    """소문자/대문자 hex 문자열 → bytes. 앞뒤 공백(파일 끝 개행 등)은 무시한다."""
    if not isinstance(s, str):
        raise DecodingError("expected a hex string, got {}".format(type(s).__name__))
    s = s.strip()
    if len(s) % 2 or not re.fullmatch(r"[0-9a-fA-F]*", s):
        raise DecodingError("invalid hex string")
    return bytes.fromhex(s)


# ─────────────────────────────────────────────────────────────────────
# 벡터 / 스트림
# ─────────────────────────────────────────────────────────────────────

def encode_length(n):
    return struct.pack("<Q", n)


def encode_g1_vec(points):
    return encode_length(len(points)) + b"".join(encode_g1(p) for p in points)


def encode_g2_vec(points):
    return encode_length(len(points)) + b"".join(encode_g2(p) for p in points)


class ByteReader:
    """바이트열을 앞에서부터 소비하는 디코더.

    키처럼 여러 필드가 이어진 구조를 읽을 때 사용한다. 모든 필드를 읽은 뒤
    finish() 로 남은 바이트가 없는지 확인한다.
    """

    def __init__(self, data):
        self.data = bytes(data)
        self.offset = 0

    def read(self, size):
        end = self.offset + size
        if end > len(self.data):
            raise DecodingError(
                "unexpected end of data at offset {} (need {} bytes, have {})".format(
                    self.offset, size, len(self.data) - self.offset))
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def read_g1(self):
        return decode_g1(self.read(G1_SIZE))

    def read_g2(self):
        return decode_g2(self.read(G2_SIZE))

    def read_length(self):
        (n,) = struct.unpack("<Q", self.read(LENGTH_PREFIX_SIZE))
        return n

    def read_g1_vec(self):
        n = self.read_length()
        if n * G1_SIZE > len(self.data) - self.offset:
            raise DecodingError("G1 vector length {} exceeds remaining data".format(n))
        return [self.read_g1() for _ in range(n)]

    def read_g2_vec(self):
        n = self.read_length()
        if n * G2_SIZE > len(self.data) - self.offset:
            raise DecodingError("G2 vector length {} exceeds remaining data".format(n))
        return [self.read_g2() for _ in range(n)]

    def finish(self):
        remaining = len(self.data) - self.offset
        if remaining:
            raise DecodingError("{} trailing bytes after end of data".format(remaining))

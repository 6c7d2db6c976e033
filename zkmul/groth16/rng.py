"""
난수 소스 (Randomness Source)
================================

setup 의 toxic waste(τ, α, β, γ, δ)와 prover 의 r, s 는 모두 주입된
난수 소스에서 뽑는다.

- SecureRandom: 운영용. OS 의 CSPRNG(secrets)을 사용한다.
- SeededRandom: 테스트/재현용. 같은 seed 는 항상 같은 난수열을 만든다.
  이 seed 로 만든 키는 toxic waste 를 아는 누구나 증명을 위조할 수 있으므로
  운영 환경에서 사용하면 안 된다.

한 인스턴스를 여러 증명 호출(스레드)이 공유하지 않는다. 호출마다 새로 만든다.
"""

import hashlib
import secrets

from zkmul.groth16.field import FR, CURVE_ORDER

_FR_BITS = CURVE_ORDER.bit_length()


class SecureRandom:

    def random_fr(self):
        return FR(secrets.randbelow(CURVE_ORDER))

    def nonzero_fr(self):
        return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)


class SeededRandom:
    """SHA-256 카운터 모드 결정론적 난수열."""

    def __init__(self, seed):
        if isinstance(seed, str):
            seed = seed.encode()
        self.seed = bytes(seed)
        self.counter = 0

    def _next_block(self):
        h = hashlib.sha256(self.seed + self.counter.to_bytes(8, "little")).digest()
        self.counter += 1
        return h

    def random_fr(self):
        # 254비트로 자른 뒤 r 이상이면 버린다 (rejection sampling)
        while True:
            n = int.from_bytes(self._next_block(), "little") >> (256 - _FR_BITS)
            if n < CURVE_ORDER:
                return FR(n)

    def nonzero_fr(self):
        while True:
            val = self.random_fr()
            if val != FR(0):
                return val

"""
곱셈 회로: c = a · b
======================

  | 변수 | 종류      | 의미              |
  |------|-----------|-------------------|
  | c    | 공개 입력 | 검증자에게 공개   |
  | a    | witness   | 비공개            |
  | b    | witness   | 비공개            |

제약 1개:  a · b = c

setup 은 제약의 모양에만 의존하고 값에는 의존하지 않는다.
MultiplicationCircuit.empty() 는 모든 값이 0인 자리표시자(placeholder)
인스턴스로, setup 에만 사용하며 그 값은 어떤 의미도 갖지 않는다.
"""

from zkmul.groth16.codec import fr_to_bytes
from zkmul.groth16.errors import SerializationError
from zkmul.groth16.field import FR


class MultiplicationCircuit:

    def __init__(self, c, a, b):
        # 임의의 (c, a, b)로 생성은 항상 성공한다. 관계 검사는 prover 가 한다.
        self.c = c if isinstance(c, FR) else FR(c)
        self.a = a if isinstance(a, FR) else FR(a)
        self.b = b if isinstance(b, FR) else FR(b)

    @classmethod
    def empty(cls):
        return cls(FR(0), FR(0), FR(0))

    def synthesize(self, cs):
        """공개 변수 c, 비공개 변수 a, b 를 이 순서로 선언하고 a·b = c 를 강제한다."""
        c = cs.new_input("c", self.c)
        a = cs.new_witness("a", self.a)
        b = cs.new_witness("b", self.b)
        cs.enforce("c = a * b", a, b, c)

    def public_inputs(self):
        # synthesize() 의 new_input 순서와 같아야 한다
        return [self.c]

    def serialized_public_inputs(self):
        try:
            return b"".join(fr_to_bytes(x) for x in self.public_inputs())
        except (TypeError, ValueError, OverflowError) as e:
            raise SerializationError("Failed to serialize public input: {}".format(e))

    def __repr__(self):
        return "MultiplicationCircuit(c={}, a=<hidden>, b=<hidden>)".format(int(self.c))

"""
Groth16 에러 분류 (Error Taxonomy)
=====================================

모든 에러는 어느 단계(stage)에서 실패했는지를 메시지에 담는다.
암호학적 연산은 결정론적이므로 재시도(retry)는 어디에도 없다.

  InputParseError          잘못된 JSON / 10진수 문자열
  DecodingError            잘못된 바이트열 (길이, 플래그, 곡선 밖의 점)
  KeyDeserializationError  손상되었거나 호환되지 않는 키 바이트
  ConstraintViolation      witness가 c = a·b 를 만족하지 않음 (증명 전 검출)
  ProofGenerationError     증명 알고리즘 자체의 실패 (드묾)
  SerializationError       결과 인코딩 실패
  VerificationInputError   검증기에 들어온 형식이 잘못된 proof / 공개 입력

검증식이 성립하지 않는 "형식은 올바른" 증명은 에러가 아니라 False 이다.
"""


class Groth16Error(Exception):
    stage = "groth16"

    def __init__(self, message, stage=None):
        if stage is not None:
            self.stage = stage
        self.message = message
        super().__init__("{}: {}".format(self.stage, message))


class InputParseError(Groth16Error):
    stage = "input"


class DecodingError(Groth16Error):
    stage = "decode"


class KeyDeserializationError(Groth16Error):
    stage = "key"


class ConstraintViolation(Groth16Error):
    stage = "constraints"


class ProofGenerationError(Groth16Error):
    stage = "prove"


class SerializationError(Groth16Error):
    stage = "serialize"


class VerificationInputError(Groth16Error):
    stage = "verify"


class BindingError(Exception):
    """호스트 경계에서 사용하는 단일 외부 에러 표현."""

    def __init__(self, message):
        self.message = message
        super().__init__(message)

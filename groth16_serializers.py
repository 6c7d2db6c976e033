"""
Groth16 데이터 직렬화/표시 헬퍼
=================================

TinyDB 에 저장 가능한 형태로 키를 변환하고, API 응답용 요약을 만든다.
키는 정규 압축 인코딩의 hex 문자열로 저장한다.
"""

from zkmul.groth16.field import normalize
from zkmul.groth16.keys import ProvingKey


# ─── 키 쌍 ───

def serialize_key_pair(pk):
    """ProvingKey → {"proving_key": hex, "verifying_key": hex}"""
    return {
        "proving_key": pk.to_hex(),
        "verifying_key": pk.vk.to_hex(),
    }


def deserialize_proving_key(data):
    return ProvingKey.from_hex(data["proving_key"])


# ─── 표시용 헬퍼 ───

def shorten(s, keep=4):
    if len(s) <= 2 * keep:
        return s
    return s[:keep] + "..." + s[-keep:]


def g1_short(point):
    """G1 point → 축약 문자열"""
    affine = normalize(point)
    if affine is None:
        return "∞"
    return "({}, {})".format(shorten(str(int(affine[0].n))), shorten(str(int(affine[1].n))))


def g2_short(point):
    """G2 point → 축약 문자열"""
    affine = normalize(point)
    if affine is None:
        return "∞"
    x0, x1 = (str(int(c)) for c in affine[0].coeffs)
    return "({}+{}i, ...)".format(shorten(x0), shorten(x1))


def key_summary(pk, seeded=None):
    """키 쌍 요약 (API 응답용)"""
    vk = pk.vk
    pk_hex = pk.to_hex()
    vk_hex = vk.to_hex()
    summary = {
        "proving_key_bytes": len(pk_hex) // 2,
        "verifying_key_bytes": len(vk_hex) // 2,
        "num_public_inputs": vk.num_public_inputs,
        "alpha_g1": g1_short(vk.alpha_g1),
        "beta_g2": g2_short(vk.beta_g2),
        "gamma_g2": g2_short(vk.gamma_g2),
        "delta_g2": g2_short(vk.delta_g2),
        "gamma_abc_g1": [g1_short(p) for p in vk.gamma_abc_g1],
        "proving_key_hex": shorten(pk_hex, 16),
        "verifying_key_hex": vk_hex,
    }
    if seeded is not None:
        summary["seeded"] = seeded
    return summary

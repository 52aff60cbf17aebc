"""
PLONK 데이터 직렬화/역직렬화 헬퍼
====================================

증명과 공개 파라미터를 JSON으로 저장 가능한 형태로 변환한다.
  - FR: 10진수 문자열
  - G1: [x, y] 10진수 문자열 쌍 (무한원점은 None)
  - G2: [[x0, x1], [y0, y1]]
  - Polynomial: 계수 문자열 리스트

역직렬화는 점이 곡선 위에 있는지 확인하지 않는다.
Verifier가 형식 검사(MALFORMED_PROOF)에서 걸러낸다.
"""

from plonk_kzg.field import FR, from_affine, g2_from_affine, g2_to_affine, Z2
from plonk_kzg.kzg import Commitment
from plonk_kzg.polynomial import Polynomial
from plonk_kzg.prover import Proof
from plonk_kzg.srs import SRS


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    if val is None:
        return None
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    if s is None:
        return None
    return FR(int(s))


# ─── G1 commitment ───

def serialize_g1(commitment):
    """Commitment → [str, str] or None"""
    affine = commitment.to_affine()
    if affine is None:
        return None
    return [str(affine[0]), str(affine[1])]


def deserialize_g1(data):
    """[str, str] or None → Commitment"""
    if data is None:
        return Commitment.identity()
    return Commitment(from_affine(int(data[0]), int(data[1])))


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    affine = g2_to_affine(point)
    if affine is None:
        return None
    x, y = affine
    return [[str(c) for c in x], [str(c) for c in y]]


def deserialize_g2(data):
    if data is None:
        return Z2
    x, y = data
    return g2_from_affine([int(c) for c in x], [int(c) for c in y])


# ─── Polynomial ───

def serialize_poly(poly):
    return [str(int(c)) for c in poly.coeffs]


def deserialize_poly(data):
    return Polynomial([FR(int(s)) for s in data])


# ─── SRS ───

def serialize_srs(srs):
    return {
        "g1_powers": [serialize_g1(Commitment(p)) for p in srs.g1_powers],
        "g2_powers": [serialize_g2(p) for p in srs.g2_powers],
    }


def deserialize_srs(data):
    g1_powers = [deserialize_g1(p).point for p in data["g1_powers"]]
    g2_powers = [deserialize_g2(p) for p in data["g2_powers"]]
    return SRS(g1_powers, g2_powers)


# ─── Proof ───

def serialize_proof(proof):
    """Proof → dict"""
    data = {}
    for name in Proof.COMMITMENT_FIELDS:
        data[name] = serialize_g1(getattr(proof, name))
    for name in Proof.EVALUATION_FIELDS:
        data[name] = serialize_fr(getattr(proof, name))
    data["u"] = serialize_fr(proof.u)
    data["degree"] = proof.degree
    return data


def deserialize_proof(data):
    """dict → Proof"""
    proof = Proof()
    for name in Proof.COMMITMENT_FIELDS:
        setattr(proof, name, deserialize_g1(data[name]))
    for name in Proof.EVALUATION_FIELDS:
        setattr(proof, name, deserialize_fr(data[name]))
    proof.u = deserialize_fr(data.get("u"))
    proof.degree = data.get("degree")
    return proof


# ─── 표시용 축약 ───

def g1_short(commitment):
    """[x, y]를 앞뒤 4자리로 줄인 문자열 (로그용)."""
    affine = commitment.to_affine()
    if affine is None:
        return "∞"

    def shorten(value):
        s = str(value)
        if len(s) <= 10:
            return s
        return s[:4] + "..." + s[-4:]

    return f"({shorten(affine[0])}, {shorten(affine[1])})"

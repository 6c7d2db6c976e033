"""
Groth16 Flask Blueprint
=========================

  POST /groth16/setup    키 생성 (seed 또는 secure), TinyDB 에 저장
  GET  /groth16/keys     저장된 키 요약
  POST /groth16/prove    {"c", "a", "b"} → proof JSON
  POST /groth16/verify   proof JSON → {"valid": bool}

도메인 에러는 400 {"error": ...}, 키가 아직 없으면 409.
"""

import logging

from flask import Blueprint, Response, jsonify, request
from tinydb import Query

from zkmul.groth16 import bindings
from zkmul.groth16.circuit import MultiplicationCircuit
from zkmul.groth16.errors import BindingError, DecodingError
from zkmul.groth16.keygen import make_rng
from zkmul.groth16.setup import generate_parameters

from groth16_serializers import (
    serialize_key_pair,
    deserialize_proving_key,
    key_summary,
)

logger = logging.getLogger(__name__)

groth16_bp = Blueprint('groth16', __name__, url_prefix='/groth16')

DATA = Query()

# DB는 app.py에서 주입
DB = None

KEYS = "groth16.keys"


def init_groth16_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def error_response(message, status):
    return jsonify({"error": message}), status


@groth16_bp.errorhandler(BindingError)
def handle_binding_error(e):
    return error_response(e.message, 400)


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@groth16_bp.route("/setup", methods=["POST"])
def setup_keys():
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return error_response("setup body must be a JSON object", 400)
    secure = body.get("secure", False)
    if not isinstance(secure, bool):
        return error_response("secure must be a boolean", 400)
    seed = body.get("seed")
    if seed is not None and not isinstance(seed, str):
        return error_response("seed must be a hex string", 400)

    try:
        rng = make_rng(seed, secure)
    except DecodingError as e:
        return error_response("invalid seed: {}".format(e.message), 400)

    pk = generate_parameters(MultiplicationCircuit.empty(), rng)
    keys = serialize_key_pair(pk)
    keys["seeded"] = not secure
    db_set(KEYS, keys)
    logger.info("stored new key pair (seeded=%s)", not secure)
    return jsonify(key_summary(pk, seeded=not secure))


@groth16_bp.route("/keys")
def get_keys():
    keys = db_get(KEYS)
    if not keys:
        return error_response("no keys; POST /groth16/setup first", 409)
    pk = deserialize_proving_key(keys)
    return jsonify(key_summary(pk, seeded=keys.get("seeded")))


# ──────────────────────────────────────────────────────────────
# Proving / Verifying
# ──────────────────────────────────────────────────────────────

@groth16_bp.route("/prove", methods=["POST"])
def prove():
    keys = db_get(KEYS)
    if not keys:
        return error_response("no keys; POST /groth16/setup first", 409)
    proof_json = bindings.prove(request.get_data(as_text=True), keys["proving_key"])
    return Response(proof_json, mimetype="application/json")


@groth16_bp.route("/verify", methods=["POST"])
def verify():
    keys = db_get(KEYS)
    if not keys:
        return error_response("no keys; POST /groth16/setup first", 409)
    result = bindings.verify(request.get_data(as_text=True), keys["verifying_key"])
    return jsonify({"valid": result == "true"})

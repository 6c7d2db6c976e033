"""
zkmul 웹 서비스
=================

Flask 앱 + TinyDB 키 저장소. Groth16 라우트는 groth16_routes 블루프린트에 있다.

실행:
    $ python app.py
    $ flask --app app run
"""

import logging

from flask import Flask, jsonify
from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from zkmul import config
from groth16_routes import groth16_bp, init_groth16_bp

logger = logging.getLogger(__name__)


def create_app(db=None, memory=False):
    """앱 팩토리. db 를 넘기지 않으면 config.DB_PATH 의 TinyDB 를 연다.

    memory=True 이면 파일 없이 MemoryStorage 를 쓴다 (테스트용).
    """
    config.configure_logging()

    if db is None:
        if memory:
            db = TinyDB(storage=MemoryStorage)  # Memory DB
        else:
            db = TinyDB(config.DB_PATH)         # Storage DB

    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY

    init_groth16_bp(db.table("groth"))
    app.register_blueprint(groth16_bp)

    @app.route("/")
    def main():
        return jsonify({
            "service": "zkmul",
            "endpoints": [
                "POST /groth16/setup",
                "GET /groth16/keys",
                "POST /groth16/prove",
                "POST /groth16/verify",
            ],
        })

    logger.info("app created with %d stored key record(s)", len(db.table("groth")))
    return app


if __name__ == "__main__":
    create_app().run(debug=True)

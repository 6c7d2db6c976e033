import logging
import os

# 키 파일 디렉터리 (proving_key.bin/.hex, verification_key.bin/.hex)
KEYS_DIR = os.environ.get("ZKMUL_KEYS_DIR", "keys")

# TinyDB 키 저장소
DB_PATH = os.environ.get("ZKMUL_DB_PATH", "db.json")

LOG_LEVEL = os.environ.get("ZKMUL_LOG_LEVEL", "INFO")

SECRET_KEY = os.environ.get("ZKMUL_SECRET_KEY", "key")

# 재현 가능한 테스트용 setup seed. 운영 키에는 쓰지 않는다.
TEST_SEED = bytes(32)

PROVING_KEY_NAME = "proving_key"
VERIFYING_KEY_NAME = "verification_key"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)

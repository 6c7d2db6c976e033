import os

import pytest

from zkmul.groth16 import keygen
from zkmul.groth16.keys import ProvingKey, VerifyingKey


class TestWriteKeys:
    def test_files(self, tmp_path, keypair):
        pk, vk = keypair
        keys_dir = str(tmp_path / "keys")
        keygen.write_keys(keys_dir, pk, vk)
        for name in ["proving_key.bin", "proving_key.hex",
                     "verification_key.bin", "verification_key.hex"]:
            assert os.path.exists(os.path.join(keys_dir, name))
        with open(os.path.join(keys_dir, "verification_key.bin"), "rb") as f:
            assert f.read() == vk.to_bytes()

    def test_load_hex(self, tmp_path, keypair):
        pk, vk = keypair
        keygen.write_keys(str(tmp_path), pk, vk)
        assert ProvingKey.from_hex(keygen.load_proving_key_hex(str(tmp_path))) == pk
        assert VerifyingKey.from_hex(keygen.load_verifying_key_hex(str(tmp_path))) == vk


    def test_failed_write_keeps_old_keys(self, tmp_path, monkeypatch, keypair, other_keypair):
        """네 파일 중 하나라도 실패하면 기존 키 파일은 바뀌지 않는다"""
        keys_dir = str(tmp_path)
        old_pk, old_vk = other_keypair
        keygen.write_keys(keys_dir, old_pk, old_vk)

        calls = []
        write_temp = keygen._write_temp

        def failing_write_temp(keys_dir, data, mode):
            calls.append(mode)
            if len(calls) == 3:
                raise OSError("disk full")
            return write_temp(keys_dir, data, mode)

        monkeypatch.setattr(keygen, "_write_temp", failing_write_temp)
        pk, vk = keypair
        with pytest.raises(OSError, match="disk full"):
            keygen.write_keys(keys_dir, pk, vk)

        assert keygen.load_verifying_key_hex(keys_dir) == old_vk.to_hex()
        assert keygen.load_proving_key_hex(keys_dir) == old_pk.to_hex()
        assert sorted(os.listdir(keys_dir)) == [
            "proving_key.bin", "proving_key.hex",
            "verification_key.bin", "verification_key.hex",
        ]


class TestMain:
    """python -m zkmul.groth16.keygen"""

    def test_default_seed_reproduces_keys(self, tmp_path, keypair):
        _, vk = keypair
        assert keygen.main(["--keys-dir", str(tmp_path)]) == 0
        assert keygen.load_verifying_key_hex(str(tmp_path)) == vk.to_hex()

    def test_bad_seed(self, tmp_path):
        assert keygen.main(["--keys-dir", str(tmp_path), "--seed", "xyz"]) == 2
        assert not os.path.exists(os.path.join(str(tmp_path), "proving_key.bin"))

    def test_unwritable_dir(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert keygen.main(["--keys-dir", str(blocker / "keys"), "--seed", "00"]) == 1


class TestMakeRng:
    def test_secure(self):
        assert type(keygen.make_rng(secure=True)).__name__ == "SecureRandom"

    def test_seed_hex(self):
        a = keygen.make_rng("0102")
        b = keygen.make_rng("0102")
        assert a.random_fr() == b.random_fr()

import os
import unittest
from base64 import b64decode, b64encode

from forum.auth.encryption import TokenEncryption


class TestTokenEncryption(unittest.TestCase):
    def setUp(self):
        self.encryption = TokenEncryption(os.urandom(32))
        self.token = "eyJhbGciOiJIUzI1NiJ9.payload.signature"

    def test_encrypt_decrypt(self):
        """암호화 후 복호화 결과가 원본과 동일한지 테스트"""
        encrypted = self.encryption.encrypt(self.token)
        self.assertEqual(self.token, self.encryption.decrypt(encrypted))

    def test_invalid_key_length(self):
        with self.assertRaises(ValueError):
            TokenEncryption(os.urandom(16))

    def test_from_secret(self):
        encryption = TokenEncryption.from_secret("k" * 32)
        self.assertEqual(encryption.key, b"k" * 32)

    def test_different_iv(self):
        """같은 값을 여러 번 암호화해도 결과가 다른지 테스트 (IV 확인)"""
        self.assertNotEqual(
            self.encryption.encrypt(self.token),
            self.encryption.encrypt(self.token),
        )

    def test_output_contains_iv(self):
        raw = b64decode(self.encryption.encrypt("x"))
        self.assertEqual(len(raw), 32)  # IV 16 + 블록 16

    def test_empty_string(self):
        encrypted = self.encryption.encrypt("")
        self.assertEqual("", self.encryption.decrypt(encrypted))

    def test_unicode(self):
        value = '{"username": "joão"}'
        encrypted = self.encryption.encrypt(value)
        self.assertEqual(value, self.encryption.decrypt(encrypted))

    def test_invalid_base64(self):
        with self.assertRaises(ValueError):
            self.encryption.decrypt("not base64!!")

    def test_truncated_value(self):
        with self.assertRaises(ValueError):
            self.encryption.decrypt(b64encode(b"short").decode())

import os
from base64 import b64decode, b64encode
from binascii import Error as BinasciiError

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

KEY_SIZE = 32
IV_SIZE = 16


class TokenEncryption:
    """로컬 세션 저장소에 기록되는 값(토큰, 사용자 정보)을 AES-256-CBC 로 암호화"""

    def __init__(self, key: bytes):
        """
        key: 256-bit (32 bytes) 암호화 키
        """
        if len(key) != KEY_SIZE:
            raise ValueError("Key must be 256 bits (32 bytes).")
        self.key = key

    @classmethod
    def from_secret(cls, secret: str) -> "TokenEncryption":
        """환경 변수 등에서 읽은 32자 문자열 키로 생성"""
        return cls(secret.encode())

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(algorithms.AES(self.key), modes.CBC(iv))

    def encrypt(self, plaintext: str) -> str:
        """
        :param plaintext: 암호화할 문자열
        :return: base64(IV + 암호문)
        """
        iv = os.urandom(IV_SIZE)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode()) + padder.finalize()

        encryptor = self._cipher(iv).encryptor()
        encrypted = encryptor.update(padded) + encryptor.finalize()
        return b64encode(iv + encrypted).decode()

    def decrypt(self, token: str) -> str:
        """
        :param token: encrypt() 가 반환한 문자열
        :return: 복호화된 문자열
        :raises ValueError: 형식이 잘못되었거나 다른 키로 암호화된 경우
        """
        try:
            raw = b64decode(token, validate=True)
        except (BinasciiError, ValueError) as e:
            raise ValueError("Invalid encrypted value.") from e
        if len(raw) <= IV_SIZE or (len(raw) - IV_SIZE) % IV_SIZE:
            raise ValueError("Invalid encrypted value.")

        decryptor = self._cipher(raw[:IV_SIZE]).decryptor()
        padded = decryptor.update(raw[IV_SIZE:]) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            data = unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            raise ValueError("Invalid padding.") from e
        return data.decode()

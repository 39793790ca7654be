"""이 파일은 .py 서명 어댑터로 플러그인 코드의 SHA-256 서명 검증을 제공합니다."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

logger = logging.getLogger(__name__)


def verify_plugin_signature(
    code: Optional[str],
    signature: Optional[str],
    public_key: Optional[str],
) -> bool:
    """코드/서명/공개키가 모두 있고 서명이 유효할 때만 True를 반환합니다.

    어떤 실패(필드 누락, 잘못된 키, 디코딩 오류, 검증 실패)도 예외로 올리지 않고 False로 처리합니다.
    """
    if code is None or not signature or not public_key:
        return False

    try:
        raw_signature = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        logger.debug("Plugin signature is not valid base64")
        return False

    try:
        key = load_pem_public_key(public_key.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        logger.debug("Cannot load plugin public key: %s", exc)
        return False

    data = code.encode("utf-8")
    try:
        # RSA는 PKCS#1 v1.5, EC는 ECDSA로 SHA-256 다이제스트를 검증한다.
        if isinstance(key, rsa.RSAPublicKey):
            key.verify(raw_signature, data, padding.PKCS1v15(), hashes.SHA256())
        elif isinstance(key, ec.EllipticCurvePublicKey):
            key.verify(raw_signature, data, ec.ECDSA(hashes.SHA256()))
        else:
            logger.debug("Unsupported public key type: %s", type(key).__name__)
            return False
    except InvalidSignature:
        return False
    except ValueError as exc:
        logger.debug("Signature verification error: %s", exc)
        return False
    return True

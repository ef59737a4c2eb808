from nacl.signing import VerifyKey
from nacl.exceptions import BadSignatureError

def verify_ed25519(public_key_bytes: bytes, message: bytes, signature: bytes) -> bool:
    try:
        vk = VerifyKey(public_key_bytes)
        vk.verify(message, signature)
        return True
    # A malformed key is as untrusted as a bad signature
    except (BadSignatureError, ValueError):
        return False

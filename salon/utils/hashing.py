"""
Password hashing helpers.

simple_hash() is the historical format (h_<base36>) stored by existing
accounts. It is a placeholder obfuscation, NOT a security primitive. Set
PASSWORD_HASH_SCHEME=scrypt to hash new credentials with werkzeug instead;
check_password() accepts both formats.
"""
from werkzeug.security import generate_password_hash, check_password_hash

LEGACY_PREFIX = 'h_'
_BASE36 = '0123456789abcdefghijklmnopqrstuvwxyz'


def _to_int32(value):
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _base36(number):
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def simple_hash(plain):
    """Deterministic 32-bit rolling hash of the UTF-16 code units of plain."""
    h = 0
    encoded = plain.encode('utf-16-le')
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + code)
    return LEGACY_PREFIX + _base36(abs(h))


def hash_password(plain, scheme='legacy'):
    """Hash a password for storage using the configured scheme."""
    if scheme == 'legacy':
        return simple_hash(plain)
    if scheme == 'scrypt':
        return generate_password_hash(plain, method='scrypt')
    raise ValueError(f"Unknown password hash scheme '{scheme}'")


def is_legacy_hash(stored):
    return bool(stored) and stored.startswith(LEGACY_PREFIX)


def check_password(stored, plain, legacy_digest=None):
    """
    Check plain against a stored hash of either format.

    legacy_digest lets callers scanning many accounts hash the candidate
    password once instead of per account.
    """
    if not stored:
        return False
    if is_legacy_hash(stored):
        digest = legacy_digest if legacy_digest is not None else simple_hash(plain)
        return stored == digest
    try:
        return check_password_hash(stored, plain)
    except ValueError:
        return False

"""
Hashing de passwords (argon2id). Solo se hashea al crear usuarios; no hay login.
"""
from argon2 import PasswordHasher
from argon2.low_level import Type


ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


def hash_password(password: str) -> str:
    return ph.hash(password)
